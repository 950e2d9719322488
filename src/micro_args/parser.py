"""
ArgsParser - a minimalist command-line argument parser.

Options are of the form ``-f`` or ``--foo`` and are followed by a value; flags
have the same form but carry no value and are simply True when present. The
parser owns the raw argument list, a registry of declared options and the
policy applied when a required option cannot be found. Values are resolved
lazily, the first time an option is read.

One ArgsParser should be created per configuration object, since it records
every option that object declares. The argument list itself can be reused
across parsers.
"""

import enum
import logging
import os
import sys
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar, overload

from result import Err, Ok, Result

from .errors import (
    ArgsParserError,
    DuplicateOptionError,
    MissingArgumentError,
    MissingOptionError,
    UninitializedParserError,
    UnknownArgumentError,
)
from .option import EnumeratedOption, Flag, Option

logger = logging.getLogger(__name__)

T = TypeVar("T")
O = TypeVar("O", bound=Option[Any])


class OnMissingRequired(enum.Enum):
    """What ArgsParser.resolve does when a required option is missing."""

    RAISE_ERROR = "raise"
    PRINT_HELP_AND_EXIT = "exit"


class ArgsParser:
    """
    A registry of options over a frozen list of command-line arguments.

    Example:
        parser = ArgsParser(sys.argv[1:], name="deploy")
        key = parser.option("-k", "--key", help="Signing key").optional()
        retries = parser.option("--retries", convert=int).default(lambda: 3)
        verbose = parser.flag("-v", "--verbose")
        parser.validate()

        if verbose.value:
            print(key.value, retries.value)
    """

    def __init__(
        self,
        args: Optional[Sequence[str]] = None,
        name: str = "binary",
        on_missing: OnMissingRequired = OnMissingRequired.RAISE_ERROR,
        exit_on_missing: bool = False,
        env: Optional[Mapping[str, str]] = None,
        prefix_chars: str = "-",
    ) -> None:
        """
        Initialize the parser.

        Args:
            args: Raw command-line arguments. If None, uses sys.argv[1:].
            name: Program name shown in the usage line of help().
            on_missing: Policy applied when a required option is missing.
            exit_on_missing: Shorthand for
                on_missing=OnMissingRequired.PRINT_HELP_AND_EXIT.
            env: Environment variables to fall back on. If None, a snapshot
                of os.environ is taken.
            prefix_chars: Characters that mark a token as an option or flag
                when validating.
        """
        self.args: tuple[str, ...] = tuple(sys.argv[1:] if args is None else args)
        self.name = name
        self.on_missing = (
            OnMissingRequired.PRINT_HELP_AND_EXIT if exit_on_missing else on_missing
        )
        self.env: dict[str, str] = dict(os.environ if env is None else env)
        self.prefix_chars = prefix_chars
        self.registry: dict[str, Option[Any]] = {}
        self.options: list[Option[Any]] = []

    @property
    def exit_on_missing(self) -> bool:
        return self.on_missing is OnMissingRequired.PRINT_HELP_AND_EXIT

    def register(self, option: O) -> O:
        """
        Add an option to the registry under every one of its aliases.

        Args:
            option: The option to register.

        Returns:
            The same option, for chaining.

        Raises:
            DuplicateOptionError: If an alias already belongs to another
                option. The registry is left unchanged in that case.
        """
        if any(o is option for o in self.options):
            return option
        for alias in option.aliases:
            if alias in self.registry:
                raise DuplicateOptionError(alias)
        for alias in option.aliases:
            self.registry[alias] = option
        self.options.append(option)
        logger.debug("Registered %r", option)
        return option

    @overload
    def option(
        self,
        *aliases: str,
        help: Optional[str] = None,
        hidden: bool = False,
        env: Optional[str] = None,
    ) -> Option[str]: ...

    @overload
    def option(
        self,
        *aliases: str,
        help: Optional[str] = None,
        hidden: bool = False,
        env: Optional[str] = None,
        convert: Callable[[str], T],
    ) -> Option[T]: ...

    def option(
        self,
        *aliases: str,
        help: Optional[str] = None,
        hidden: bool = False,
        env: Optional[str] = None,
        convert: Optional[Callable[[str], Any]] = None,
    ) -> Option[Any]:
        """
        Declare an option that takes a value.

        Example:
            parser.option("--port", "-p", help="Port to bind", convert=int)

        Args:
            *aliases: One or more option strings (e.g. '-p', '--port').
            help: Help text for the option.
            hidden: If True, the option is not listed by help().
            env: Environment variable consulted when the option is absent.
            convert: Function from the raw string to the option's value.
                Defaults to returning the string unchanged.

        Returns:
            The registered Option.
        """
        return self.register(
            Option(self, aliases, help=help, hidden=hidden, env=env, convert=convert)
        )

    def flag(
        self,
        *aliases: str,
        help: Optional[str] = None,
        hidden: bool = False,
        env: Optional[str] = None,
    ) -> Flag:
        """Declare a boolean flag, True when any of its aliases is present."""
        return self.register(Flag(self, aliases, help=help, hidden=hidden, env=env))

    def enumerated_option(
        self,
        choices: Mapping[str, T],
        help: Optional[str] = None,
        hidden: bool = False,
    ) -> EnumeratedOption[T]:
        """
        Declare mutually exclusive aliases that each select a value.

        Args:
            choices: Mapping from alias to the value it stands for.
            help: Help text for the group.
            hidden: If True, the group is not listed by help().

        Returns:
            The registered EnumeratedOption.
        """
        return self.register(EnumeratedOption(self, choices, help=help, hidden=hidden))

    def resolve(self, option: Option[T]) -> Optional[T]:
        """
        Resolve an option against this parser's arguments and environment.

        Raises:
            ArgsParserError: If the option cannot be resolved. Under the
                PRINT_HELP_AND_EXIT policy, a missing required option prints
                the error and the help text to stderr and exits with status 1
                instead.
        """
        outcome = option.resolve(self.args, self.env, self.registry.keys())
        if isinstance(outcome, Ok):
            logger.debug("Resolved %r to %r", option, outcome.ok_value)
            return outcome.ok_value

        error = outcome.err_value
        if isinstance(error, MissingOptionError) and self.exit_on_missing:
            print(error, file=sys.stderr)
            print(self.help(), file=sys.stderr)
            sys.exit(1)
        raise error

    def help(self) -> str:
        """
        Build the help text for every visible option, in registration order.

        Each option is listed once with all of its aliases, followed by
        ``[env-var: NAME]`` if it has an environment fallback and
        ``(optional)`` if it may be absent. Help text goes on the next line.
        """
        lines = [f"Usage '{self.name} <options and flags> ...'"]
        for option in self.options:
            if option.hidden:
                continue
            line = f"  {', '.join(option.aliases)}"
            if option.env is not None:
                line += f" [env-var: {option.env}]"
            if option.allow_missing:
                line += " (optional)"
            lines.append(line)
            if option.help:
                lines.append(f"    {option.help}")
        return "\n".join(lines)

    def validate(self) -> None:
        """
        Check that no unknown flags were given and no required option is missing.

        This is only meaningful once every option that will ever be read from
        these arguments has been declared on this parser.

        Raises:
            UninitializedParserError: If no option has been registered.
            UnknownArgumentError: If flag-like tokens match no alias.
            MissingArgumentError: If required options have none of their
                aliases in the arguments. Checked after unknown arguments.
        """
        if not self.registry:
            raise UninitializedParserError()

        flag_tokens = [
            token
            for token in self.args
            if token and token[0] in self.prefix_chars
        ]
        unknown = [
            token for token in dict.fromkeys(flag_tokens) if token not in self.registry
        ]
        if unknown:
            raise UnknownArgumentError(unknown)

        given = set(self.args)
        missing = [
            option.primary_alias
            for option in self.options
            if not option.allow_missing and given.isdisjoint(option.aliases)
        ]
        if missing:
            raise MissingArgumentError(missing)

    def safe_validate(self) -> Result[None, str]:
        """
        Validate without raising.

        Returns:
            Result[None, str]:
                - Ok(None) if validation passes,
                - Err with the error message otherwise.
        """
        try:
            self.validate()
            return Ok(None)
        except ArgsParserError as e:
            return Err(str(e))


class ArgsConfig:
    """
    Base class for configuration objects built from an ArgsParser.

    Attributes holding an Option read through to the option's value, so a
    configuration class can declare its fields once and use them as plain
    values afterwards. Values are still resolved lazily, on first access.

    Example:
        class Main(ArgsConfig):
            def __init__(self, parser: ArgsParser) -> None:
                self.parser = parser
                self.foo = parser.option("-f", "--foo", help="help text")
                self.flag = parser.flag("--flag")

        main = Main(ArgsParser(["--foo", "bar"]))
        main.foo   # "bar"
        main.flag  # False
    """

    def __getattribute__(self, name: str) -> Any:
        attr = object.__getattribute__(self, name)
        if isinstance(attr, Option):
            return attr.value
        return attr

    def option_for(self, name: str) -> Option[Any]:
        """Return the Option behind an attribute, without resolving it."""
        attr = object.__getattribute__(self, name)
        if not isinstance(attr, Option):
            raise TypeError(f"Attribute '{name}' is not an option")
        return attr
