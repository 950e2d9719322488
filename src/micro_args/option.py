"""
Option definitions and the value resolution algorithm.

An Option is created when it is declared on an ArgsParser, but its value is
only resolved the first time it is read. Resolution itself is a pure function
of the raw arguments, an environment mapping and the set of registered aliases
(see Option.resolve); what happens when a required option is missing is
decided by the owning parser.
"""

import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Collection,
    Generic,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
)

from result import Err, Ok, Result

from .errors import (
    AmbiguousOptionError,
    ArgsParserError,
    ConversionError,
    DanglingOptionError,
    MissingOptionError,
    MissingValueError,
)

if TYPE_CHECKING:
    from .parser import ArgsParser

logger = logging.getLogger(__name__)

T = TypeVar("T")

Resolution = Result[Optional[T], ArgsParserError]

_UNRESOLVED = object()


def _identity(value: str) -> Any:
    return value


def _strict_bool(value: str) -> bool:
    """
    Parse a string to a boolean value strictly.

    Only accepts 'True', 'true', 'False', 'false', '1', '0' as valid values.
    Raises ValueError for any other string.
    """
    if value in ("True", "true", "1"):
        return True
    elif value in ("False", "false", "0"):
        return False
    else:
        raise ValueError(
            f"Invalid boolean value: '{value}'. Must be one of: True, true, False, false, 1, 0"
        )


class Option(Generic[T]):
    """
    A named command-line option whose value follows one of its aliases.

    Options are normally created through ArgsParser.option rather than
    directly. The value is looked up in this order: the token after any alias
    in the raw arguments, the environment variable (if configured and
    non-empty), the default supplier (if any), and finally None when the
    option is optional. A required option that is found nowhere is an error.

    Example:
        parser = ArgsParser(["--count", "3"])
        count = parser.option("-c", "--count", convert=int)
        name = parser.option("--name").default(lambda: "anonymous")

        count.value  # 3
        name.value   # "anonymous"
    """

    def __init__(
        self,
        parser: "ArgsParser",
        aliases: Sequence[str],
        help: Optional[str] = None,
        hidden: bool = False,
        env: Optional[str] = None,
        convert: Optional[Callable[[str], T]] = None,
    ) -> None:
        """
        Create an option bound to a parser.

        Args:
            parser: The parser whose raw arguments this option reads.
            aliases: One or more distinct option strings (e.g. '-f', '--foo').
            help: Help text shown under the aliases in ArgsParser.help().
            hidden: If True, the option is left out of the generated help.
            env: Name of an environment variable used when no alias is given.
            convert: Function turning the raw string into the option's value.

        Raises:
            ValueError: If no alias is given or an alias is repeated.
        """
        if not aliases:
            raise ValueError("An option needs at least one alias")
        if len(set(aliases)) != len(aliases):
            raise ValueError(f"Option aliases must be distinct: {', '.join(aliases)}")
        self.parser = parser
        self.aliases: tuple[str, ...] = tuple(aliases)
        self.help = help
        self.hidden = hidden
        self.env = env
        self.convert: Callable[[str], T] = convert or _identity
        self.allow_missing: bool = False
        self.default_supplier: Optional[Callable[[], T]] = None
        self._value: Any = _UNRESOLVED

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self.aliases)})"

    @property
    def primary_alias(self) -> str:
        return self.aliases[0]

    def optional(self) -> "Option[T]":
        """Allow the option to be absent, in which case its value is None."""
        self.allow_missing = True
        return self

    def default(self, supplier: Callable[[], T]) -> "Option[T]":
        """
        Use ``supplier()`` as the value when the option is absent.

        The supplier is only called when no value was found, either because
        the option appears neither in the arguments nor in the environment or
        because its conversion returned None. Setting a default makes the
        option optional.
        """
        self.default_supplier = supplier
        self.allow_missing = True
        return self

    @property
    def value(self) -> Optional[T]:
        """The resolved value, computed on first access and cached."""
        if self._value is _UNRESOLVED:
            self._value = self.parser.resolve(self)
        return self._value

    def positions(self, args: Sequence[str]) -> list[int]:
        """Indices of ``args`` whose token is exactly one of the aliases."""
        return [i for i, token in enumerate(args) if token in self.aliases]

    def resolve(
        self,
        args: Sequence[str],
        env: Mapping[str, str],
        known_aliases: Collection[str],
    ) -> Resolution:
        """
        Compute the value of this option without side effects.

        Args:
            args: The raw command-line arguments.
            env: Environment variables to fall back on.
            known_aliases: Every alias registered on the parser, used to detect
                an option directly followed by another option.

        Returns:
            Ok with the value (None for an absent optional option), or Err with
            the ArgsParserError describing why no value could be produced.
        """
        found = self.positions(args)
        if len(found) > 1:
            return Err(AmbiguousOptionError(self.aliases))
        if found:
            outcome = self._value_at(args, found[0], known_aliases)
        elif self.env is not None and env.get(self.env):
            outcome = self._convert(self.env_converter, env[self.env], self.env)
        elif not self.allow_missing:
            return Err(MissingOptionError(self.aliases))
        else:
            outcome = Ok(None)

        # a conversion yielding None counts as absent too
        if (
            isinstance(outcome, Ok)
            and outcome.ok_value is None
            and self.default_supplier is not None
        ):
            return Ok(self.default_supplier())
        return outcome

    @property
    def env_converter(self) -> Callable[[str], T]:
        return self.convert

    def _value_at(
        self, args: Sequence[str], index: int, known_aliases: Collection[str]
    ) -> Resolution:
        alias = args[index]
        if index + 1 >= len(args):
            return Err(MissingValueError(alias))
        raw = args[index + 1]
        if raw in known_aliases:
            return Err(DanglingOptionError(alias, raw))
        return self._convert(self.convert, raw, alias)

    def _convert(
        self, convert: Callable[[str], T], raw: str, source: str
    ) -> Resolution:
        try:
            return Ok(convert(raw))
        except Exception as e:
            logger.debug("Conversion of %r for %s failed: %s", raw, source, e)
            return Err(ConversionError(source, raw, e))


class Flag(Option[bool]):
    """
    A boolean option: present means True, absent means False.

    A flag never consumes the token that follows it. When it is read from an
    environment variable the value must be one of true/True/1 or
    false/False/0.
    """

    def __init__(
        self,
        parser: "ArgsParser",
        aliases: Sequence[str],
        help: Optional[str] = None,
        hidden: bool = False,
        env: Optional[str] = None,
    ) -> None:
        super().__init__(parser, aliases, help=help, hidden=hidden, env=env)
        self.default(lambda: False)

    @property
    def env_converter(self) -> Callable[[str], bool]:
        return _strict_bool

    def _value_at(
        self, args: Sequence[str], index: int, known_aliases: Collection[str]
    ) -> Resolution:
        return Ok(True)


class EnumeratedOption(Option[T]):
    """
    A group of mutually exclusive aliases, each standing for a fixed value.

    Example:
        mode = parser.enumerated_option({"--fast": Mode.FAST, "--slow": Mode.SLOW})

    Giving ``--fast`` resolves to Mode.FAST; giving both aliases is an
    AmbiguousOptionError, and giving neither is a MissingOptionError unless
    optional() or default() was applied.
    """

    def __init__(
        self,
        parser: "ArgsParser",
        choices: Mapping[str, T],
        help: Optional[str] = None,
        hidden: bool = False,
    ) -> None:
        if not choices:
            raise ValueError("An enumerated option needs at least one alias")
        super().__init__(parser, list(choices), help=help, hidden=hidden)
        self.choices: dict[str, T] = dict(choices)

    def _value_at(
        self, args: Sequence[str], index: int, known_aliases: Collection[str]
    ) -> Resolution:
        return Ok(self.choices[args[index]])
