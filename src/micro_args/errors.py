"""
Exceptions raised by micro_args.

Every error derives from ArgsParserError, and also from the builtin exception
type that best describes it, so callers that already catch ValueError or
LookupError around their configuration code keep working.
"""

from typing import Sequence


def _join(items: Sequence[str]) -> str:
    return ", ".join(items)


class ArgsParserError(Exception):
    """Base class for all argument parsing errors."""


class DuplicateOptionError(ArgsParserError, ValueError):
    """An alias was registered for more than one option."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"Multiple definitions of {alias} not supported.")


class AmbiguousOptionError(ArgsParserError, ValueError):
    """An option's aliases appear more than once in the raw arguments."""

    def __init__(self, aliases: Sequence[str]) -> None:
        self.aliases = tuple(aliases)
        super().__init__(
            f"Option {_join(self.aliases)} was specified more than once."
        )


class MissingValueError(ArgsParserError, ValueError):
    """An option expecting a value is the last token of the arguments."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"Option {alias} has no argument")


class DanglingOptionError(ArgsParserError, ValueError):
    """The token following an option is itself a registered alias."""

    def __init__(self, alias: str, found: str) -> None:
        self.alias = alias
        self.found = found
        super().__init__(f"Option {alias} expects a value, but found opt '{found}'")


class MissingOptionError(ArgsParserError, LookupError):
    """A required option is absent from both the arguments and the environment."""

    def __init__(self, aliases: Sequence[str]) -> None:
        self.aliases = tuple(aliases)
        super().__init__(f"Could not find {_join(self.aliases)} in args.")


class ConversionError(ArgsParserError, ValueError):
    """The conversion function of an option rejected its raw value."""

    def __init__(self, source: str, value: str, reason: Exception) -> None:
        self.source = source
        self.value = value
        self.reason = reason
        self.__cause__ = reason
        super().__init__(f"Invalid value for {source}: '{value}' ({reason})")


class UninitializedParserError(ArgsParserError, RuntimeError):
    """validate() was called before any option was registered."""

    def __init__(self) -> None:
        super().__init__(
            "ArgsParser has not been used yet, but attempted to validate."
        )


class UnknownArgumentError(ArgsParserError, ValueError):
    """Flag-like tokens in the arguments match no registered alias."""

    def __init__(self, tokens: Sequence[str]) -> None:
        self.tokens = tuple(tokens)
        super().__init__(f"Unknown arguments: {_join(self.tokens)}")


class MissingArgumentError(ArgsParserError, ValueError):
    """Required options have none of their aliases in the arguments."""

    def __init__(self, aliases: Sequence[str]) -> None:
        self.aliases = tuple(aliases)
        super().__init__(f"Missing arguments: {_join(self.aliases)}")
