"""
micro_args - a minimalist command-line argument parser.

This package resolves named options and boolean flags from a raw argument list
into typed values, with environment-variable fallback, defaults, optional
values, mutually exclusive enumerated options, generated help text and a
validation pass over the whole set of declared options.
"""

from .errors import (
    AmbiguousOptionError,
    ArgsParserError,
    ConversionError,
    DanglingOptionError,
    DuplicateOptionError,
    MissingArgumentError,
    MissingOptionError,
    MissingValueError,
    UninitializedParserError,
    UnknownArgumentError,
)
from .option import EnumeratedOption, Flag, Option
from .parser import ArgsConfig, ArgsParser, OnMissingRequired

__version__ = "1.0.0"
__all__ = [
    "AmbiguousOptionError",
    "ArgsConfig",
    "ArgsParser",
    "ArgsParserError",
    "ConversionError",
    "DanglingOptionError",
    "DuplicateOptionError",
    "EnumeratedOption",
    "Flag",
    "MissingArgumentError",
    "MissingOptionError",
    "MissingValueError",
    "OnMissingRequired",
    "Option",
    "UninitializedParserError",
    "UnknownArgumentError",
]
