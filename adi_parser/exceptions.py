"""Package-specific exception types."""

from __future__ import annotations


class ADIParseError(Exception):
    """Base class for ADI parsing errors.

    Represents fatal conditions reported by the parser.
    """


class NoDelegateError(ADIParseError):
    """Raised when `ADIParser.parse` runs without a delegate.

    The parser stores this error in `ADIParser.parser_error` instead of
    raising it, and `parse` returns False.
    """

    def __init__(self):
        super().__init__(f"{type(self).__name__}: 'ADIParser.delegate' is not defined.")


class ParseFileError(ADIParseError):
    """Raised when an ADI file cannot be read, decoded, or parsed."""
