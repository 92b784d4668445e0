"""Data models for adi-parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class EventType(Enum):
    """Callbacks emitted by the parser, in the order they can occur.

    Attributes:
        START_DOCUMENT: Parsing began.
        COMMENT: Non-whitespace text found outside data-specifiers.
        START_DATA_SPECIFIER: A tag was matched.
        DATA: The payload of a data-specifier with a positive length.
        END_DATA_SPECIFIER: A data-specifier was fully consumed.
        END_DOCUMENT: Parsing finished.
        PARSE_ERROR: A fatal error was reported.
    """

    START_DOCUMENT = auto()
    COMMENT = auto()
    START_DATA_SPECIFIER = auto()
    DATA = auto()
    END_DATA_SPECIFIER = auto()
    END_DOCUMENT = auto()
    PARSE_ERROR = auto()


@dataclass(frozen=True)
class TagMatch:
    """One match of the tag grammar.

    Attributes:
        comment: Text between the search position and the tag.
        field_name: Field name inside the tag.
        data_length: Declared payload length in bytes, or None when absent.
        data_type: Single-letter data type indicator, or None when absent.
        start: Byte offset where the search started (start of the comment).
        end: Byte offset just past the closing ``>``.
    """

    comment: str
    field_name: str
    data_length: int | None
    data_type: str | None
    start: int
    end: int


@dataclass(frozen=True)
class ParseEvent:
    """A recorded parser callback.

    Attributes:
        type: Kind of callback.
        args: Arguments passed to the callback, excluding the parser.
        line_number: Parser line number when the callback fired.
    """

    type: EventType
    args: tuple = ()
    line_number: int = 1


@dataclass
class DataSpecifier:
    """A fully parsed data-specifier.

    Attributes:
        field_name: Field name of the data-specifier.
        data_length: Declared payload length, or None.
        data_type: Data type indicator, or None.
        data: Payload text, or None when no payload was read.
        line_number: Line on which the data-specifier ends.
    """

    field_name: str
    data_length: int | None = None
    data_type: str | None = None
    data: str | None = None
    line_number: int = 1


@dataclass
class ADIDocument:
    """Structured result of collecting an ADI document.

    Attributes:
        comments: Comment texts in document order.
        header: Fields found before the end-of-header marker.
        records: One mapping of field name to value per record.
    """

    comments: list[str] = field(default_factory=list)
    header: dict[str, str] = field(default_factory=dict)
    records: list[dict[str, str]] = field(default_factory=list)
