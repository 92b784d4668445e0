"""Ready-made delegates that collect parser output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import END_OF_HEADER, END_OF_RECORD
from .delegate import ADIParserDelegate
from .models import ADIDocument, DataSpecifier, EventType, ParseEvent

if TYPE_CHECKING:
    from .config import ADIConfig
    from .parser import ADIParser


class EventRecorder(ADIParserDelegate):
    """Record every callback as a `ParseEvent`.

    Attributes:
        events: Recorded events in the order the parser emitted them.

    Examples:
        recorder = EventRecorder()
        ADIParser("<EOR>", recorder).parse()
        [event.type for event in recorder.events]
    """

    def __init__(self):
        self.events: list[ParseEvent] = []

    def _record(self, parser: ADIParser, event_type: EventType, *args) -> None:
        self.events.append(ParseEvent(event_type, args, parser.line_number))

    def on_document_start(self, parser):
        self._record(parser, EventType.START_DOCUMENT)

    def on_document_end(self, parser):
        self._record(parser, EventType.END_DOCUMENT)

    def on_data_specifier_start(self, parser, field_name, data_length, data_type):
        self._record(parser, EventType.START_DATA_SPECIFIER, field_name, data_length, data_type)

    def on_data(self, parser, data):
        self._record(parser, EventType.DATA, data)

    def on_data_specifier_end(self, parser, field_name):
        self._record(parser, EventType.END_DATA_SPECIFIER, field_name)

    def on_comment(self, parser, comment):
        self._record(parser, EventType.COMMENT, comment)

    def on_parse_error(self, parser, error):
        self._record(parser, EventType.PARSE_ERROR, error)


class RecordCollector(ADIParserDelegate):
    """Group data-specifiers into an ADIF header and records.

    Fields seen before the end-of-header marker form the header; each
    end-of-record marker closes a record. Fields left open at the end of the
    document are kept as a final record. Marker names match case-insensitively.

    Args:
        uppercase_field_names: Store field names upper-cased, since ADIF field
            names are case-insensitive.
        header_marker: Field name ending the header.
        record_marker: Field name ending a record.

    Attributes:
        document: Collected comments, header, and records.
        specifiers: Every data-specifier in document order.
    """

    def __init__(
        self,
        uppercase_field_names: bool = True,
        header_marker: str = END_OF_HEADER,
        record_marker: str = END_OF_RECORD,
    ):
        self.uppercase_field_names = uppercase_field_names
        self.header_marker = header_marker.upper()
        self.record_marker = record_marker.upper()
        self.document = ADIDocument()
        self.specifiers: list[DataSpecifier] = []
        self._fields: dict[str, str] = {}
        self._pending: DataSpecifier | None = None

    @classmethod
    def from_config(cls, config: ADIConfig) -> RecordCollector:
        return cls(
            uppercase_field_names=config.uppercase_field_names,
            header_marker=config.header_marker,
            record_marker=config.record_marker,
        )

    def on_document_start(self, parser):
        self.document = ADIDocument()
        self.specifiers = []
        self._fields = {}
        self._pending = None

    def on_comment(self, parser, comment):
        self.document.comments.append(comment)

    def on_data_specifier_start(self, parser, field_name, data_length, data_type):
        self._pending = DataSpecifier(field_name, data_length, data_type)

    def on_data(self, parser, data):
        if self._pending is not None:
            self._pending.data = data

    def on_data_specifier_end(self, parser, field_name):
        specifier = self._pending or DataSpecifier(field_name)
        specifier.line_number = parser.line_number
        self.specifiers.append(specifier)
        self._pending = None

        marker = field_name.upper()
        if marker == self.header_marker:
            self.document.header.update(self._fields)
            self._fields = {}
        elif marker == self.record_marker:
            if self._fields:
                self.document.records.append(self._fields)
            self._fields = {}
        else:
            key = field_name.upper() if self.uppercase_field_names else field_name
            self._fields[key] = specifier.data or ""

    def on_document_end(self, parser):
        if self._fields:
            self.document.records.append(self._fields)
            self._fields = {}
