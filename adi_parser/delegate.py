"""Delegate interface for the event-driven ADI parser."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .parser import ADIParser


class ADIParserDelegate:
    """Receives messages about the content of a parsed ADI document.

    Every method is a no-op; subclasses override only the callbacks they need.
    Each callback receives the parser first, so `parser.line_number` can be
    read while the document is being processed.

    Examples:
        class FieldPrinter(ADIParserDelegate):
            def on_data(self, parser, data):
                print(parser.line_number, data)
    """

    def on_document_start(self, parser: ADIParser) -> None:
        """Sent when the parser begins parsing a document."""

    def on_document_end(self, parser: ADIParser) -> None:
        """Sent when the parser has completed parsing a document."""

    def on_data_specifier_start(
        self,
        parser: ADIParser,
        field_name: str,
        data_length: int | None,
        data_type: str | None,
    ) -> None:
        """Sent when the parser matches a data-specifier tag.

        Args:
            parser: The parser object.
            field_name: Field name of the data-specifier.
            data_length: Declared payload length in bytes, or None.
            data_type: Data type indicator, or None.
        """

    def on_data(self, parser: ADIParser, data: str) -> None:
        """Sent with the payload of a data-specifier whose length is positive."""

    def on_data_specifier_end(self, parser: ADIParser, field_name: str) -> None:
        """Sent when a data-specifier, including its payload, has been consumed."""

    def on_comment(self, parser: ADIParser, comment: str) -> None:
        """Sent with text outside data-specifiers that is not only whitespace."""

    def on_parse_error(self, parser: ADIParser, error: Exception) -> None:
        """Sent when the parser encounters a fatal error."""
