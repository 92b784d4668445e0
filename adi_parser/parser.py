"""Event-driven parsing of ADI documents."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .collector import RecordCollector
from .config import ADIConfig, ConfigError, validate_config
from .constants import DOCUMENT_ENCODING, LINE_BREAK_PATTERN, NON_WHITESPACE_PATTERN
from .delegate import ADIParserDelegate
from .exceptions import NoDelegateError, ParseFileError
from .filesystem import collect_file_stat, enforce_file_size, get_max_file_size, safe_read
from .grammar import find_tag
from .models import ADIDocument

logger = logging.getLogger(__name__)


def count_line_breaks(text: str) -> int:
    """Count line breaks in `text`, treating CRLF as a single break.

    Examples:
        count_line_breaks("a\\r\\nb\\nc")  # 2
    """
    return sum(1 for _ in LINE_BREAK_PATTERN.finditer(text))


class ADIParser:
    """An event-driven parser of ADI documents.

    The parser scans the document for data-specifier tags and reports what it
    finds to its delegate. Payload lengths are counted in UTF-8 bytes, so a
    CRLF inside a payload counts as two characters.

    One instance is bound to one document; calling `parse` again re-scans the
    same text from the start. Instances are not safe to share between threads
    while parsing.

    Args:
        string: Text of an ADI document.
        delegate: Object that receives messages about the parsing process.

    Examples:
        parser = ADIParser("<CALL:6>JS2PBF<EOR>", RecordCollector())
        parser.parse()  # True
    """

    def __init__(self, string: str, delegate: ADIParserDelegate | None = None):
        self._buffer = string.encode(DOCUMENT_ENCODING)
        self.delegate = delegate
        self._line_number = 0
        self._parser_error: Exception | None = None

    @classmethod
    def from_path(
        cls, path: str | os.PathLike, delegate: ADIParserDelegate | None = None
    ) -> ADIParser | None:
        """Create a parser from the contents of an ADI file.

        Args:
            path: Path to an ADI document encoded in UTF-8.
            delegate: Object that receives messages about the parsing process.

        Returns:
            ADIParser | None: The parser, or None when the file cannot be read
                or is not valid UTF-8.
        """
        try:
            string = read_document(Path(path))
        except ParseFileError as error:
            logger.debug("Cannot create parser: %s", error)
            return None
        return cls(string, delegate)

    @property
    def line_number(self) -> int:
        """Line number of the document position being processed."""
        return self._line_number

    @property
    def parser_error(self) -> Exception | None:
        """Error that stopped the last parse, if any."""
        return self._parser_error

    def parse(self) -> bool:
        """Start the event-driven parsing operation.

        Returns:
            bool: True when parsing succeeds; False when no delegate is set, in
                which case `parser_error` holds a `NoDelegateError` and no
                callback is sent.
        """
        delegate = self.delegate
        if delegate is None:
            self._parser_error = NoDelegateError()
            logger.warning("%s", self._parser_error)
            return False

        self._parser_error = None
        self._line_number = 1
        delegate.on_document_start(self)

        buffer = self._buffer
        cursor = 0
        while True:
            tag = find_tag(buffer, cursor)
            if tag is None:
                # Trailing text after the last tag is not reported
                break

            # Tag characters never include line breaks
            self._line_number += count_line_breaks(tag.comment)

            if NON_WHITESPACE_PATTERN.search(tag.comment):
                delegate.on_comment(self, tag.comment)

            delegate.on_data_specifier_start(self, tag.field_name, tag.data_length, tag.data_type)
            cursor = tag.end

            if tag.data_length:
                payload_end = min(cursor + tag.data_length, len(buffer))
                data = buffer[cursor:payload_end].decode(DOCUMENT_ENCODING, errors="replace")
                self._line_number += count_line_breaks(data)
                delegate.on_data(self, data)
                cursor = payload_end

            delegate.on_data_specifier_end(self, tag.field_name)

        delegate.on_document_end(self)
        logger.debug("Parsed ADI document ending at line %d", self._line_number)
        return True


def read_document(filepath: Path) -> str:
    """Read an ADI document as UTF-8 text.

    Raises:
        ParseFileError: If the file cannot be read or decoded.
    """
    try:
        with safe_read(filepath) as file:
            return file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ParseFileError(error_message) from error
    except OSError as error:
        raise ParseFileError(str(error)) from error


def parse_adi(content: str, config: ADIConfig | None = None) -> ADIDocument:
    """Parse ADI content into a header and records.

    Args:
        content: The ADI document text.
        config: Configuration controlling field-name case and record markers.
            Defaults to a new `ADIConfig` when omitted.

    Returns:
        ADIDocument: Comments, header fields, and records found in the content.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        parse_adi("<CALL:6>JS2PBF<BAND:2>2M<EOR>").records  # [{"CALL": "JS2PBF", "BAND": "2M"}]
    """
    config = config or ADIConfig()
    validate_config(config)

    collector = RecordCollector.from_config(config)
    ADIParser(content, collector).parse()
    return collector.document


def load_document(filepath: Path, config: ADIConfig | None = None) -> str:
    """Read an ADI file after checking configuration and size limits.

    Args:
        filepath: Path to the ADI file.
        config: Configuration providing the size limit; defaults to a new
            `ADIConfig` when omitted. `ADI_PARSER_MAX_FILE_SIZE` overrides it.

    Returns:
        str: The document text.

    Raises:
        ParseFileError: If the configuration is invalid, the file exceeds the
            size limit, or the file cannot be read or decoded.
    """
    config = config or ADIConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ParseFileError(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        enforce_file_size(collect_file_stat(filepath), max_file_size, filepath)
    except (OSError, ValueError) as error:
        raise ParseFileError(str(error)) from error

    return read_document(filepath)


def parse_file(filepath: Path, config: ADIConfig | None = None) -> ADIDocument:
    """Parse an ADI file into a header and records.

    Args:
        filepath: Path to the ADI file.
        config: Configuration controlling limits and collection; defaults to a
            new `ADIConfig` when omitted.

    Returns:
        ADIDocument: Comments, header fields, and records found in the file.

    Raises:
        ParseFileError: If the configuration is invalid, the file exceeds the
            size limit, or the file cannot be read or decoded.

    Examples:
        document = parse_file(Path("log.adi"))
    """
    config = config or ADIConfig()
    return parse_adi(load_document(filepath, config), config)
