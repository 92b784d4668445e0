"""Constants used across the adi-parser package."""

from __future__ import annotations

import re

# Line breaks counted by the parser: CRLF counts once, as do LF, VT, FF, CR,
# NEL, LINE SEPARATOR and PARAGRAPH SEPARATOR.
LINE_BREAK_PATTERN = re.compile("\r\n|[\n\v\f\r\x85\u2028\u2029]")
NON_WHITESPACE_PATTERN = re.compile(r"\S")

# Encoding of the document buffer; payload lengths count these bytes.
DOCUMENT_ENCODING = "utf-8"

ADI_EXTENSIONS = (".adi", ".adif")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

# ADIF end-of-header and end-of-record markers
END_OF_HEADER = "EOH"
END_OF_RECORD = "EOR"

OUTPUT_FORMATS = ("json", "jsonl", "events")
