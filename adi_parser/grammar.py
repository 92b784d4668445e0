"""Tag grammar for ADI data-specifiers.

A tag has the form ``<FIELD_NAME[:LENGTH[:TYPE]]>``. Field names are made of
ADIF characters except comma, colon, angle brackets and curly brackets, and
must not start or end with a space. The grammar is pure ASCII, so it is
matched directly against the UTF-8 encoded document.
"""

from __future__ import annotations

import re
import sys

from .constants import DOCUMENT_ENCODING
from .models import TagMatch

# ADIF characters except comma, colon, angle-brackets and curly-brackets
FIELD_NAME_EDGE = rb"[\x21-\x2B\x2D-\x39\x3B\x3D\x3F-\x7A\x7C\x7E]"
FIELD_NAME_INNER = rb"[\x20-\x2B\x2D-\x39\x3B\x3D\x3F-\x7A\x7C\x7E]"
FIELD_NAME = FIELD_NAME_EDGE + rb"(?:" + FIELD_NAME_INNER + rb"*" + FIELD_NAME_EDGE + rb")?"

DATA_LENGTH = rb"[0-9]+"
DATA_TYPE = rb"[A-Za-z]"

# Longest digit run that can fit in sys.maxsize
MAX_LENGTH_DIGITS = len(str(sys.maxsize))

TAG_PATTERN = re.compile(
    rb"<(?P<field_name>" + FIELD_NAME + rb")"
    rb"(?::(?P<data_length>" + DATA_LENGTH + rb")(?::(?P<data_type>" + DATA_TYPE + rb"))?)?"
    rb">"
)

_OVERFLOW = object()


def _parse_length(digits: bytes | None) -> int | None | object:
    if digits is None:
        return None
    digits = digits.lstrip(b"0") or b"0"
    if len(digits) > MAX_LENGTH_DIGITS:
        return _OVERFLOW
    value = int(digits)
    return value if value <= sys.maxsize else _OVERFLOW


def find_tag(buffer: bytes, pos: int = 0) -> TagMatch | None:
    """Find the earliest tag at or after `pos`.

    Text between `pos` and the tag is returned as the comment of the match.

    Args:
        buffer: UTF-8 encoded document.
        pos: Byte offset where the search starts.

    Returns:
        TagMatch | None: The match, or None when no further tag exists.
            Candidates whose length exceeds `sys.maxsize` are skipped.

    Examples:
        find_tag(b"<CALL:6>JS2PBF").field_name  # "CALL"
        find_tag(b"no tags here")  # None
    """
    search_pos = pos
    while True:
        match = TAG_PATTERN.search(buffer, search_pos)
        if match is None:
            return None
        data_length = _parse_length(match.group("data_length"))
        if data_length is not _OVERFLOW:
            break
        # A length that does not fit a machine integer does not make a tag
        search_pos = match.start() + 1

    data_type = match.group("data_type")
    return TagMatch(
        comment=buffer[pos : match.start()].decode(DOCUMENT_ENCODING, errors="replace"),
        field_name=match.group("field_name").decode("ascii"),
        data_length=data_length,
        data_type=data_type.decode("ascii") if data_type is not None else None,
        start=pos,
        end=match.end(),
    )
