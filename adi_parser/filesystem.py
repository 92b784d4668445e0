"""Filesystem helpers for adi-parser."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import TextIO

from .constants import ADI_EXTENSIONS, DEFAULT_MAX_FILE_SIZE, DOCUMENT_ENCODING

MAX_FILE_SIZE_ENV_VAR = "ADI_PARSER_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the size limit set by `ADI_PARSER_MAX_FILE_SIZE`, or `default`.

    A blank variable counts as unset.

    Raises:
        ValueError: If the variable holds anything but a positive integer.
    """
    raw_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR, "").strip()
    if not raw_value:
        return default

    if not (raw_value.isascii() and raw_value.isdigit()):
        raise ValueError(
            f"{MAX_FILE_SIZE_ENV_VAR}={raw_value!r} is not a byte count (expected positive integer)"
        )
    max_size = int(raw_value)
    if max_size == 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got 0.")
    return max_size


def normalize_filepath(raw_path: str) -> Path:
    """Resolve and validate the path of an ADI file.

    Args:
        raw_path: User-supplied path (absolute, relative, or starting with ``~``).

    Returns:
        Path: Absolute path to the ADI file.

    Raises:
        ValueError: If the path does not exist, is not a regular file, or uses
            an unsupported extension.

    Examples:
        normalize_filepath("logs/contest.adi")
    """
    path = Path(raw_path).expanduser()

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    if resolved.suffix.lower() not in ADI_EXTENSIONS:
        error_message = f"{resolved} is not an ADI file.\n"
        error_message += f"Supported extensions are: {', '.join(ADI_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a regular file.

    Args:
        filepath: Path to the file.

    Returns:
        os.stat_result: File metadata.

    Raises:
        OSError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise OSError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise OSError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        OSError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise OSError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Newlines are passed through untranslated so CRLF sequences inside
    payloads keep their byte length.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        OSError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("log.adi")) as handle:
            content = handle.read()
    """
    try:
        return open(filepath, "r", encoding=DOCUMENT_ENCODING, newline="")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise OSError(error_message) from error
