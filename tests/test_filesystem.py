from __future__ import annotations

import os
from pathlib import Path

import pytest

from adi_parser.config import ADIConfig
from adi_parser.exceptions import ParseFileError
from adi_parser.filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
    safe_read,
)
from adi_parser.parser import load_document, parse_file, read_document


def _write(tmp_path: Path, name: str, content: bytes) -> Path:
    target = tmp_path / name
    target.write_bytes(content)
    return target


def test_get_max_file_size_uses_default(monkeypatch):
    monkeypatch.delenv("ADI_PARSER_MAX_FILE_SIZE", raising=False)
    assert get_max_file_size(default=123) == 123


def test_get_max_file_size_reads_environment(monkeypatch):
    monkeypatch.setenv("ADI_PARSER_MAX_FILE_SIZE", "2048")
    assert get_max_file_size(default=123) == 2048


def test_get_max_file_size_rejects_non_integer(monkeypatch):
    monkeypatch.setenv("ADI_PARSER_MAX_FILE_SIZE", "invalid")
    with pytest.raises(ValueError, match="expected positive integer"):
        get_max_file_size()


def test_get_max_file_size_rejects_non_positive(monkeypatch):
    monkeypatch.setenv("ADI_PARSER_MAX_FILE_SIZE", "0")
    with pytest.raises(ValueError, match="must be a positive integer"):
        get_max_file_size()


@pytest.mark.parametrize("value", ["-5", "1e3", "\u0663"])
def test_get_max_file_size_rejects_signed_and_non_ascii_values(monkeypatch, value: str):
    monkeypatch.setenv("ADI_PARSER_MAX_FILE_SIZE", value)
    with pytest.raises(ValueError, match="expected positive integer"):
        get_max_file_size()


def test_get_max_file_size_treats_blank_as_unset(monkeypatch):
    monkeypatch.setenv("ADI_PARSER_MAX_FILE_SIZE", "  ")
    assert get_max_file_size(default=123) == 123


def test_normalize_filepath_resolves_file(tmp_path: Path):
    target = _write(tmp_path, "log.ADI", b"<EOR>")

    assert normalize_filepath(str(target)) == target.resolve()


def test_normalize_filepath_accepts_adif_extension(tmp_path: Path):
    target = _write(tmp_path, "log.adif", b"<EOR>")

    assert normalize_filepath(str(target)).name == "log.adif"


def test_normalize_filepath_missing_file(tmp_path: Path):
    with pytest.raises(ValueError, match="does not exist"):
        normalize_filepath(str(tmp_path / "missing.adi"))


def test_normalize_filepath_rejects_directory(tmp_path: Path):
    folder = tmp_path / "folder.adi"
    folder.mkdir()
    with pytest.raises(ValueError, match="not a regular file"):
        normalize_filepath(str(folder))


def test_normalize_filepath_rejects_other_extensions(tmp_path: Path):
    target = _write(tmp_path, "log.txt", b"<EOR>")
    with pytest.raises(ValueError, match="not an ADI file"):
        normalize_filepath(str(target))


def test_normalize_filepath_handles_oserror(monkeypatch, tmp_path: Path):
    target = _write(tmp_path, "log.adi", b"<EOR>")
    original_resolve = Path.resolve

    def _raise_oserror(self, strict=False):
        if self == target:
            raise OSError("resolve boom")
        return original_resolve(self, strict=strict)

    monkeypatch.setattr(Path, "resolve", _raise_oserror)
    with pytest.raises(ValueError, match="resolve boom"):
        normalize_filepath(str(target))


def test_collect_file_stat_rejects_directory(tmp_path: Path):
    with pytest.raises(OSError, match="not a regular file"):
        collect_file_stat(tmp_path)


def test_collect_file_stat_missing_file(tmp_path: Path):
    with pytest.raises(OSError, match="Error accessing"):
        collect_file_stat(tmp_path / "missing.adi")


def test_enforce_file_size(tmp_path: Path):
    target = _write(tmp_path, "log.adi", b"<CALL:4>K1AB<EOR>")
    stat_result = os.stat(target)

    enforce_file_size(stat_result, stat_result.st_size, target)
    with pytest.raises(OSError, match="exceeds the maximum allowed size"):
        enforce_file_size(stat_result, stat_result.st_size - 1, target)


def test_safe_read_keeps_crlf(tmp_path: Path):
    target = _write(tmp_path, "log.adi", b"<ADDRESS:12>Aichi\r\nJapan")

    with safe_read(target) as handle:
        assert handle.read() == "<ADDRESS:12>Aichi\r\nJapan"


def test_safe_read_missing_file(tmp_path: Path):
    with pytest.raises(OSError, match="Error accessing"):
        safe_read(tmp_path / "missing.adi")


def test_read_document_rejects_invalid_utf8(tmp_path: Path):
    target = _write(tmp_path, "log.adi", b"<NAME:4>Jos\xe9")

    with pytest.raises(ParseFileError, match="Invalid UTF-8"):
        read_document(target)


def test_load_document_enforces_size_limit(tmp_path: Path):
    target = _write(tmp_path, "log.adi", b"<CALL:4>K1AB<EOR>")

    with pytest.raises(ParseFileError, match="maximum allowed size"):
        load_document(target, ADIConfig(max_file_size=4))


def test_load_document_honours_environment_limit(tmp_path: Path, monkeypatch):
    target = _write(tmp_path, "log.adi", b"<CALL:4>K1AB<EOR>")
    monkeypatch.setenv("ADI_PARSER_MAX_FILE_SIZE", "4")

    with pytest.raises(ParseFileError, match="maximum allowed size"):
        load_document(target)


def test_load_document_rejects_invalid_config(tmp_path: Path):
    target = _write(tmp_path, "log.adi", b"<EOR>")

    with pytest.raises(ParseFileError):
        load_document(target, ADIConfig(output_format="xml"))


def test_parse_file_collects_records(tmp_path: Path):
    target = _write(
        tmp_path,
        "log.adi",
        "Log\r\n<EOH>\r\n<CALL:4>K1AB<NAME:5>Jürg<EOR>\r\n".encode("utf-8"),
    )

    document = parse_file(target)

    assert document.comments == ["Log\r\n"]
    assert document.records == [{"CALL": "K1AB", "NAME": "Jürg"}]
