import io
import sys

import pytest

from iconvkit.aliases import alias_names
from iconvkit.cli import main


def _convert(tmp_path, data, fromcode, tocode, extra=()):
    src = tmp_path / "in.bin"
    dst = tmp_path / "out.bin"
    src.write_bytes(data)
    code = main([*extra, "-f", fromcode, "-t", tocode, "--output", str(dst), str(src)])
    return code, dst.read_bytes() if dst.exists() else b""


def test_list_prints_alias_table(capsys):
    assert main(["-l"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == alias_names()


def test_missing_target_prints_usage(capsys):
    assert main(["-f", "ascii"]) == 0
    assert "usage:" in capsys.readouterr().out


def test_utf8_to_utf16be(tmp_path):
    code, out = _convert(tmp_path, b"\xE3\x81\x82", "utf-8", "utf-16be")
    assert code == 0
    assert out == b"\x30\x42"


def test_iso2022jp_output_is_flushed(tmp_path):
    code, out = _convert(tmp_path, b"\x30\x42\x30\x44", "UTF-16BE", "iso-2022-jp")
    assert code == 0
    assert out == b"\x1B\x24\x42\x24\x22\x24\x24\x1B\x28\x42"


def test_ignore_flag_drops_bad_input(tmp_path):
    code, out = _convert(tmp_path, b"\xFF A \xFF B", "UTF-8", "ascii", extra=["-c"])
    assert code == 0
    assert out == b" A  B"


def test_invalid_sequence_fails(tmp_path, capsys):
    code, out = _convert(tmp_path, b"\x80", "ascii", "ascii")
    assert code == 1
    assert out == b""
    assert "conversion error" in capsys.readouterr().err


def test_incomplete_input_at_end_fails(tmp_path):
    code, out = _convert(tmp_path, b"\xE3", "utf-8", "utf-16be")
    assert code == 1
    assert out == b""


def test_output_before_error_is_written(tmp_path):
    code, out = _convert(tmp_path, b"AB\x80", "ascii", "ascii")
    assert code == 1
    assert out == b"AB"


def test_unknown_encoding_fails(tmp_path, capsys):
    code, _ = _convert(tmp_path, b"ABC", "no-such-encoding", "ascii")
    assert code == 1
    assert "iconv_open error" in capsys.readouterr().err


def test_missing_input_file(tmp_path, capsys):
    missing = tmp_path / "missing.bin"
    assert main(["-f", "ascii", "-t", "ascii", str(missing)]) == 1
    assert "cannot open" in capsys.readouterr().err


def test_reads_standard_input(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"ABC")))
    dst = tmp_path / "out.bin"
    assert main(["-f", "ascii", "-t", "utf-16be", "--output", str(dst)]) == 0
    assert dst.read_bytes() == b"\x00\x41\x00\x42\x00\x43"


@pytest.mark.parametrize("count", [1, 2731, 5000])
def test_multibyte_across_chunks_round_trip(tmp_path, count):
    text = "\u3042" * count + "z"
    code, out = _convert(tmp_path, text.encode("utf-8"), "utf-8", "utf-16be")
    assert code == 0
    assert out.decode("utf-16-be") == text