import pytest

from iconvkit.charsets import (
    IncompleteInputError,
    InvalidSequenceError,
    OutputTooBigError,
    UnsupportedEncodingError,
)
from iconvkit.converter import ConversionResult, Converter, convert, open_converter


SUCCESS_CASES = [
    ("ascii", b"ABC", "ascii", b"ABC"),
    ("ascii", b"ABC", "utf-16be", b"\x00\x41\x00\x42\x00\x43"),
    ("utf-16", b"\xFE\xFF\x01\x02", "utf-16be", b"\x01\x02"),
    ("utf-16", b"\xFF\xFE\x02\x01", "utf-16be", b"\x01\x02"),
    ("utf-32", b"\x00\x00\xFE\xFF\x00\x00\x01\x02", "utf-32be", b"\x00\x00\x01\x02"),
    ("utf-32", b"\xFF\xFE\x00\x00\x02\x01\x00\x00", "utf-32be", b"\x00\x00\x01\x02"),
    ("utf-16", b"\xFE\xFF\x00\x01", "utf-8", b"\x01"),
    ("utf-8", b"\x01", "utf-16", b"\xFE\xFF\x00\x01"),
    ("utf-8", b"\x01", "utf-32", b"\x00\x00\xFE\xFF\x00\x00\x00\x01"),
    ("utf-16be", b"\xFE\xFF\x01\x02", "utf-16be", b"\xFE\xFF\x01\x02"),
    ("utf-16le", b"\xFF\xFE\x02\x01", "utf-16be", b"\xFE\xFF\x01\x02"),
    ("utf-32be", b"\x00\x00\xFE\xFF\x00\x00\x01\x02", "utf-32be",
     b"\x00\x00\xFE\xFF\x00\x00\x01\x02"),
    ("utf-32le", b"\xFF\xFE\x00\x00\x02\x01\x00\x00", "utf-32be",
     b"\x00\x00\xFE\xFF\x00\x00\x01\x02"),
    ("utf-16be", b"\xFE\xFF\x00\x01", "utf-8", b"\xEF\xBB\xBF\x01"),
    ("utf-8", b"\xEF\xBB\xBF\x01", "utf-8", b"\xEF\xBB\xBF\x01"),
    ("utf-16be", b"\x01\x02", "utf-16le", b"\x02\x01"),
    ("utf-16le", b"\x02\x01", "utf-16be", b"\x01\x02"),
    ("utf-16be", b"\xFE\xFF", "utf-16le", b"\xFF\xFE"),
    ("utf-16le", b"\xFF\xFE", "utf-16be", b"\xFE\xFF"),
    ("utf-32be", b"\x00\x00\x03\x04", "utf-32le", b"\x04\x03\x00\x00"),
    ("utf-32le", b"\x04\x03\x00\x00", "utf-32be", b"\x00\x00\x03\x04"),
    ("utf-32be", b"\x00\x00\xFF\xFF", "utf-16be", b"\xFF\xFF"),
    ("utf-16be", b"\xFF\xFF", "utf-32be", b"\x00\x00\xFF\xFF"),
    ("utf-32be", b"\x00\x01\x00\x00", "utf-16be", b"\xD8\x00\xDC\x00"),
    ("utf-16be", b"\xD8\x00\xDC\x00", "utf-32be", b"\x00\x01\x00\x00"),
    ("utf-32be", b"\x00\x10\xFF\xFF", "utf-16be", b"\xDB\xFF\xDF\xFF"),
    ("utf-16be", b"\xDB\xFF\xDF\xFF", "utf-32be", b"\x00\x10\xFF\xFF"),
    ("utf-8", b"\xE3\x81\x82", "utf-16be", b"\x30\x42"),
    ("utf-16be", b"\xFF\x5E", "cp932", b"\x81\x60"),
    ("utf-16be", b"\x30\x1C", "cp932", b"\x81\x60"),
    ("utf-16be", b"\xFF\x5E", "cp932//nocompat", b"\x81\x60"),
    ("euc-jp", b"\xA4\xA2", "utf-16be", b"\x30\x42"),
    ("cp932", b"\x81\x60", "iso-2022-jp", b"\x1B\x24\x42\x21\x41\x1B\x28\x42"),
    ("UTF-16BE", b"\xFF\x5E", "iso-2022-jp", b"\x1B\x24\x42\x21\x41\x1B\x28\x42"),
    ("UTF-16BE", b"\x30\x42\x30\x44", "iso-2022-jp",
     b"\x1B\x24\x42\x24\x22\x24\x24\x1B\x28\x42"),
    ("iso-2022-jp", b"\x1B\x24\x42\x21\x41\x1B\x28\x42", "UTF-16BE", b"\xFF\x5E"),
    ("UTF-16BE", b"\xFF\x41", "iso-8859-1//translit", b"a"),
    ("UTF-16BE", b"\x30\x42", "ascii//translit", b"?"),
]


@pytest.mark.parametrize("fromcode, data, tocode, expected", SUCCESS_CASES)
def test_convert_success(fromcode, data, tocode, expected):
    assert convert(data, tocode, fromcode) == expected


ERROR_CASES = [
    ("ascii", b"\x80", "ascii", b"", InvalidSequenceError),
    ("ascii", b"\xFF", "ascii", b"", InvalidSequenceError),
    ("utf-32be", b"\x00\x11\x00\x00", "utf-16be", b"", InvalidSequenceError),
    ("utf-16be", b"\xDB\xFF\xE0\x00", "utf-32be", b"", InvalidSequenceError),
    ("utf-8", b"\xE3", "utf-16be", b"", IncompleteInputError),
    ("utf-16be", b"\x30\x1C", "cp932//nocompat", b"", InvalidSequenceError),
    ("euc-jp", b"\xA4\xA2\xA4", "utf-16be", b"\x30\x42", IncompleteInputError),
    ("euc-jp", b"\xA4\xA2\xFF\xFF", "utf-16be", b"\x30\x42", InvalidSequenceError),
    ("UTF-16BE", b"\x30\x1C", "iso-2022-jp//nocompat", b"", InvalidSequenceError),
    ("UTF-16BE", b"\xFF\x41", "iso-8859-1", b"", InvalidSequenceError),
    ("UTF-16BE", b"\x30\x42", "ascii", b"", InvalidSequenceError),
]


def test_partial_consumed_points_at_failing_character():
    converter = Converter("utf-16be", "euc-jp")
    with pytest.raises(IncompleteInputError) as info:
        converter.convert(b"\xA4\xA2\xA4")
    assert info.value.partial.consumed == 2


IGNORE_CASES = [
    (b"\xFF A \xFF B", b" A  B"),
    (b"\xEF\xBC\xA1 A \xEF\xBC\xA2 B", b" A  B"),
    (b"\xEF\x01 A \xEF\x02 B", b"\x01 A \x02 B"),
]


@pytest.mark.parametrize("data, expected", IGNORE_CASES)
def test_ignore_drops_bad_sequences(data, expected):
    assert convert(data, "ascii//ignore", "UTF-8") == expected


@pytest.mark.parametrize("data, expected", IGNORE_CASES)
def test_ignore_counts_skipped_sequences(data, expected):
    with open_converter("ascii//ignore", "UTF-8") as converter:
        result = converter.convert(data)
    assert result == ConversionResult(expected, len(data), 2)


def test_output_limit_raises_with_partial():
    converter = Converter("ascii", "utf-8")
    with pytest.raises(OutputTooBigError) as info:
        converter.convert(b"ABC", 2)
    assert info.value.partial == ConversionResult(b"AB", 2, 0)


def test_resume_after_output_limit():
    converter = Converter("ascii", "utf-8")
    with pytest.raises(OutputTooBigError) as info:
        converter.convert(b"ABC", 2)
    rest = converter.convert(b"ABC"[info.value.partial.consumed:])
    assert rest.output == b"C"


def test_zero_limit_is_too_big():
    converter = Converter("utf-16be", "utf-8")
    with pytest.raises(OutputTooBigError):
        converter.convert(b"A", 0)


def test_shift_state_carries_between_calls():
    with Converter("iso-2022-jp", "UTF-16BE") as converter:
        first = converter.convert(b"\x30\x42").output
        second = converter.convert(b"\x30\x44").output
        tail = converter.flush()
    assert (first, second, tail) == (b"\x1B\x24\x42\x24\x22", b"\x24\x24", b"\x1B\x28\x42")


def test_flush_limit_too_small():
    converter = Converter("iso-2022-jp", "UTF-16BE")
    converter.convert(b"\x30\x42")
    with pytest.raises(OutputTooBigError):
        converter.flush(2)
    assert converter.flush() == b"\x1B\x28\x42"


def test_flush_resets_bom_state():
    converter = Converter("utf-16", "utf-8")
    first = converter.convert(b"\x01").output
    assert converter.flush() == b""
    second = converter.convert(b"\x01").output
    assert first == second == b"\xFE\xFF\x00\x01"


def test_reset_rewrites_bom():
    converter = Converter("utf-32", "utf-8")
    converter.convert(b"A")
    converter.reset()
    assert converter.convert(b"B").output == b"\x00\x00\xFE\xFF\x00\x00\x00\x42"


def test_bom_consumed_before_error():
    converter = Converter("utf-32be", "utf-16")
    with pytest.raises(InvalidSequenceError) as info:
        converter.convert(b"\xFE\xFF\xDC\x00")
    assert info.value.partial == ConversionResult(b"", 2, 0)


def test_unknown_encoding():
    with pytest.raises(UnsupportedEncodingError):
        open_converter("utf-8", "no-such-encoding")


def test_closed_converter_rejects_use():
    converter = Converter("ascii", "ascii")
    converter.close()
    assert converter.closed is True
    with pytest.raises(ValueError):
        converter.convert(b"A")


def test_context_manager_closes():
    with Converter("ascii", "ascii") as converter:
        assert converter.convert(b"xy").output == b"xy"
    assert converter.closed is True


def test_empty_input():
    assert convert(b"", "utf-16", "utf-8") == b""