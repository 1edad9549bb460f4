"""Character sets that convert one character at a time.

A :class:`Charset` turns the bytes at the front of a buffer into one
character (``decode_char``) and one character into bytes
(``encode_char``).  Stateful encodings keep their shift state between
calls.  A call that fails leaves that state as it was.
"""

from __future__ import annotations

import codecs
import unicodedata
from typing import Any, Optional, Union

from .aliases import (
    CP_UTF16BE,
    CP_UTF16LE,
    CP_UTF32BE,
    CP_UTF32LE,
    EncodingSpec,
    parse_encoding,
)


class ConversionError(Exception):
    """Base class for conversion failures."""


class InvalidSequenceError(ConversionError, ValueError):
    """Input or output holds a sequence the encoding cannot represent."""


class IncompleteInputError(ConversionError, ValueError):
    """The input ends in the middle of a multibyte sequence."""


class OutputTooBigError(ConversionError):
    """The output does not fit in the room that was given."""


class UnsupportedEncodingError(ConversionError, LookupError):
    """The encoding name cannot be resolved or has no implementation."""


# Unicode substitutions: (windows side, other side, applies on input).
# On output the first value is replaced by the second; on input, where
# allowed, the second is replaced by the first.
_CP932_COMPAT = (
    (0x00A5, 0x005C, False),
    (0x203E, 0x007E, False),
    (0x2014, 0x2015, False),
    (0x301C, 0xFF5E, False),
    (0x2016, 0x2225, False),
    (0x2212, 0xFF0D, False),
    (0x00A2, 0xFFE0, False),
    (0x00A3, 0xFFE1, False),
    (0x00AC, 0xFFE2, False),
)

_CP20932_COMPAT = (
    (0x00A5, 0x005C, False),
    (0x203E, 0x007E, False),
    (0x2014, 0x2015, False),
    (0xFF5E, 0x301C, True),
    (0x2225, 0x2016, True),
    (0xFF0D, 0x2212, True),
    (0xFFE0, 0x00A2, True),
    (0xFFE1, 0x00A3, True),
    (0xFFE2, 0x00AC, True),
)

_COMPAT_TABLES = {
    932: _CP932_COMPAT,
    20932: _CP20932_COMPAT,
    51932: _CP932_COMPAT,
    50220: _CP932_COMPAT,
    50221: _CP932_COMPAT,
    50222: _CP932_COMPAT,
}


class Charset:
    """One side of a conversion: an encoding with its options and state."""

    def __init__(self, spec: EncodingSpec, codec: Optional[str] = None) -> None:
        self.spec = spec
        self.codepage = spec.codepage
        self.codec = codec
        self._compat = _COMPAT_TABLES.get(spec.codepage) if spec.use_compat else None
        self._mode: Any = self._initial_mode()

    @property
    def translit(self) -> bool:
        return self.spec.translit

    @property
    def ignore(self) -> bool:
        return self.spec.ignore

    def reset(self) -> None:
        """Return to the initial shift and byte-order state."""
        self._mode = self._initial_mode()

    def decode_char(self, data: bytes) -> tuple[str, int]:
        """Decode the first character of ``data``.

        Returns the text and the number of bytes consumed; the text is
        empty when only a byte-order mark or a shift sequence was read.
        """
        data = bytes(data)
        if not data:
            raise IncompleteInputError("no input")
        text, used, mode = self._decode(data)
        self._mode = mode
        if text and self._compat and len(text) == 1:
            code = ord(text)
            for windows, other, inbound in self._compat:
                if inbound and other == code:
                    text = chr(windows)
                    break
        return text, used

    def encode_char(self, text: str, limit: Optional[int] = None) -> bytes:
        """Encode one character, failing if more than ``limit`` bytes result."""
        if limit is not None and limit <= 0:
            raise OutputTooBigError("no room for output")
        if self._compat and len(text) == 1:
            code = ord(text)
            for windows, other, _ in self._compat:
                if windows == code:
                    text = chr(other)
                    break
        out, mode = self._encode(text)
        if limit is not None and len(out) > limit:
            raise OutputTooBigError("output does not fit")
        self._mode = mode
        return out

    def flush(self, limit: Optional[int] = None) -> bytes:
        """Bytes that return the output to its initial state."""
        out, mode = self._flush()
        if limit is not None and len(out) > limit:
            raise OutputTooBigError("output does not fit")
        self._mode = mode
        return out

    def _initial_mode(self) -> Any:
        return None

    def _flush(self) -> tuple[bytes, Any]:
        return b"", self._initial_mode()

    def _decode(self, data: bytes) -> tuple[str, int, Any]:
        decoder = codecs.getincrementaldecoder(self.codec)()
        for position in range(len(data)):
            try:
                out = decoder.decode(data[position:position + 1])
            except UnicodeDecodeError as exc:
                raise InvalidSequenceError(str(exc)) from None
            if out:
                return out, position + 1, self._mode
        raise IncompleteInputError("truncated multibyte sequence")

    def _encode_with(self, codec: str, text: str) -> bytes:
        try:
            return text.encode(codec)
        except UnicodeEncodeError:
            if not self.translit:
                raise InvalidSequenceError(f"cannot encode {text!r}") from None
        try:
            return unicodedata.normalize("NFKC", text).encode(codec)
        except UnicodeEncodeError:
            return "?".encode(codec)

    def _encode(self, text: str) -> tuple[bytes, Any]:
        return self._encode_with(self.codec, text), self._mode


class _EucJpCharset(Charset):
    def _decode(self, data: bytes) -> tuple[str, int, Any]:
        lead = data[0]
        if lead < 0x80:
            length = 1
        elif lead == 0x8E:
            if len(data) < 2:
                raise IncompleteInputError("truncated sequence")
            if not 0xA1 <= data[1] <= 0xDF:
                raise InvalidSequenceError("invalid JIS X 0201 sequence")
            length = 2
        elif lead == 0x8F:
            if len(data) < 3:
                raise IncompleteInputError("truncated sequence")
            if not (0xA1 <= data[1] <= 0xFE and 0xA1 <= data[2] <= 0xFE):
                raise InvalidSequenceError("invalid JIS X 0212 sequence")
            length = 3
        else:
            if len(data) < 2:
                raise IncompleteInputError("truncated sequence")
            if not (0xA1 <= lead <= 0xFE and 0xA1 <= data[1] <= 0xFE):
                raise InvalidSequenceError("invalid JIS X 0208 sequence")
            length = 2
        try:
            text = data[:length].decode(self.codec)
        except UnicodeDecodeError as exc:
            raise InvalidSequenceError(str(exc)) from None
        return text, length, self._mode


class _UnicodeCharset(Charset):
    """UTF-16 or UTF-32 with optional byte-order mark handling."""

    def __init__(self, spec: EncodingSpec, width: int, little: bool) -> None:
        self._width = width
        self._little = little
        super().__init__(spec)

    def _initial_mode(self) -> Any:
        return (False, False)  # (bom seen or written, byte order swapped)

    def _unit(self, chunk: bytes, swapped: bool) -> int:
        little = self._little != swapped
        return int.from_bytes(chunk, "little" if little else "big")

    def _decode(self, data: bytes) -> tuple[str, int, Any]:
        bom_done, swapped = self._mode
        width = self._width
        if len(data) < width:
            raise IncompleteInputError("truncated code unit")
        unit = self._unit(data[:width], swapped)
        if self.spec.use_bom and not bom_done:
            bom_done = True
            reversed_bom = 0xFFFE if width == 2 else 0xFFFE0000
            if unit == reversed_bom:
                return "", width, (True, True)
            if unit == 0xFEFF:
                return "", width, (True, swapped)
        mode = (bom_done, swapped)
        if width == 4:
            if 0xD800 <= unit <= 0xDFFF or unit > 0x10FFFF:
                raise InvalidSequenceError("invalid code point")
            return chr(unit), 4, mode
        if 0xDC00 <= unit <= 0xDFFF:
            raise InvalidSequenceError("unpaired low surrogate")
        if 0xD800 <= unit <= 0xDBFF:
            if len(data) < 4:
                raise IncompleteInputError("truncated surrogate pair")
            low = self._unit(data[2:4], swapped)
            if not 0xDC00 <= low <= 0xDFFF:
                raise InvalidSequenceError("unpaired high surrogate")
            code = ((unit & 0x3FF) << 10) + (low & 0x3FF) + 0x10000
            return chr(code), 4, mode
        return chr(unit), 2, mode

    def _encode(self, text: str) -> tuple[bytes, Any]:
        order = "little" if self._little else "big"
        out = bytearray()
        bom_done, swapped = self._mode
        if self.spec.use_bom and not bom_done:
            out += (0xFEFF).to_bytes(self._width, order)
            bom_done = True
        for char in text:
            code = ord(char)
            if self._width == 4:
                out += code.to_bytes(4, order)
            elif code < 0x10000:
                out += code.to_bytes(2, order)
            else:
                code -= 0x10000
                out += (0xD800 | (code >> 10)).to_bytes(2, order)
                out += (0xDC00 | (code & 0x3FF)).to_bytes(2, order)
        return bytes(out), (bom_done, swapped)


_CS_ASCII = 0
_CS_ROMAN = 1
_CS_KANA = 2
_CS_JISX0208 = 4
_CS_JISX0212 = 5
_SI = 0
_SO = 1

_ESCAPES = (
    (b"\x1b(B", _CS_ASCII),
    (b"\x1b(J", _CS_ROMAN),
    (b"\x1b(I", _CS_KANA),
    (b"\x1b$@", _CS_JISX0208),
    (b"\x1b$B", _CS_JISX0208),
    (b"\x1b$(D", _CS_JISX0212),
)
_DESIGNATE = {
    _CS_ASCII: b"\x1b(B",
    _CS_ROMAN: b"\x1b(J",
    _CS_KANA: b"\x1b(I",
    _CS_JISX0208: b"\x1b$B",
    _CS_JISX0212: b"\x1b$(D",
}


def _jis_to_sjis(j1: int, j2: int) -> bytes:
    s1 = ((j1 + 1) >> 1) + (0x70 if j1 <= 0x5E else 0xB0)
    if j1 & 1:
        s2 = j2 + 0x1F
        if s2 >= 0x7F:
            s2 += 1
    else:
        s2 = j2 + 0x7E
    return bytes((s1, s2))


def _sjis_to_jis(s1: int, s2: int) -> tuple[int, int]:
    adjust = s2 < 0x9F
    row = 0x70 if s1 < 0xA0 else 0xB0
    j1 = ((s1 - row) << 1) - (1 if adjust else 0)
    if adjust:
        j2 = s2 - 0x1F
        if s2 >= 0x80:
            j2 -= 1
    else:
        j2 = s2 - 0x7E
    return j1, j2


class _Iso2022JpCharset(Charset):
    """ISO-2022-JP with the Windows (cp932) character mapping."""

    def _initial_mode(self) -> Any:
        return (_CS_ASCII, _SI)

    def _decode(self, data: bytes) -> tuple[str, int, Any]:
        lead = data[0]
        if lead == 0x1B:
            for escape, charset in _ESCAPES:
                if len(data) < len(escape):
                    if escape.startswith(data):
                        raise IncompleteInputError("truncated escape sequence")
                elif data.startswith(escape):
                    return "", len(escape), (charset, _SI)
            raise InvalidSequenceError("unsupported escape sequence")
        if lead == 0x0E:
            return "", 1, (self._mode[0], _SO)
        if lead == 0x0F:
            return "", 1, (self._mode[0], _SI)

        charset, shift = self._mode
        if lead < 0x20:
            charset, shift = _CS_ASCII, _SI
        effective = _CS_KANA if shift == _SO else charset
        length = 2 if effective in (_CS_JISX0208, _CS_JISX0212) else 1
        if len(data) < length:
            raise IncompleteInputError("truncated character")
        if any(byte >= 0x80 for byte in data[:length]):
            raise InvalidSequenceError("8-bit byte in 7-bit encoding")

        if effective in (_CS_ASCII, _CS_ROMAN):
            text = chr(lead)
        elif effective == _CS_KANA:
            if not 0x21 <= lead <= 0x5F:
                raise InvalidSequenceError("invalid katakana byte")
            text = bytes((lead + 0x80,)).decode("cp932")
        elif effective == _CS_JISX0208:
            j1, j2 = data[0], data[1]
            if not (0x21 <= j1 <= 0x7E and 0x21 <= j2 <= 0x7E):
                raise InvalidSequenceError("invalid JIS X 0208 character")
            try:
                text = _jis_to_sjis(j1, j2).decode("cp932")
            except UnicodeDecodeError:
                raise InvalidSequenceError("unmapped JIS X 0208 character") from None
        else:
            raise InvalidSequenceError("JIS X 0212 is not supported")
        return text, length, (charset, shift)

    def _encode(self, text: str) -> tuple[bytes, Any]:
        raw = self._encode_with("cp932", text)
        if len(raw) == 1:
            byte = raw[0]
            if byte < 0x80:
                charset, body = _CS_ASCII, raw
            elif 0xA1 <= byte <= 0xDF:
                charset, body = _CS_KANA, bytes((byte - 0x80,))
            else:
                raise InvalidSequenceError(f"cannot encode {text!r}")
        elif len(raw) == 2:
            j1, j2 = _sjis_to_jis(raw[0], raw[1])
            if not (0x21 <= j1 <= 0x7E and 0x21 <= j2 <= 0x7E):
                raise InvalidSequenceError(f"cannot encode {text!r}")
            charset, body = _CS_JISX0208, bytes((j1, j2))
        else:
            raise InvalidSequenceError(f"cannot encode {text!r}")

        if self._mode == (charset, _SI):
            return body, self._mode
        prefix = b"\x0f" if self._mode[1] == _SO else b""
        return prefix + _DESIGNATE[charset] + body, (charset, _SI)

    def _flush(self) -> tuple[bytes, Any]:
        charset, shift = self._mode
        out = b""
        if shift != _SI:
            out += b"\x0f"
        if charset != _CS_ASCII:
            out += _DESIGNATE[_CS_ASCII]
        return out, self._initial_mode()


def make_charset(spec: Union[str, EncodingSpec]) -> Charset:
    """Build a :class:`Charset` from an encoding name or parsed spec."""
    if isinstance(spec, str):
        spec = parse_encoding(spec)
    codepage = spec.codepage
    if codepage is None:
        raise UnsupportedEncodingError(f"unknown encoding: {spec.name!r}")
    if codepage in (CP_UTF16LE, CP_UTF16BE):
        return _UnicodeCharset(spec, 2, codepage == CP_UTF16LE)
    if codepage in (CP_UTF32LE, CP_UTF32BE):
        return _UnicodeCharset(spec, 4, codepage == CP_UTF32LE)
    if codepage in (50220, 50221, 50222):
        return _Iso2022JpCharset(spec)
    codec = spec.codec
    if codec is None:
        raise UnsupportedEncodingError(f"unsupported code page: {codepage}")
    try:
        codecs.lookup(codec)
    except LookupError:
        raise UnsupportedEncodingError(f"unsupported code page: {codepage}") from None
    if codepage == 51932:
        return _EucJpCharset(spec, codec)
    return Charset(spec, codec)