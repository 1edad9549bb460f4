"""Streaming conversion between two encodings.

A :class:`Converter` decodes one character at a time from the source
encoding and encodes it into the target encoding.  Shift and byte-order
state carries over from one :meth:`Converter.convert` call to the next,
so input may be fed in pieces.

When a conversion fails, the exception raised is one of the
:class:`~iconvkit.charsets.ConversionError` subclasses, and it carries a
``partial`` attribute: a :class:`ConversionResult` with the output
produced and the input consumed before the failure.  The converter's
state is left as it was just before the character that failed, so the
caller can resume from ``partial.consumed``.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional, Union

from .charsets import (
    Charset,
    ConversionError,
    OutputTooBigError,
    make_charset,
)

# No single character, escape sequence or byte-order mark is longer than this.
_WINDOW = 16

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class ConversionResult:
    """Output of a conversion step and how much input it consumed."""

    output: bytes
    consumed: int
    skipped: int = 0


class Converter:
    """Converts byte strings from ``fromcode`` to ``tocode``.

    Encoding names may carry ``//translit``, ``//ignore`` and
    ``//nocompat`` options.  ``//ignore`` on the target drops input that
    cannot be decoded or encoded instead of failing.
    """

    def __init__(self, tocode: str, fromcode: str) -> None:
        self._from: Charset = make_charset(fromcode)
        self._to: Charset = make_charset(tocode)
        self.tocode = tocode
        self.fromcode = fromcode
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("converter is closed")

    def convert(self, data: BytesLike, limit: Optional[int] = None) -> ConversionResult:
        """Convert all of ``data``, writing at most ``limit`` bytes of output.

        Raises a :class:`ConversionError` subclass with a ``partial``
        attribute when the input is invalid or incomplete, or when the
        output would exceed ``limit``.
        """
        self._check_open()
        source = bytes(data)
        out = bytearray()
        position = 0
        skipped = 0

        while position < len(source):
            saved_from = copy.copy(self._from)
            try:
                text, used = self._from.decode_char(source[position:position + _WINDOW])
            except ConversionError as exc:
                self._from = saved_from
                if self._to.ignore:
                    position += 1
                    skipped += 1
                    continue
                exc.partial = ConversionResult(bytes(out), position, skipped)
                raise

            if not text:
                position += used
                continue

            room = None if limit is None else limit - len(out)
            try:
                encoded = self._to.encode_char(text, room)
            except OutputTooBigError as exc:
                self._from = saved_from
                exc.partial = ConversionResult(bytes(out), position, skipped)
                raise
            except ConversionError as exc:
                if not self._to.ignore:
                    self._from = saved_from
                    exc.partial = ConversionResult(bytes(out), position, skipped)
                    raise
                encoded = b""
                skipped += 1

            out += encoded
            position += used

        return ConversionResult(bytes(out), position, skipped)

    def flush(self, limit: Optional[int] = None) -> bytes:
        """Return the bytes that end the output in its initial state.

        Both sides are reset afterwards.  Raises
        :class:`OutputTooBigError` if the bytes exceed ``limit``; the
        state is then left untouched.
        """
        self._check_open()
        tail = self._to.flush(limit)
        self.reset()
        return tail

    def reset(self) -> None:
        """Return both sides to their initial state without output."""
        self._check_open()
        self._from.reset()
        self._to.reset()

    def close(self) -> None:
        """Release the converter; later use raises ValueError."""
        self._closed = True

    def __enter__(self) -> "Converter":
        self._check_open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_converter(tocode: str, fromcode: str) -> Converter:
    """Create a :class:`Converter` from ``fromcode`` to ``tocode``."""
    return Converter(tocode, fromcode)


def convert(data: BytesLike, tocode: str, fromcode: str) -> bytes:
    """Convert a complete byte string, including the closing shift sequence."""
    with open_converter(tocode, fromcode) as converter:
        result = converter.convert(data)
        return result.output + converter.flush()