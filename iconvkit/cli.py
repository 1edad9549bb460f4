"""Command line front end: convert a file or standard input between encodings."""

from __future__ import annotations

import sys
from contextlib import ExitStack
from typing import BinaryIO, Optional, Sequence

from .aliases import alias_names
from .charsets import ConversionError, IncompleteInputError
from .converter import Converter

_CHUNK = 8192
_PROG = "iconvkit"


def _error(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def _run(converter: Converter, source: BinaryIO, sink: BinaryIO) -> Optional[str]:
    """Stream ``source`` through ``converter``; return an error text on failure."""
    rest = b""
    while True:
        chunk = source.read(_CHUNK)
        at_eof = not chunk
        data = rest + chunk
        if not data:
            break
        try:
            result = converter.convert(data)
        except IncompleteInputError as exc:
            partial = getattr(exc, "partial", None)
            if partial is not None:
                sink.write(partial.output)
                rest = data[partial.consumed:]
            if at_eof or partial is None:
                return f"conversion error: {exc}"
            continue
        except ConversionError as exc:
            partial = getattr(exc, "partial", None)
            if partial is not None:
                sink.write(partial.output)
            return f"conversion error: {exc}"
        sink.write(result.output)
        rest = b""
    try:
        sink.write(converter.flush())
    except ConversionError as exc:
        return f"conversion error: {exc}"
    return None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the converter; ``argv`` excludes the program name."""
    args = list(sys.argv[1:] if argv is None else argv)
    fromcode: Optional[str] = None
    tocode: Optional[str] = None
    ignore = False
    output_path: Optional[str] = None
    input_path: Optional[str] = None

    items = iter(args)
    for arg in items:
        if arg == "-l":
            for name in alias_names():
                print(name)
            return 0
        if arg == "-f":
            fromcode = next(items, None)
        elif arg == "-t":
            tocode = next(items, None)
        elif arg == "-c":
            ignore = True
        elif arg == "--output":
            output_path = next(items, None)
            if output_path is None:
                return _error("cannot open (null)")
        else:
            input_path = arg
            break

    if fromcode is None or tocode is None:
        print(f"usage: {_PROG} [-c] -f from-enc -t to-enc [file]")
        return 0

    if ignore:
        tocode += "//IGNORE"

    with ExitStack() as stack:
        try:
            sink: BinaryIO = (
                stack.enter_context(open(output_path, "wb"))
                if output_path is not None
                else sys.stdout.buffer
            )
        except OSError:
            return _error(f"cannot open {output_path}")
        try:
            source: BinaryIO = (
                stack.enter_context(open(input_path, "rb"))
                if input_path is not None
                else sys.stdin.buffer
            )
        except OSError:
            return _error(f"cannot open {input_path}")

        try:
            converter = Converter(tocode, fromcode)
        except ConversionError as exc:
            return _error(f"iconv_open error: {exc}")

        with converter:
            failure = _run(converter, source, sink)
        sink.flush()
        if failure is not None:
            return _error(failure)
    return 0


if __name__ == "__main__":
    sys.exit(main())