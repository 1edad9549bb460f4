# iconvkit

Convert bytes between character sets using iconv-style encoding names:
aliases such as `UTF-16`, `CP932`, `EUC-JP`, `ISO-2022-JP` or `LATIN1`,
numeric forms such as `CP1252` or `850`, and the `//IGNORE`,
`//TRANSLIT` and `//NOCOMPAT` options. It has no dependencies beyond the
standard library.

## Install

```
pip install iconvkit
```

## Converting bytes

```python
from iconvkit.converter import convert, open_converter

convert(b"\xe3\x81\x82", "UTF-16BE", "UTF-8")   # b"\x30\x42"
convert(b"\x00\x01", "UTF-8", "UTF-16")          # b"\x01"
```

`convert(data, tocode, fromcode)` converts a whole byte string and appends
the bytes that return a stateful target to its initial state.

For streaming, `open_converter(tocode, fromcode)` returns a `Converter`.
Shift and byte-order state carries over between `convert` calls, so input
may be fed in pieces:

```python
with open_converter("ISO-2022-JP", "UTF-16BE") as conv:
    result = conv.convert(b"\x30\x42\x30\x44")
    result.output      # b"\x1b$B$\"$$"
    result.consumed    # 4
    tail = conv.flush()  # b"\x1b(B", back to ASCII
```

`Converter.convert(data, limit=None)` returns a `ConversionResult` with
`output`, `consumed` and `skipped` (characters dropped under `//IGNORE`).
`limit` caps the number of output bytes. `Converter.flush(limit=None)`
returns the closing shift sequence and resets both sides; `reset()`
resets without output; `close()` (or leaving the `with` block) makes later
use raise `ValueError`.

## Errors

Failures raise a subclass of `iconvkit.charsets.ConversionError`:

- `InvalidSequenceError`: malformed input or a character the target cannot represent
- `IncompleteInputError`: the input ends in the middle of a character
- `OutputTooBigError`: the output would exceed `limit`
- `UnsupportedEncodingError`: the name is unknown or has no implementation

An error raised by `Converter.convert` carries a `partial` attribute, a
`ConversionResult` with the output produced and input consumed before the
failing character. The converter's state is left as it was before that
character, so conversion can resume from `partial.consumed`.

## Options

- `//IGNORE` on the target drops input that cannot be decoded or encoded.
- `//TRANSLIT` on the target tries a compatibility (NFKC) substitute, then
  `?`, instead of failing (`"\uff41"` to `ISO-8859-1//TRANSLIT` gives `b"a"`).
- `//NOCOMPAT` turns off the Japanese mapping substitutions used for
  CP932, CP20932, EUC-JP and ISO-2022-JP (for example U+301C WAVE DASH is
  written as CP932 `81 60` only with the substitutions on).

`UTF-16`, `UTF-32`, `UCS-2` and `UCS-4` without a byte order read and
strip a leading byte-order mark and write one on output; unmarked data is
big endian.

## Encoding names

```python
from iconvkit.aliases import name_to_codepage, parse_encoding, alias_names

name_to_codepage("shift_jis")          # 932
name_to_codepage("cp850")              # 850
spec = parse_encoding("ascii//translit")
spec.codepage, spec.translit, spec.codec   # (20127, True, "ascii")
alias_names()                          # every name in the alias table
```

An empty name or `char` means the locale's code page; `wchar_t` means
UTF-16LE. Lookups ignore case.

## Locale code set

```python
from iconvkit.langinfo import LangInfoItem, codeset_from_locale, nl_langinfo

codeset_from_locale("English_United Kingdom.1252", 65001)   # "CP1252"
nl_langinfo(LangInfoItem.CODESET)                          # e.g. "CPUTF-8"
```

`nl_langinfo` switches a locale still set to "C" to the user's default
locale before reading it, and returns `"n/a"` for any other item.

## Command line

```
iconvkit -f UTF-8 -t UTF-16 --output out.txt input.txt
iconvkit -c -f UTF-8 -t ASCII input.txt
iconvkit -l
```

`-l` lists the known encoding names, `-c` drops characters that cannot be
converted, and `--output` writes to a file instead of standard output.
Options must come before the input file; without a file the input is read
from standard input. Without both `-f` and `-t` a usage line is printed.

## Limits

- Only code pages that map to a Python codec are usable; many names in the
  alias table (for example the ISCII and several EBCDIC and Mac code pages)
  resolve to a number but raise `UnsupportedEncodingError` when opened.
- ISO-2022-JP input in JIS X 0212 is rejected.