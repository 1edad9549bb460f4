"""Encoding names, code page numbers and the options that follow a name.

An encoding is named as ``name[//option...]``.  The name is resolved to a
numeric code page through a fixed alias table, and the code page to the
Python codec that implements it.
"""

from __future__ import annotations

import codecs
import locale
import re
from dataclasses import dataclass
from typing import Optional

CP_UTF8 = 65001
CP_UTF16LE = 1200
CP_UTF16BE = 1201
CP_UTF32LE = 12000
CP_UTF32BE = 12001

_ALIASES: tuple[tuple[int, str], ...] = (
    (65001, "CP65001"),
    (65001, "UTF8"),
    (65001, "UTF-8"),
    (1200, "CP1200"),
    (1200, "UTF16LE"),
    (1200, "UTF-16LE"),
    (1200, "UCS2LE"),
    (1200, "UCS-2LE"),
    (1200, "UCS-2-INTERNAL"),
    (1201, "CP1201"),
    (1201, "UTF16BE"),
    (1201, "UTF-16BE"),
    (1201, "UCS2BE"),
    (1201, "UCS-2BE"),
    (1201, "unicodeFFFE"),
    (12000, "CP12000"),
    (12000, "UTF32LE"),
    (12000, "UTF-32LE"),
    (12000, "UCS4LE"),
    (12000, "UCS-4LE"),
    (12001, "CP12001"),
    (12001, "UTF32BE"),
    (12001, "UTF-32BE"),
    (12001, "UCS4BE"),
    (12001, "UCS-4BE"),
    # Unmarked UTF-16 and UTF-32 default to big endian (RFC 2781, 4.3).
    (1201, "UTF16"),
    (1201, "UTF-16"),
    (1201, "UCS2"),
    (1201, "UCS-2"),
    (12001, "UTF32"),
    (12001, "UTF-32"),
    (12001, "UCS-4"),
    (12001, "UCS4"),
    (20127, "ANSI_X3.4-1968"),
    (20127, "ANSI_X3.4-1986"),
    (20127, "ASCII"),
    (20127, "CP367"),
    (20127, "IBM367"),
    (20127, "ISO-IR-6"),
    (20127, "ISO646-US"),
    (20127, "ISO_646.IRV:1991"),
    (20127, "US"),
    (20127, "US-ASCII"),
    (20127, "CSASCII"),
    (1252, "CP819"),
    (1252, "IBM819"),
    (28591, "ISO-8859-1"),
    (28591, "ISO-IR-100"),
    (28591, "ISO8859-1"),
    (28591, "ISO_8859-1"),
    (28591, "ISO_8859-1:1987"),
    (28591, "L1"),
    (28591, "LATIN1"),
    (28591, "CSISOLATIN1"),
    (1250, "CP1250"),
    (1250, "MS-EE"),
    (1250, "WINDOWS-1250"),
    (1251, "CP1251"),
    (1251, "MS-CYRL"),
    (1251, "WINDOWS-1251"),
    (1252, "CP1252"),
    (1252, "MS-ANSI"),
    (1252, "WINDOWS-1252"),
    (1253, "CP1253"),
    (1253, "MS-GREEK"),
    (1253, "WINDOWS-1253"),
    (1254, "CP1254"),
    (1254, "MS-TURK"),
    (1254, "WINDOWS-1254"),
    (1255, "CP1255"),
    (1255, "MS-HEBR"),
    (1255, "WINDOWS-1255"),
    (1256, "CP1256"),
    (1256, "MS-ARAB"),
    (1256, "WINDOWS-1256"),
    (1257, "CP1257"),
    (1257, "WINBALTRIM"),
    (1257, "WINDOWS-1257"),
    (1258, "CP1258"),
    (1258, "WINDOWS-1258"),
    (850, "850"),
    (850, "CP850"),
    (850, "IBM850"),
    (850, "CSPC850MULTILINGUAL"),
    (862, "862"),
    (862, "CP862"),
    (862, "IBM862"),
    (862, "CSPC862LATINHEBREW"),
    (866, "866"),
    (866, "CP866"),
    (866, "IBM866"),
    (866, "CSIBM866"),
    (154, "CP154"),
    (154, "CYRILLIC-ASIAN"),
    (154, "PT154"),
    (154, "PTCP154"),
    (154, "CSPTCP154"),
    (1133, "CP1133"),
    (1133, "IBM-CP1133"),
    (874, "CP874"),
    (874, "WINDOWS-874"),
    (51932, "CP51932"),
    (51932, "MS51932"),
    (51932, "WINDOWS-51932"),
    (51932, "EUC-JP"),
    (932, "CP932"),
    (932, "MS932"),
    (932, "SHIFFT_JIS"),
    (932, "SHIFFT_JIS-MS"),
    (932, "SJIS"),
    (932, "SJIS-MS"),
    (932, "SJIS-OPEN"),
    (932, "SJIS-WIN"),
    (932, "WINDOWS-31J"),
    (932, "WINDOWS-932"),
    (932, "CSWINDOWS31J"),
    (50221, "CP50221"),
    (50221, "ISO-2022-JP"),
    (50221, "ISO-2022-JP-MS"),
    (50221, "ISO2022-JP"),
    (50221, "ISO2022-JP-MS"),
    (50221, "MS50221"),
    (50221, "WINDOWS-50221"),
    (936, "CP936"),
    (936, "GBK"),
    (936, "MS936"),
    (936, "WINDOWS-936"),
    (950, "CP950"),
    (950, "BIG5"),
    (950, "BIG5HKSCS"),
    (950, "BIG5-HKSCS"),
    (949, "CP949"),
    (949, "UHC"),
    (949, "EUC-KR"),
    (1361, "CP1361"),
    (1361, "JOHAB"),
    (437, "437"),
    (437, "CP437"),
    (437, "IBM437"),
    (437, "CSPC8CODEPAGE437"),
    (737, "CP737"),
    (775, "CP775"),
    (775, "IBM775"),
    (775, "CSPC775BALTIC"),
    (852, "852"),
    (852, "CP852"),
    (852, "IBM852"),
    (852, "CSPCP852"),
    (853, "CP853"),
    (855, "855"),
    (855, "CP855"),
    (855, "IBM855"),
    (855, "CSIBM855"),
    (857, "857"),
    (857, "CP857"),
    (857, "IBM857"),
    (857, "CSIBM857"),
    (858, "CP858"),
    (860, "860"),
    (860, "CP860"),
    (860, "IBM860"),
    (860, "CSIBM860"),
    (861, "861"),
    (861, "CP-IS"),
    (861, "CP861"),
    (861, "IBM861"),
    (861, "CSIBM861"),
    (863, "863"),
    (863, "CP863"),
    (863, "IBM863"),
    (863, "CSIBM863"),
    (864, "CP864"),
    (864, "IBM864"),
    (864, "CSIBM864"),
    (865, "865"),
    (865, "CP865"),
    (865, "IBM865"),
    (865, "CSIBM865"),
    (869, "869"),
    (869, "CP-GR"),
    (869, "CP869"),
    (869, "IBM869"),
    (869, "CSIBM869"),
    (1125, "CP1125"),
    (37, "IBM037"),
    (437, "IBM437"),
    (500, "IBM500"),
    (708, "ASMO-708"),
    (720, "DOS-720"),
    (737, "ibm737"),
    (775, "ibm775"),
    (850, "ibm850"),
    (852, "ibm852"),
    (855, "IBM855"),
    (857, "ibm857"),
    (858, "IBM00858"),
    (860, "IBM860"),
    (861, "ibm861"),
    (862, "DOS-862"),
    (863, "IBM863"),
    (864, "IBM864"),
    (865, "IBM865"),
    (866, "cp866"),
    (869, "ibm869"),
    (870, "IBM870"),
    (874, "windows-874"),
    (875, "cp875"),
    (932, "shift_jis"),
    (932, "shift-jis"),
    (936, "gb2312"),
    (949, "ks_c_5601-1987"),
    (950, "big5"),
    (950, "big5hkscs"),
    (950, "big5-hkscs"),
    (1026, "IBM1026"),
    (1047, "IBM01047"),
    (1140, "IBM01140"),
    (1141, "IBM01141"),
    (1142, "IBM01142"),
    (1143, "IBM01143"),
    (1144, "IBM01144"),
    (1145, "IBM01145"),
    (1146, "IBM01146"),
    (1147, "IBM01147"),
    (1148, "IBM01148"),
    (1149, "IBM01149"),
    (1250, "windows-1250"),
    (1251, "windows-1251"),
    (1252, "windows-1252"),
    (1253, "windows-1253"),
    (1254, "windows-1254"),
    (1255, "windows-1255"),
    (1256, "windows-1256"),
    (1257, "windows-1257"),
    (1258, "windows-1258"),
    (1361, "Johab"),
    (10000, "macintosh"),
    (10001, "x-mac-japanese"),
    (10002, "x-mac-chinesetrad"),
    (10003, "x-mac-korean"),
    (10004, "x-mac-arabic"),
    (10005, "x-mac-hebrew"),
    (10006, "x-mac-greek"),
    (10007, "x-mac-cyrillic"),
    (10008, "x-mac-chinesesimp"),
    (10010, "x-mac-romanian"),
    (10017, "x-mac-ukrainian"),
    (10021, "x-mac-thai"),
    (10029, "x-mac-ce"),
    (10079, "x-mac-icelandic"),
    (10081, "x-mac-turkish"),
    (10082, "x-mac-croatian"),
    (20000, "x-Chinese_CNS"),
    (20001, "x-cp20001"),
    (20002, "x_Chinese-Eten"),
    (20003, "x-cp20003"),
    (20004, "x-cp20004"),
    (20005, "x-cp20005"),
    (20105, "x-IA5"),
    (20106, "x-IA5-German"),
    (20107, "x-IA5-Swedish"),
    (20108, "x-IA5-Norwegian"),
    (20127, "us-ascii"),
    (20261, "x-cp20261"),
    (20269, "x-cp20269"),
    (20273, "IBM273"),
    (20277, "IBM277"),
    (20278, "IBM278"),
    (20280, "IBM280"),
    (20284, "IBM284"),
    (20285, "IBM285"),
    (20290, "IBM290"),
    (20297, "IBM297"),
    (20420, "IBM420"),
    (20423, "IBM423"),
    (20424, "IBM424"),
    (20833, "x-EBCDIC-KoreanExtended"),
    (20838, "IBM-Thai"),
    (20866, "koi8-r"),
    (20871, "IBM871"),
    (20880, "IBM880"),
    (20905, "IBM905"),
    (20924, "IBM00924"),
    (20932, "EUC-JP"),
    (20936, "x-cp20936"),
    (20949, "x-cp20949"),
    (21025, "cp1025"),
    (21866, "koi8-u"),
    (28591, "iso-8859-1"),
    (28591, "iso8859-1"),
    (28591, "iso_8859-1"),
    (28591, "iso_8859_1"),
    (28592, "iso-8859-2"),
    (28592, "iso8859-2"),
    (28592, "iso_8859-2"),
    (28592, "iso_8859_2"),
    (28593, "iso-8859-3"),
    (28593, "iso8859-3"),
    (28593, "iso_8859-3"),
    (28593, "iso_8859_3"),
    (28594, "iso-8859-4"),
    (28594, "iso8859-4"),
    (28594, "iso_8859-4"),
    (28594, "iso_8859_4"),
    (28595, "iso-8859-5"),
    (28595, "iso8859-5"),
    (28595, "iso_8859-5"),
    (28595, "iso_8859_5"),
    (28596, "iso-8859-6"),
    (28596, "iso8859-6"),
    (28596, "iso_8859-6"),
    (28596, "iso_8859_6"),
    (28597, "iso-8859-7"),
    (28597, "iso8859-7"),
    (28597, "iso_8859-7"),
    (28597, "iso_8859_7"),
    (28598, "iso-8859-8"),
    (28598, "iso8859-8"),
    (28598, "iso_8859-8"),
    (28598, "iso_8859_8"),
    (28599, "iso-8859-9"),
    (28599, "iso8859-9"),
    (28599, "iso_8859-9"),
    (28599, "iso_8859_9"),
    (28603, "iso-8859-13"),
    (28603, "iso8859-13"),
    (28603, "iso_8859-13"),
    (28603, "iso_8859_13"),
    (28605, "iso-8859-15"),
    (28605, "iso8859-15"),
    (28605, "iso_8859-15"),
    (28605, "iso_8859_15"),
    (29001, "x-Europa"),
    (38598, "iso-8859-8-i"),
    (38598, "iso8859-8-i"),
    (38598, "iso_8859-8-i"),
    (38598, "iso_8859_8-i"),
    (50220, "iso-2022-jp"),
    (50221, "csISO2022JP"),
    (50222, "iso-2022-jp"),
    (50225, "iso-2022-kr"),
    (50225, "iso2022-kr"),
    (50227, "x-cp50227"),
    (51932, "euc-jp"),
    (51936, "EUC-CN"),
    (51949, "euc-kr"),
    (52936, "hz-gb-2312"),
    (54936, "GB18030"),
    (57002, "x-iscii-de"),
    (57003, "x-iscii-be"),
    (57004, "x-iscii-ta"),
    (57005, "x-iscii-te"),
    (57006, "x-iscii-as"),
    (57007, "x-iscii-or"),
    (57008, "x-iscii-ka"),
    (57009, "x-iscii-ma"),
    (57010, "x-iscii-gu"),
    (57011, "x-iscii-pa"),
)


def _build_lookup() -> dict[str, int]:
    table: dict[str, int] = {}
    for codepage, name in _ALIASES:
        # The first entry for a name wins, as in a linear search.
        table.setdefault(name.lower(), codepage)
    return table


_LOOKUP = _build_lookup()

_CODECS: dict[int, str] = {
    37: "cp037",
    154: "ptcp154",
    437: "cp437",
    500: "cp500",
    720: "cp720",
    737: "cp737",
    775: "cp775",
    850: "cp850",
    852: "cp852",
    855: "cp855",
    857: "cp857",
    858: "cp858",
    860: "cp860",
    861: "cp861",
    862: "cp862",
    863: "cp863",
    864: "cp864",
    865: "cp865",
    866: "cp866",
    869: "cp869",
    874: "cp874",
    875: "cp875",
    932: "cp932",
    936: "gbk",
    949: "cp949",
    950: "cp950",
    1026: "cp1026",
    1125: "cp1125",
    1140: "cp1140",
    1200: "utf-16-le",
    1201: "utf-16-be",
    1250: "cp1250",
    1251: "cp1251",
    1252: "cp1252",
    1253: "cp1253",
    1254: "cp1254",
    1255: "cp1255",
    1256: "cp1256",
    1257: "cp1257",
    1258: "cp1258",
    1361: "johab",
    10000: "mac_roman",
    10004: "mac_arabic",
    10006: "mac_greek",
    10007: "mac_cyrillic",
    10029: "mac_latin2",
    10079: "mac_iceland",
    10081: "mac_turkish",
    12000: "utf-32-le",
    12001: "utf-32-be",
    20127: "ascii",
    20273: "cp273",
    20424: "cp424",
    20866: "koi8_r",
    20932: "euc_jp",
    20936: "gb2312",
    20949: "euc_kr",
    21866: "koi8_u",
    28591: "latin_1",
    28592: "iso8859_2",
    28593: "iso8859_3",
    28594: "iso8859_4",
    28595: "iso8859_5",
    28596: "iso8859_6",
    28597: "iso8859_7",
    28598: "iso8859_8",
    28599: "iso8859_9",
    28603: "iso8859_13",
    28605: "iso8859_15",
    38598: "iso8859_8",
    50220: "iso2022_jp",
    50221: "iso2022_jp_ext",
    50222: "iso2022_jp_ext",
    50225: "iso2022_kr",
    51932: "euc_jp",
    51936: "gb2312",
    51949: "euc_kr",
    52936: "hz",
    54936: "gb18030",
    65001: "utf-8",
}

_UTF16_BOM_NAMES = frozenset({"utf-16", "utf16", "ucs-2", "ucs2", "ucs-2-internal"})
_UTF32_BOM_NAMES = frozenset({"utf-32", "utf32", "ucs-4", "ucs4"})

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    """Leading decimal integer of ``text``, or 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _ansi_codepage() -> int:
    """The code page of the user's preferred locale encoding."""
    encoding = locale.getpreferredencoding(False) or ""
    candidates = [encoding]
    try:
        candidates.append(codecs.lookup(encoding).name)
    except LookupError:
        pass
    for candidate in candidates:
        if candidate:
            codepage = name_to_codepage(candidate)
            if codepage is not None and codepage > 0:
                return codepage
    return CP_UTF8


@dataclass(frozen=True)
class EncodingSpec:
    """An encoding name resolved to a code page, with its options."""

    name: str
    codepage: Optional[int]
    translit: bool = False
    ignore: bool = False
    use_compat: bool = True
    use_bom: bool = False

    @property
    def codec(self) -> Optional[str]:
        """The Python codec for the code page, if there is one."""
        if self.codepage is None:
            return None
        return codepage_to_codec(self.codepage)


def name_to_codepage(name: str) -> Optional[int]:
    """Resolve an encoding name to a code page number, or None if unknown.

    An empty name or ``char`` means the locale's code page, ``wchar_t``
    means UTF-16LE, and ``CPnnn``, ``XXnnn`` or a leading number give the
    code page directly.
    """
    if name == "" or name == "char":
        return _ansi_codepage()
    if name == "wchar_t":
        return CP_UTF16LE
    lowered = name.lower()
    if lowered.startswith("cp"):
        return _atoi(name[2:])
    if name[0] in "0123456789":
        return _atoi(name)
    if lowered.startswith("xx"):
        return _atoi(name[2:])
    return _LOOKUP.get(lowered)


def codepage_to_codec(codepage: int) -> Optional[str]:
    """The name of the Python codec implementing ``codepage``, or None."""
    return _CODECS.get(codepage)


def alias_names() -> list[str]:
    """Every name in the alias table, in table order."""
    return [name for _, name in _ALIASES]


def parse_encoding(spec: str) -> EncodingSpec:
    """Split ``name//opt//opt`` into a resolved :class:`EncodingSpec`.

    Recognised options, in any case, are ``translit``, ``ignore`` and
    ``nocompat``; other options are dropped.
    """
    name = spec
    translit = ignore = False
    use_compat = True
    while (cut := name.rfind("//")) != -1:
        option = name[cut + 2:].lower()
        if option == "nocompat":
            use_compat = False
        elif option == "translit":
            translit = True
        elif option == "ignore":
            ignore = True
        name = name[:cut]

    codepage = name_to_codepage(name)
    lowered = name.lower()
    use_bom = (codepage in (CP_UTF16LE, CP_UTF16BE) and lowered in _UTF16_BOM_NAMES) or (
        codepage in (CP_UTF32LE, CP_UTF32BE) and lowered in _UTF32_BOM_NAMES
    )
    return EncodingSpec(
        name=name,
        codepage=codepage,
        translit=translit,
        ignore=ignore,
        use_compat=use_compat,
        use_bom=use_bom,
    )