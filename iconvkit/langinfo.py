"""Locale information: the character set of the current locale."""

from __future__ import annotations

import enum
import locale
from typing import Optional, Union

from .aliases import name_to_codepage

_CODESET_SIZE = 2 + 10  # "CP" and up to ten digits


class LangInfoItem(enum.IntEnum):
    """Items that :func:`nl_langinfo` can report."""

    CODESET = 14


def codeset_from_locale(locale_name: Optional[str], default_codepage: int) -> str:
    """Codeset name for a ``lang[_country[.codepage]]`` locale name.

    The part after the dot, with any ``@modifier`` removed, becomes
    ``CP<codepage>``; without a dot ``default_codepage`` is used.
    """
    if locale_name:
        _, dot, encoding = locale_name.partition(".")
        if dot:
            codeset = f"CP{encoding}"[:_CODESET_SIZE]
            return codeset.split("@", 1)[0]
    return f"CP{default_codepage}"[:_CODESET_SIZE]


def _current_ctype() -> Optional[str]:
    try:
        current = locale.setlocale(locale.LC_ALL, None)
        if current == "C":
            locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        pass
    try:
        return locale.setlocale(locale.LC_CTYPE, None)
    except locale.Error:
        return None


def nl_langinfo(item: Union[LangInfoItem, int]) -> str:
    """Report a locale item; unknown items give ``"n/a"``.

    As with the C library call, asking for the codeset while the locale
    is still "C" switches it to the user's default locale.
    """
    if item == LangInfoItem.CODESET:
        default = name_to_codepage("") or 0
        return codeset_from_locale(_current_ctype(), default)
    return "n/a"