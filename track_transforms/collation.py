from __future__ import annotations

import locale
import unicodedata
from typing import Any, Iterable


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _rank_symbols(value: str) -> str:
    # Whitespace, then punctuation and symbols, sort ahead of digits and letters.
    ranked = []
    for ch in value:
        if ch.isspace():
            ranked.append("\x01" + ch)
        elif unicodedata.category(ch)[0] in "PS":
            ranked.append("\x02" + ch)
        else:
            ranked.append(ch)
    return "".join(ranked)


def _transform(value: str, use_locale: bool) -> str:
    if not use_locale:
        return value
    try:
        return locale.strxfrm(value)
    except (ValueError, OSError):  # pragma: no cover - embedded NULs / broken libc locale
        return value


def collation_key(value: Any, *, use_locale: bool = True) -> tuple[str, str, str, str]:
    """
    Sort key approximating ``localeCompare`` ordering.

    Letters compare by base character first, then accents (unaccented first),
    then case (lowercase first), and finally by the raw text so the order is
    total. Whitespace, punctuation and symbols rank below digits, which rank
    below letters, as in ICU root order. ``locale.strxfrm`` is applied with
    whatever LC_COLLATE the process already has; the locale is never changed
    here.
    """
    text = _text(value)
    base = _strip_accents(text)
    primary = _transform(_rank_symbols(base.casefold()), use_locale)
    secondary = unicodedata.normalize("NFKD", text).casefold()
    tertiary = text.swapcase()
    return (primary, secondary, tertiary, text)


def sort_titles(titles: Iterable[Any], *, use_locale: bool = True) -> list[Any]:
    return sorted(titles, key=lambda title: collation_key(title, use_locale=use_locale))
