"""
Parse step for untyped track input.

Callers hand us whatever they decoded from JSON or built by hand. Each helper
here either returns a typed value or ``None`` as the rejection signal; none of
them raise, so the transforms can skip bad elements without try/except noise.
"""
from __future__ import annotations

import math
import numbers
from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass
from decimal import Decimal
from typing import Any, Optional

from .models import DecadeTrack, Track, Year

_TEXT_TYPES = (str, bytes, bytearray)
_TYPED_RECORDS = (Track, DecadeTrack)


def is_finite_number(value: Any) -> bool:
    """True for real numbers and Decimals that are neither NaN nor infinite (bools excluded)."""
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    try:
        return math.isfinite(value)
    except (TypeError, ValueError, OverflowError):
        return False


def as_sequence(value: Any) -> Optional[Sequence]:
    if isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES):
        return value
    return None


def as_record(value: Any) -> Optional[Mapping]:
    if isinstance(value, Mapping):
        return value
    if isinstance(value, _TYPED_RECORDS) and is_dataclass(value):
        return {f.name: getattr(value, f.name) for f in fields(value)}
    return None


def read_year(raw: Any) -> Optional[Year]:
    record = as_record(raw)
    if record is None:
        return None
    year = record.get("year")
    return year if is_finite_number(year) else None


def parse_track(raw: Any) -> Optional[Track]:
    record = as_record(raw)
    if record is None:
        return None
    title = record.get("title")
    artist = record.get("artist")
    year = record.get("year")
    if not isinstance(title, str) or not isinstance(artist, str):
        return None
    if not is_finite_number(year):
        return None
    return Track(title=title, artist=artist, year=year)
