from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Dict, Union

Year = Union[int, float, Decimal]


@dataclass(slots=True)
class Track:
    title: str
    artist: str
    year: Year


@dataclass(slots=True)
class DecadeTrack:
    title: str
    artist: str
    year: Year
    decade: str

    @classmethod
    def from_track(cls, track: Track) -> "DecadeTrack":
        return cls(
            title=track.title,
            artist=track.artist,
            year=track.year,
            decade=decade_label(track.year),
        )

    def to_record(self) -> Dict[str, object]:
        return {
            "title": self.title,
            "artist": self.artist,
            "year": self.year,
            "decade": self.decade,
        }


class TransformError(Exception):
    """Raised when tooling input (JSON payloads, config files) cannot be used."""


def decade_start(year: Year) -> int:
    # Exact for big ints and Decimals; floors toward negative infinity: -5 -> -10.
    return math.floor(Fraction(year) / 10) * 10


def decade_label(year: Year) -> str:
    return f"{decade_start(year)}s"
