from __future__ import annotations

import logging
import numbers
from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .models import Track
from .parsing import is_finite_number

logger = logging.getLogger(__name__)

YEAR_SPELLINGS = {
    "min_year": ("minYear", "min_year"),
    "max_year": ("maxYear", "max_year"),
}


class FilterCriteria(BaseModel):
    """
    Optional year-range and artist filters.

    Every field is lenient: a value of the wrong shape is dropped to ``None``
    (no filter) instead of failing validation. Both ``min_year`` and the
    camelCase ``minYear`` spelling are accepted so JSON payloads work as-is.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    min_year: Optional[Union[int, float]] = Field(
        default=None, validation_alias=AliasChoices("minYear", "min_year")
    )
    max_year: Optional[Union[int, float]] = Field(
        default=None, validation_alias=AliasChoices("maxYear", "max_year")
    )
    artist: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _first_usable_year(cls, data: Any) -> Any:
        # With both spellings present, a malformed one must not hide a usable one.
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for name, spellings in YEAR_SPELLINGS.items():
            present = [data.pop(key) for key in spellings if key in data]
            if present:
                data[name] = next((value for value in present if is_finite_number(value)), None)
        return data

    @field_validator("min_year", "max_year", mode="before")
    @classmethod
    def _finite_year(cls, value: Any) -> Optional[Union[int, float]]:
        if not is_finite_number(value):
            return None
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, numbers.Integral):
            return int(value)
        return float(value)

    @field_validator("artist", mode="before")
    @classmethod
    def _non_blank_artist(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and value.strip():
            return value
        return None

    @classmethod
    def coerce(cls, criteria: Any) -> "FilterCriteria":
        if isinstance(criteria, FilterCriteria):
            return criteria
        if not isinstance(criteria, Mapping):
            if criteria is not None:
                logger.debug("Ignoring criteria of type %s", type(criteria).__name__)
            return cls()
        try:
            return cls.model_validate(dict(criteria))
        except ValidationError as exc:  # pragma: no cover - validators above never reject
            logger.warning("Ignoring unusable criteria: %s", exc)
            return cls()

    @property
    def is_empty(self) -> bool:
        return self.min_year is None and self.max_year is None and self.artist is None

    def matches_artist(self, name: str) -> bool:
        if self.artist is None:
            return True
        return name.casefold() == self.artist.casefold()

    def accepts(self, track: Track) -> bool:
        if self.min_year is not None and track.year < self.min_year:
            return False
        if self.max_year is not None and track.year > self.max_year:
            return False
        return self.matches_artist(track.artist)
