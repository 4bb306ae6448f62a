from __future__ import annotations

import logging
from typing import Any, Dict, List

from .criteria import FilterCriteria
from .models import DecadeTrack, decade_label, decade_start
from .parsing import as_sequence, parse_track

logger = logging.getLogger(__name__)

__all__ = ["decade_label", "decade_start", "filter_and_transform_tracks"]


def filter_and_transform_tracks(tracks: Any, criteria: Any = None) -> List[Dict[str, object]]:
    """
    Keep tracks that pass the year-range and artist filters, adding a decade.

    ``criteria`` may be a :class:`FilterCriteria`, a mapping with
    ``min_year``/``minYear``, ``max_year``/``maxYear`` and ``artist`` keys, or
    anything else (treated as no filters). Malformed tracks are dropped. Input
    order is preserved and every returned record is a new dict.
    """
    items = as_sequence(tracks)
    if not items:
        return []

    active = FilterCriteria.coerce(criteria)
    results: List[Dict[str, object]] = []
    rejected = 0
    for index, raw in enumerate(items):
        track = parse_track(raw)
        if track is None:
            rejected += 1
            logger.debug("Skipping track #%d: missing title, artist or finite year", index)
            continue
        if not active.accepts(track):
            continue
        results.append(DecadeTrack.from_track(track).to_record())

    logger.debug(
        "Kept %d of %d track(s) (%d malformed)",
        len(results),
        len(items),
        rejected,
    )
    return results
