from __future__ import annotations

import logging
from typing import Any, Dict, List

from .collation import sort_titles
from .models import Year
from .parsing import as_sequence, as_record, read_year

logger = logging.getLogger(__name__)


def group_titles_by_year(tracks: Any, *, use_locale: bool = True) -> Dict[Year, List[Any]]:
    """
    Map each release year to the titles released that year, sorted.

    Elements that are not records, or that lack a finite ``year``, are
    skipped. Titles are taken as-is, so a missing or non-string title still
    lands in its year's bucket. Buckets are sorted once, after grouping.
    """
    items = as_sequence(tracks)
    if not items:
        return {}

    titles_by_year: Dict[Year, List[Any]] = {}
    skipped = 0
    for index, raw in enumerate(items):
        year = read_year(raw)
        if year is None:
            skipped += 1
            logger.debug("Skipping track #%d: no record with a finite year", index)
            continue
        titles_by_year.setdefault(year, []).append(as_record(raw).get("title"))

    for year, titles in titles_by_year.items():
        titles_by_year[year] = sort_titles(titles, use_locale=use_locale)

    logger.debug(
        "Grouped %d track(s) into %d year(s), skipped %d",
        len(items) - skipped,
        len(titles_by_year),
        skipped,
    )
    return titles_by_year
