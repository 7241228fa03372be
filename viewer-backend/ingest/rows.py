from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Iterable, List, Mapping, Sequence, Tuple

from app.schemas import Point
from coords.headers import LABEL_ALIASES, LAT_ALIASES, LON_ALIASES, find_header
from coords.parser import parse_coordinate

logger = logging.getLogger(__name__)


def normalize_rows(
    rows: Iterable[Mapping[Any, Any]],
    lat_aliases: Sequence[str] = LAT_ALIASES,
    lon_aliases: Sequence[str] = LON_ALIASES,
    label_aliases: Sequence[str] = LABEL_ALIASES,
) -> Tuple[List[Point], int]:
    """
    Turn raw CSV rows into validated points.

    Rows are dropped (and counted) when a lat/lon/label column cannot be
    resolved, when either coordinate fails to parse, or when the label is
    empty after trimming. Surviving rows keep their input order.
    Returns (points, dropped).
    """
    out: List[Point] = []
    reasons: Counter = Counter()

    for row in rows:
        lat_key = find_header(row, lat_aliases)
        lon_key = find_header(row, lon_aliases)
        name_key = find_header(row, label_aliases)

        if lat_key is None or lon_key is None or name_key is None:
            reasons["missing_column"] += 1
            continue

        lat = parse_coordinate(row[lat_key])
        lon = parse_coordinate(row[lon_key])
        raw_label = row[name_key]
        label = "" if raw_label is None else str(raw_label).strip()

        if not lat.ok:
            reasons["invalid_lat"] += 1
            continue
        if not lon.ok:
            reasons["invalid_lon"] += 1
            continue
        if not label:
            reasons["empty_label"] += 1
            continue

        out.append(Point(lat=lat.value, lon=lon.value, label=label))

    dropped = sum(reasons.values())
    if dropped:
        logger.warning(
            "rows.dropped: %d row(s) with invalid/missing coords or label",
            dropped,
            extra={"dropped": dropped, "reasons": dict(reasons), "rows": len(out)},
        )
    return out, dropped


__all__ = ["normalize_rows"]
