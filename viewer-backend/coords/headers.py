from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

# -----------------------------
# Column aliases, in priority order
# -----------------------------

LAT_ALIASES: Tuple[str, ...] = ("lat", "Latitude", "y")
LON_ALIASES: Tuple[str, ...] = ("lon", "lng", "Longitude", "x")
LABEL_ALIASES: Tuple[str, ...] = ("user", "username", "name", "label", "Analyst")


def header_index(row: Mapping[Any, Any]) -> Dict[str, str]:
    """Lower-cased column name -> actual column name.

    If two headers differ only by case the first one wins. Non-string keys
    (csv.DictReader stores surplus cells under None) are skipped.
    """
    index: Dict[str, str] = {}
    for key in row.keys():
        if isinstance(key, str):
            index.setdefault(key.lower(), key)
    return index


def find_header(row: Mapping[Any, Any], candidates: Sequence[str]) -> Optional[str]:
    """Return the row's column name matching the first candidate, case-insensitively."""
    index = header_index(row)
    for c in candidates:
        hit = index.get(c.lower())
        if hit is not None:
            return hit
    return None


__all__ = ["LAT_ALIASES", "LON_ALIASES", "LABEL_ALIASES", "header_index", "find_header"]
