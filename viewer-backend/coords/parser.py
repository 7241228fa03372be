from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

# Degree / minute / second marks, including the usual typographic look-alikes
DMS_SYMBOLS = "°º˚'′’\"″”"
DMS_SYMBOL_RE = re.compile(f"[{re.escape(DMS_SYMBOLS)}]")
HEMI_RE = re.compile(r"[NSEW]", re.IGNORECASE)
WS_RE = re.compile(r"\s+")
NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


@dataclass(frozen=True)
class ParsedCoordinate:
    """Outcome of parsing one coordinate cell: a float or a tagged invalid."""

    value: Optional[float] = None
    reason: Optional[str] = None  # 'missing', 'empty', 'malformed', 'non_finite'

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def valid(cls, value: float) -> "ParsedCoordinate":
        return cls(value=value)

    @classmethod
    def invalid(cls, reason: str) -> "ParsedCoordinate":
        return cls(reason=reason)


def _to_number(token: str) -> Optional[float]:
    if not NUMBER_RE.fullmatch(token):
        return None
    return float(token)


def _parse_dms(s: str) -> ParsedCoordinate:
    hemi = None
    m = HEMI_RE.search(s)
    if m:
        hemi = m.group(0).upper()
        s = HEMI_RE.sub(" ", s)

    s = DMS_SYMBOL_RE.sub(" ", s)
    parts = WS_RE.sub(" ", s).strip().split(" ")
    parts = [p for p in parts if p]
    if not parts:
        return ParsedCoordinate.invalid("malformed")

    # degrees, minutes, seconds; anything past the third token is ignored
    tokens = (parts + ["0", "0"])[:3]
    values = [_to_number(t) for t in tokens]
    if any(v is None for v in values):
        return ParsedCoordinate.invalid("malformed")
    deg, minutes, sec = values

    dec = abs(deg) + minutes / 60 + sec / 3600
    if math.copysign(1.0, deg) < 0:
        dec = -dec

    if hemi in ("S", "W"):
        dec = -abs(dec)
    elif hemi in ("N", "E"):
        dec = abs(dec)

    if not math.isfinite(dec):
        return ParsedCoordinate.invalid("non_finite")
    return ParsedCoordinate.valid(dec)


def parse_coordinate(value: Any) -> ParsedCoordinate:
    """Parse a coordinate in decimal degrees or DMS into decimal degrees.

    Accepted forms:
      - numbers, returned unchanged (no range check)
      - plain decimals, with '.' or ',' as separator: "28.6139", "28,6139"
      - DMS with optional marks and hemisphere letter in any position:
        28°36'50"N, "77 12 30 W", "-5 30 0", "N 28 36"

    A hemisphere letter fixes the sign (S/W negative, N/E positive) and
    overrides a sign on the degrees. Without one, a negative degrees token
    makes the whole value negative.
    """
    if value is None:
        return ParsedCoordinate.invalid("missing")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return ParsedCoordinate.invalid("non_finite")
        return ParsedCoordinate.valid(value)

    s = str(value).strip()
    if not s:
        return ParsedCoordinate.invalid("empty")

    s = s.replace(",", ".", 1)

    has_dms_symbols = DMS_SYMBOL_RE.search(s) is not None
    has_hemisphere = HEMI_RE.search(s) is not None

    # "-5 30 0": several bare numbers are DMS too
    multi_token = len(s.split()) > 1

    if not has_dms_symbols and not has_hemisphere and not multi_token:
        num = _to_number(s)
        if num is None:
            return ParsedCoordinate.invalid("malformed")
        if not math.isfinite(num):  # e.g. 400 digits
            return ParsedCoordinate.invalid("non_finite")
        return ParsedCoordinate.valid(num)

    return _parse_dms(s)


__all__ = ["ParsedCoordinate", "parse_coordinate", "DMS_SYMBOLS"]
