from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Point(BaseModel):
    """One labeled site in decimal degrees. Out-of-range values pass through."""

    lat: float = Field(description="Latitude, decimal degrees")
    lon: float = Field(description="Longitude, decimal degrees")
    label: str = Field(description="Analyst / site label, trimmed")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {"lat": 28.6139, "lon": 77.209, "label": "alice"},
        },
    )

    @field_validator("lat", "lon")
    @classmethod
    def _finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("coordinate must be finite")
        return v

    @field_validator("label")
    @classmethod
    def _non_empty_label(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("label must not be empty")
        return v


class LoaderStatus(BaseModel):
    path: str
    populated: bool = False
    source_mtime_ns: Optional[int] = None
    points: int = 0
    dropped: int = 0
    encoding: Optional[str] = None
    parse_count: int = 0
    stale: bool = False
    last_error: Optional[str] = None
