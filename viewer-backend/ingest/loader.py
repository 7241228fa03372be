"""File-backed point cache keyed on the source file's modification time.

Usage:
    loader = PointsLoader("data/Sites.csv")
    points = await loader.load_points()

The file is re-read only when its mtime moves forward. A failed reload
(missing file, permission error, I/O error, timeout) keeps serving the last
good rows and marks the loader stale; before any successful load it serves
an empty list. load_points() never raises.
"""
from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple, TypeVar

from app.schemas import LoaderStatus, Point
from ingest.csv_io import parse_points_csv

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry:
    rows: Tuple[Point, ...]
    source_mtime_ns: int
    dropped: int = 0
    encoding: str = "utf-8-sig"


class PointsLoader:
    def __init__(self, path: str | os.PathLike, read_timeout: float = 5.0):
        self.path = Path(path)
        self.read_timeout = read_timeout
        self.parse_count = 0
        self.stale = False
        self.last_error: Optional[str] = None
        self._entry: Optional[CacheEntry] = None
        self._lock = asyncio.Lock()

    @property
    def entry(self) -> Optional[CacheEntry]:
        return self._entry

    def _stat_mtime_ns(self) -> int:
        return os.stat(self.path).st_mtime_ns

    def _read_bytes(self) -> bytes:
        with open(self.path, "rb") as f:
            return f.read()

    async def _bounded(self, fn: Callable[[], T]) -> T:
        # The worker thread is not interrupted on timeout; the caller just stops waiting.
        return await asyncio.wait_for(asyncio.to_thread(fn), timeout=self.read_timeout)

    async def _reload(self, mtime_ns: int) -> CacheEntry:
        raw = await self._bounded(self._read_bytes)
        points, dropped, encoding = parse_points_csv(raw)
        self.parse_count += 1
        logger.info(
            "points.loaded",
            extra={"source": str(self.path), "rows": len(points), "dropped": dropped},
        )
        return CacheEntry(rows=tuple(points), source_mtime_ns=mtime_ns, dropped=dropped, encoding=encoding)

    async def load_points_with_state(self) -> Tuple[List[Point], bool]:
        """Return (points, stale), both taken while the reload lock is held.

        Concurrent callers are serialized: while one reload is in flight the
        others wait for it and then see the fresh entry.
        """
        async with self._lock:
            try:
                mtime_ns = await self._bounded(self._stat_mtime_ns)
                current = self._entry
                if current is None or mtime_ns > current.source_mtime_ns:
                    self._entry = await self._reload(mtime_ns)
                self.stale = False
                self.last_error = None
            except (OSError, asyncio.TimeoutError) as e:
                self._mark_failed(f"{type(e).__name__}: {e}")
            except Exception as e:  # csv.Error, unexpected parser failures
                logger.exception("points parse crashed")
                self._mark_failed(f"{type(e).__name__}: {e}")

            entry = self._entry
            rows = list(entry.rows) if entry is not None else []
            return rows, self.stale

    async def load_points(self) -> List[Point]:
        """Return the current points, re-parsing the file only if its mtime advanced."""
        rows, _ = await self.load_points_with_state()
        return rows

    def _mark_failed(self, error: str) -> None:
        self.last_error = error
        logger.error("CSV load error: %s", error, extra={"source": str(self.path), "error": error})
        if self._entry is not None:
            self.stale = True
            logger.warning(
                "serving stale points",
                extra={"source": str(self.path), "rows": len(self._entry.rows)},
            )

    def status(self) -> LoaderStatus:
        entry = self._entry
        return LoaderStatus(
            path=str(self.path),
            populated=entry is not None,
            source_mtime_ns=entry.source_mtime_ns if entry else None,
            points=len(entry.rows) if entry else 0,
            dropped=entry.dropped if entry else 0,
            encoding=entry.encoding if entry else None,
            parse_count=self.parse_count,
            stale=self.stale,
            last_error=self.last_error,
        )


__all__ = ["CacheEntry", "PointsLoader"]
