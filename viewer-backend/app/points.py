from typing import List

from fastapi import APIRouter, Request, Response

from app.schemas import LoaderStatus, Point
from ingest.loader import PointsLoader

router = APIRouter()


def _loader(request: Request) -> PointsLoader:
    return request.app.state.points_loader


@router.get("/api/points", response_model=List[Point])
async def api_points(request: Request, response: Response) -> List[Point]:
    """Normalized site points from the configured CSV.

    Never fails on a bad or missing file: serves the last good rows (flagged
    with X-Points-Stale) or an empty list.
    """
    data, stale = await _loader(request).load_points_with_state()
    response.headers["Cache-Control"] = "no-store"
    if stale:
        response.headers["X-Points-Stale"] = "1"
    return data


@router.get("/api/points/status", response_model=LoaderStatus)
async def api_points_status(request: Request, response: Response) -> LoaderStatus:
    response.headers["Cache-Control"] = "no-store"
    return _loader(request).status()
