import logging
import os

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from app.auth import build_auth_middleware
from app.config import Settings
from app.logging_setup import logging_middleware
from app.points import router as points_router
from ingest.loader import PointsLoader

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    loader = PointsLoader(settings.csv_path, read_timeout=settings.read_timeout)

    app = FastAPI(title="sites-viewer")
    app.state.settings = settings
    app.state.points_loader = loader

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/healthz", response_class=PlainTextResponse)
    def healthz():
        return "ok"

    app.include_router(points_router)

    # Added last = outermost, so rejected requests are logged too
    app.middleware("http")(build_auth_middleware(settings))
    app.middleware("http")(logging_middleware)

    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.info("static dir %s not found; frontend not served", settings.static_dir)
    return app


app = create_app()
