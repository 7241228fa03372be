import logging

import uvicorn

from app.config import Settings
from app.logging_setup import configure_logging


def main() -> None:
    configure_logging()
    settings = Settings.from_env()
    logging.getLogger("app").info("Server running at http://localhost:%d", settings.port)
    # log_config=None keeps uvicorn from replacing our handlers
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
