from __future__ import annotations

import logging
import os

import uvicorn
from dotenv import load_dotenv

# Load .env from backend dir (where serve.py runs) before settings are read
load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))

from app.config import get_settings  # noqa: E402
from app.main import create_app  # noqa: E402

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    app = create_app(settings)
    for route in app.routes:
        if hasattr(route, "path"):
            logger.info("App route: %s %s", sorted(getattr(route, "methods", None) or ["WS"]), route.path)
    logger.info("Serving checkers room on %s:%d (ws path %s)", settings.host, settings.port, settings.ws_path)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
