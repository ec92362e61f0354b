"""Run the submissions service with uvicorn."""

import logging
import sys

import uvicorn

from showcase.config import Settings
from showcase.main import create_app

logger = logging.getLogger("showcase")


def _log_uncaught(exc_type, exc_value, exc_traceback) -> None:
    """Log a fault that escaped every handler; the process then exits."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))


def main() -> None:
    sys.excepthook = _log_uncaught
    settings = Settings.from_env()
    app = create_app(settings)
    logger.info(f"Server running on port {settings.port}")
    try:
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    except Exception:
        logger.critical("Server terminated by an unhandled error", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
