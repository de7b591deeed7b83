"""
Logging Configuration

One "careerprep" logger for the whole backend, writing to stdout and to a
size-rotated file under LOG_DIR.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from careerprep.core.config import settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# third-party loggers that log every request
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "openai", "multipart")


def setup_logging(name: str = "careerprep") -> logging.Logger:
    app_logger = logging.getLogger(name)
    if app_logger.handlers:
        # already configured (module re-import under reload)
        return app_logger

    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    log_file = RotatingFileHandler(
        log_dir / f"{name}.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    for handler in (console, log_file):
        handler.setFormatter(formatter)
        app_logger.addHandler(handler)

    app_logger.setLevel(level)
    app_logger.propagate = False

    for noisy in QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return app_logger


logger = setup_logging()
