"""File logging so log output never lands on top of the dashboard."""

from __future__ import annotations

import logging
from pathlib import Path

from flightwatch.config import LoggingConfig

LOG_FILENAME = "flightwatch.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: LoggingConfig) -> Path:
    """Send root logging to ``<log_dir>/flightwatch.log`` and return the path."""
    level = logging.getLevelName(str(config.level).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {config.level}")

    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))
    return log_path


__all__ = ["LOG_FILENAME", "configure_logging"]
