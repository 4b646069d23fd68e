"""Logging setup shared by the API process."""

import logging

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a single stream handler on the root logger."""
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())
    if any(getattr(handler, "_detailing_handler", False) for handler in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._detailing_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
