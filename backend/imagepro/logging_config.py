"""Logging setup for the ImagePro web app."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Gradio's HTTP stack logs every request and upload at INFO
NOISY_LOGGERS = ("httpx", "uvicorn.access", "multipart")


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Send ``imagepro.*`` records to stdout at ``level``.

    Python warnings are routed into logging, so a Pillow
    ``DecompressionBombWarning`` for a huge upload shows up in the same
    stream as the processing log. Repeated calls don't add handlers.

    Args:
        level: Level name such as ``DEBUG`` (shows every quality attempt).
            Unknown names fall back to INFO.

    Returns:
        The ``imagepro`` logger.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    app_logger = logging.getLogger("imagepro")
    app_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not app_logger.handlers:
        app_logger.addHandler(handler)

    logging.captureWarnings(True)
    warnings_logger = logging.getLogger("py.warnings")
    if not warnings_logger.handlers:
        warnings_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return app_logger
