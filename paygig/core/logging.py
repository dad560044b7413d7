"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Attach a single stdout handler to the root logger.

    Calling it again only adjusts the level, so reloads and test runs do not
    stack duplicate handlers.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers:
        if getattr(handler, "_paygig", False):
            handler.setLevel(log_level)
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._paygig = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)

    # httpx logs every request at INFO, which includes the bot token in the URL.
    logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["setup_logging", "LOG_FORMAT"]
