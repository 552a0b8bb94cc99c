from __future__ import annotations

import logging

__all__ = ["LOG_FORMAT", "setup_logging"]

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach one console handler to the root logger (idempotent)."""

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for handler in root_logger.handlers:
        if getattr(handler, "_focuskit_handler", False):
            return root_logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._focuskit_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)
    return root_logger
