# codechunk/logging/logger.py
"""
Logger factory.

All modules get their logger through get_logger(__name__) so that every
codechunk logger hangs off the single "codechunk" root and one call to
configure_logging() controls the whole package.
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "codechunk"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO", fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    Install a stream handler on the package root logger.

    Safe to call more than once: each call replaces the handler installed by
    the previous one, so the package never logs twice and always writes to
    the current sys.stderr.
    """
    global _handler

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level.upper() if isinstance(level, str) else level)

    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(_handler)

    return root


__all__ = ["get_logger", "configure_logging", "ROOT_LOGGER_NAME"]
