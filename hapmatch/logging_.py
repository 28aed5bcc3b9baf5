"""Logging setup shared by the sweep modules and the command line."""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# numba floods DEBUG with compiler passes.
_NOISY_LOGGERS = ("numba",)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure the root logger once; later calls only adjust the level."""

    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def level_from_verbosity(verbose: int) -> int:
    """Map a ``-v`` count onto a logging level (0 → INFO, 1+ → DEBUG)."""

    return logging.DEBUG if verbose > 0 else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger after ensuring configuration."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


__all__ = ["LOG_FORMAT", "configure_logging", "get_logger", "level_from_verbosity"]
