#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/utils/timing.py
"""Timing helper for DEBUG-level logging of conversion stages."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the wrapped block took, when DEBUG logging is enabled.

    Examples
    --------
        >>> with debug_timer(logger, "Parsing"):
        ...     document = parser.parse(text)
        ... # Logs: "Parsing completed in 0.01s"

    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return
    started = time.perf_counter()
    yield
    logger.debug("%s completed in %.2fs", operation, time.perf_counter() - started)


__all__ = ["debug_timer"]
