from __future__ import annotations

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER_NAME = "iList"


def ensure_console_logger(
    handler_name: str,
    *,
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a named stream handler to *logger* once and return it.

    Defaults to the package logger and ``stderr`` so diagnostics never mix
    with command output written to ``stdout``.
    """

    if logger is None:
        logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in logger.handlers:
        if getattr(handler, "name", None) == handler_name:
            handler.setLevel(level)
            logger.setLevel(level)
            return handler
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.name = handler_name
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


__all__ = ["PACKAGE_LOGGER_NAME", "ensure_console_logger"]
