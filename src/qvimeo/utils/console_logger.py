"""Console logging for the command line tools."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_INSTALLED_HANDLERS: dict[str, logging.Handler] = {}


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str,
    *,
    level: int = logging.WARNING,
) -> logging.Handler:
    """Attach a named stderr handler to *logger* once and set its level.

    Calling it again with the same *handler_name* only adjusts the level, so
    repeated CLI invocations in one process do not duplicate output.
    """

    handler = _INSTALLED_HANDLERS.get(handler_name)
    if handler is None:
        for existing in logger.handlers:
            if getattr(existing, "name", None) == handler_name:
                handler = existing
                break
    if handler is None:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        handler.name = handler_name
        logger.addHandler(handler)
    _INSTALLED_HANDLERS[handler_name] = handler
    handler.setLevel(level)
    logger.setLevel(level)
    return handler


__all__ = ["ensure_console_logger"]
