"""Pure Python signals used by the request layer and the list model.

``Signal`` carries observer callbacks without a Qt dependency so the
synchronization core can be driven and tested headless.  ``Observable``
declares a credential-style attribute whose assignments announce themselves
through a named signal on the owning object.

Signals are emitted on the thread that owns the request: HTTP completions are
marshalled back there before any model state changes.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

_logger = logging.getLogger(__name__)

_UNSET = object()


class Signal:
    """Named observer list with Qt-like ``connect``/``disconnect``/``emit``.

    A handler raising an exception is logged with the signal's name and the
    remaining handlers still run.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._handlers: list[Callable[..., Any]] = []

    def __repr__(self) -> str:
        return f"<Signal {self.name or '?'} ({len(self._handlers)} handlers)>"

    def connect(self, handler: Callable[..., Any]) -> Callable[..., Any]:
        if handler not in self._handlers:
            self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Callable[..., Any]) -> None:
        self._handlers.remove(handler)

    def emit(self, *args: Any) -> None:
        for handler in list(self._handlers):
            try:
                handler(*args)
            except Exception:
                _logger.exception("Handler %r for %s failed", handler, self.name or "signal")


class Observable:
    """Attribute that emits ``<owner>.<signal_name>(value)`` when it changes.

    The first assignment (normally in ``__init__``) only stores the value.
    *convert* normalizes assigned values before they are compared and stored.
    """

    def __init__(self, signal_name: str, *, convert: Optional[Callable[[Any], Any]] = None) -> None:
        self.signal_name = signal_name
        self._convert = convert
        self._attr = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self._attr = f"_{name}"

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance.__dict__[self._attr]

    def __set__(self, instance: Any, value: Any) -> None:
        if self._convert is not None:
            value = self._convert(value)
        previous = instance.__dict__.get(self._attr, _UNSET)
        instance.__dict__[self._attr] = value
        if previous is not _UNSET and previous != value:
            getattr(instance, self.signal_name).emit(value)
