"""One-shot completion handle returned by every request call."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .types import RequestError, RequestStatus

_logger = logging.getLogger(__name__)


class Reply:
    """Result of one issued call.

    A reply finishes exactly once.  A single continuation may be attached
    with :meth:`add_done_callback`; attaching it after the reply finished runs
    it immediately, the same way ``concurrent.futures.Future`` behaves.
    """

    def __init__(self, operation: str, target: str = "") -> None:
        self.operation = operation
        self.target = target
        self.status = RequestStatus.LOADING
        self.error = RequestError.NO_ERROR
        self.error_string = ""
        self.result: Any = None
        self._callback: Optional[Callable[["Reply"], None]] = None

    def __repr__(self) -> str:
        return f"Reply({self.operation!r}, {self.target!r}, status={self.status.name})"

    def done(self) -> bool:
        return self.status.is_terminal

    def add_done_callback(self, callback: Callable[["Reply"], None]) -> None:
        if self._callback is not None:
            raise RuntimeError(f"{self!r} already has a continuation")
        self._callback = callback
        if self.done():
            self._run_callback()

    def finish(
        self,
        status: RequestStatus,
        result: Any = None,
        error: RequestError = RequestError.NO_ERROR,
        error_string: str = "",
    ) -> bool:
        """Settle the reply.  Returns ``False`` if it was already settled."""

        if self.done():
            return False
        if not status.is_terminal:
            raise ValueError(f"{status.name} is not a terminal status")
        self.status = status
        self.result = result
        self.error = error
        self.error_string = error_string
        if self._callback is not None:
            self._run_callback()
        return True

    def _run_callback(self) -> None:
        callback = self._callback
        self._callback = None
        if callback is None:
            return
        _logger.debug("Running continuation for %r", self)
        callback(self)
