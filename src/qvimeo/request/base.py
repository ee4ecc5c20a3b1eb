"""Request contract and the state shared by every request implementation."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol

from ..signal import Observable, Signal
from .reply import Reply
from .types import RequestError, RequestStatus

LOGGER = logging.getLogger(__name__)


class Request(Protocol):
    """What the list model needs from a resources request."""

    status_changed: Signal
    client_id_changed: Signal
    client_secret_changed: Signal
    access_token_changed: Signal

    @property
    def status(self) -> RequestStatus: ...

    @property
    def error(self) -> RequestError: ...

    @property
    def error_string(self) -> str: ...

    @property
    def result(self) -> Any: ...

    client_id: str
    client_secret: str
    access_token: str

    def list(self, path: str, filters: Optional[Mapping[str, Any]] = None) -> Reply: ...

    def insert(self, path: str, resource: Optional[Mapping[str, Any]] = None) -> Reply: ...

    def update(self, uri: str, resource: Mapping[str, Any]) -> Reply: ...

    def delete(self, uri: str) -> Reply: ...

    def cancel(self) -> None: ...


class BaseRequest:
    """Status/error/result bookkeeping and credential storage.

    Only one call is tracked at a time.  Subclasses obtain a reply from
    :meth:`_start` and settle it through :meth:`_finish`, which updates the
    request state *before* running the reply's continuation so observers
    reading ``status`` from inside it see the terminal value.

    ``finished`` fires once per settled call, before the reply's
    continuation.  Nothing in this package listens to it: the list model
    attaches to each :class:`Reply` instead.  It is there for external
    observers such as logging or progress widgets.
    """

    client_id = Observable("client_id_changed")
    client_secret = Observable("client_secret_changed")
    access_token = Observable("access_token_changed")

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        access_token: str = "",
    ) -> None:
        self._status = RequestStatus.IDLE
        self._error = RequestError.NO_ERROR
        self._error_string = ""
        self._result: Any = None
        self._reply: Optional[Reply] = None

        self.status_changed = Signal("status_changed")
        self.finished = Signal("finished")
        self.client_id_changed = Signal("client_id_changed")
        self.client_secret_changed = Signal("client_secret_changed")
        self.access_token_changed = Signal("access_token_changed")

        self.client_id = client_id
        self.client_secret = client_secret
        self.access_token = access_token

    # -- state -------------------------------------------------------------

    @property
    def status(self) -> RequestStatus:
        return self._status

    @property
    def error(self) -> RequestError:
        return self._error

    @property
    def error_string(self) -> str:
        return self._error_string

    @property
    def result(self) -> Any:
        return self._result

    @property
    def pending_reply(self) -> Optional[Reply]:
        return self._reply

    # -- call lifecycle ----------------------------------------------------

    def cancel(self) -> None:
        """Abort the call in flight, settling it as ``CANCELED``."""

        reply = self._reply
        if reply is None:
            return
        LOGGER.debug("Canceling %r", reply)
        self._finish(reply, RequestStatus.CANCELED, error_string="Request canceled")

    def _start(self, operation: str, target: str = "") -> Reply:
        if self._reply is not None:
            # A newer call supersedes the one in flight.
            self.cancel()
        reply = Reply(operation, target)
        self._reply = reply
        self._result = None
        self._error = RequestError.NO_ERROR
        self._error_string = ""
        self._set_status(RequestStatus.LOADING)
        return reply

    def _finish(
        self,
        reply: Reply,
        status: RequestStatus,
        result: Any = None,
        error: RequestError = RequestError.NO_ERROR,
        error_string: str = "",
    ) -> None:
        if reply is not self._reply or reply.done():
            LOGGER.debug("Discarding stale completion for %r", reply)
            return
        self._reply = None
        self._result = result
        self._error = error
        self._error_string = error_string
        self._set_status(status)
        self.finished.emit()
        reply.finish(status, result, error, error_string)

    def _set_status(self, status: RequestStatus) -> None:
        if status != self._status:
            self._status = status
            self.status_changed.emit(status)


__all__ = ["BaseRequest", "Request"]
