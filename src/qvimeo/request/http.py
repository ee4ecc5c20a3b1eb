"""httpx-backed call execution for requests.

Calls run on the global ``QThreadPool`` by default and report back through a
queued Qt signal, so completions are always handled on the thread that owns
the request.  ``run_in_background=False`` performs the call inline, which is
what the CLI and most tests use.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

import httpx
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from ..config import API_ACCEPT_HEADER, API_URL, REQUEST_TIMEOUT_SEC
from .base import BaseRequest
from .reply import Reply
from .types import RequestError, RequestStatus

LOGGER = logging.getLogger(__name__)


@dataclass
class HttpOutcome:
    """Decoded outcome of one HTTP exchange."""

    status: RequestStatus
    result: Any = None
    error: RequestError = RequestError.NO_ERROR
    error_string: str = ""


def error_for_status_code(code: int) -> RequestError:
    if code in (401, 403):
        return RequestError.AUTHENTICATION_ERROR
    if code == 404:
        return RequestError.NOT_FOUND_ERROR
    return RequestError.SERVER_ERROR


def _decode_body(response: httpx.Response) -> tuple[Any, Optional[str]]:
    if not response.content or not response.content.strip():
        return {}, None
    try:
        return response.json(), None
    except ValueError as exc:
        return None, f"Unable to parse response: {exc}"


def _error_message(body: Any, response: httpx.Response) -> str:
    if isinstance(body, Mapping):
        for key in ("developer_message", "error"):
            message = body.get(key)
            if message:
                return str(message)
    return response.reason_phrase or f"HTTP {response.status_code}"


def perform(client: httpx.Client, method: str, url: str, **kwargs: Any) -> HttpOutcome:
    """Run one HTTP call and map it onto request status/error values."""

    try:
        response = client.request(method, url, **kwargs)
    except httpx.RequestError as exc:
        LOGGER.warning("%s %s failed: %s", method, url, exc)
        return HttpOutcome(
            RequestStatus.FAILED,
            error=RequestError.NETWORK_ERROR,
            error_string=str(exc) or type(exc).__name__,
        )

    body, parse_error = _decode_body(response)
    if response.is_success:
        if parse_error is not None:
            LOGGER.warning("%s %s returned an unreadable body", method, url)
            return HttpOutcome(
                RequestStatus.FAILED,
                error=RequestError.PARSE_ERROR,
                error_string=parse_error,
            )
        return HttpOutcome(RequestStatus.READY, body)

    error = error_for_status_code(response.status_code)
    message = _error_message(body, response)
    LOGGER.warning("%s %s -> %d %s", method, url, response.status_code, message)
    return HttpOutcome(RequestStatus.FAILED, body, error, message)


class _HttpSignals(QObject):
    completed = Signal(object, object)


class _HttpWorker(QRunnable):
    def __init__(self, reply: Reply, call: Callable[[], HttpOutcome]) -> None:
        super().__init__()
        self._reply = reply
        self._call = call
        self.signals = _HttpSignals()

    def run(self) -> None:
        outcome = self._call()
        self.signals.completed.emit(self._reply, outcome)


class _CompletionRouter(QObject):
    """Lives on the owner's thread so worker results are delivered there."""

    def __init__(self, owner: "HttpRequest") -> None:
        super().__init__()
        self._owner = owner

    @Slot(object, object)
    def deliver(self, reply: Reply, outcome: HttpOutcome) -> None:
        self._owner._complete(reply, outcome)


class HttpRequest(BaseRequest):
    """Base class for requests talking to the API over HTTP."""

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        access_token: str = "",
        *,
        client: Optional[httpx.Client] = None,
        base_url: str = API_URL,
        timeout: float = REQUEST_TIMEOUT_SEC,
        run_in_background: bool = True,
    ) -> None:
        super().__init__(client_id, client_secret, access_token)
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self._run_in_background = run_in_background
        self._router: Optional[_CompletionRouter] = None

    def close(self) -> None:
        self._client.close()

    def _headers(self, *, authorize: bool = True) -> Dict[str, str]:
        headers = {"Accept": API_ACCEPT_HEADER}
        if authorize and self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _send(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        authorize: bool = True,
        **kwargs: Any,
    ) -> Reply:
        reply = self._start(operation, url)
        LOGGER.debug("%s: %s %s", operation, method, url)
        call = functools.partial(
            perform,
            self._client,
            method,
            url,
            headers=self._headers(authorize=authorize),
            **kwargs,
        )
        if self._run_in_background:
            if self._router is None:
                self._router = _CompletionRouter(self)
            worker = _HttpWorker(reply, call)
            worker.signals.completed.connect(self._router.deliver)
            QThreadPool.globalInstance().start(worker)
        else:
            self._complete(reply, call())
        return reply

    def _complete(self, reply: Reply, outcome: HttpOutcome) -> None:
        LOGGER.info("%s %s finished: %s", reply.operation, reply.target, outcome.status.name)
        self._finish(reply, outcome.status, outcome.result, outcome.error, outcome.error_string)


__all__ = ["HttpOutcome", "HttpRequest", "error_for_status_code", "perform"]
