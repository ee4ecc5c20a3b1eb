"""Single-call requests against the Vimeo API.

Only the Qt-free contract is re-exported; :mod:`.http`, :mod:`.resources` and
:mod:`.authentication` need PySide6 and httpx and are imported directly.
"""

from .base import BaseRequest, Request
from .reply import Reply
from .types import Record, RequestError, RequestStatus, Value

__all__ = [
    "BaseRequest",
    "Record",
    "Reply",
    "Request",
    "RequestError",
    "RequestStatus",
    "Value",
]
