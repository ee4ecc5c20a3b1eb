"""Status, error and payload types shared by requests and models."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, List, Mapping, Union

# ``Value`` is what a decoded JSON body may contain; ``Record`` is one
# resource (video, album, user...) keyed by field name.
Value = Union[str, int, float, bool, None, Mapping[str, Any], List[Any]]
Record = Dict[str, Value]


class RequestStatus(IntEnum):
    """Lifecycle of a single request call."""

    IDLE = 0
    LOADING = 1
    CANCELED = 2
    READY = 3
    FAILED = 4

    @property
    def is_terminal(self) -> bool:
        return self in (RequestStatus.CANCELED, RequestStatus.READY, RequestStatus.FAILED)


class RequestError(IntEnum):
    """Reason attached to a ``FAILED`` status."""

    NO_ERROR = 0
    NETWORK_ERROR = 1
    AUTHENTICATION_ERROR = 2
    NOT_FOUND_ERROR = 3
    PARSE_ERROR = 4
    SERVER_ERROR = 5


__all__ = ["Record", "RequestError", "RequestStatus", "Value"]
