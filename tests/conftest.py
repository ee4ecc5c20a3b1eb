import sys
from pathlib import Path
from typing import Any, Mapping, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make the sources importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from qvimeo.models.resource_list import ResourceListModel  # noqa: E402
from qvimeo.request.base import BaseRequest  # noqa: E402
from qvimeo.request.reply import Reply  # noqa: E402
from qvimeo.request.types import RequestError, RequestStatus  # noqa: E402


class FakeRequest(BaseRequest):
    """Request double whose calls stay pending until the test settles them."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple] = []

    def list(self, path: str, filters: Optional[Mapping[str, Any]] = None) -> Reply:
        self.calls.append(("list", path, dict(filters or {})))
        return self._start("list", path)

    def insert(self, path: str, resource: Optional[Mapping[str, Any]] = None) -> Reply:
        self.calls.append(("insert", path, None if resource is None else dict(resource)))
        return self._start("insert", path)

    def update(self, uri: str, resource: Mapping[str, Any]) -> Reply:
        self.calls.append(("update", uri, dict(resource)))
        return self._start("update", uri)

    def delete(self, uri: str) -> Reply:
        self.calls.append(("delete", uri))
        return self._start("delete", uri)

    def complete(self, result: Any = None) -> None:
        assert self.pending_reply is not None, "no call in flight"
        self._finish(self.pending_reply, RequestStatus.READY, {} if result is None else result)

    def fail(
        self,
        error: RequestError = RequestError.NETWORK_ERROR,
        error_string: str = "Connection refused",
    ) -> None:
        assert self.pending_reply is not None, "no call in flight"
        self._finish(self.pending_reply, RequestStatus.FAILED, None, error, error_string)


@pytest.fixture
def fake_request() -> FakeRequest:
    return FakeRequest()


@pytest.fixture
def model(fake_request: FakeRequest) -> ResourceListModel:
    return ResourceListModel(fake_request)
