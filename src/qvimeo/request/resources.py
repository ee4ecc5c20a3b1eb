"""Resource CRUD calls against the Vimeo API."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .http import HttpRequest
from .reply import Reply


def query_params(filters: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Flatten list filters into query-string values.

    ``None`` entries are dropped, booleans become ``true``/``false`` and
    sequences are comma separated (``fields=uri,name``).
    """

    params: Dict[str, str] = {}
    for key, value in (filters or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            params[key] = ",".join(str(item) for item in value)
        else:
            params[key] = str(value)
    return params


class ResourcesRequest(HttpRequest):
    """List, insert, update and delete API resources.

    Every method returns the :class:`~qvimeo.request.reply.Reply` of the call
    it issued.  ``list`` results are shaped as
    ``{"data": [...], "paging": {"next": ...}}``; ``insert`` with a body and
    ``update`` return the affected resource, ``delete`` carries no body.
    """

    def list(self, path: str, filters: Optional[Mapping[str, Any]] = None) -> Reply:
        return self._send("list", "GET", path, params=query_params(filters))

    def insert(self, path: str, resource: Optional[Mapping[str, Any]] = None) -> Reply:
        if resource:
            return self._send("insert", "POST", path, json=dict(resource))
        # No body: attach an existing resource (``PUT /me/albums/1/videos/2``).
        return self._send("insert", "PUT", path)

    def update(self, uri: str, resource: Mapping[str, Any]) -> Reply:
        return self._send("update", "PATCH", uri, json=dict(resource))

    def delete(self, uri: str) -> Reply:
        return self._send("delete", "DELETE", uri)


__all__ = ["ResourcesRequest", "query_params"]
