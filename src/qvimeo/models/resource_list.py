"""Pure Python resource list model — no Qt dependency.

Keeps an ordered collection of API records in sync with the results of list,
insert, update and delete calls issued through a single request.  Qt views
reach it through :class:`~qvimeo.models.resources_model.ResourcesModel`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from ..config import PAGE_FILTER
from ..request.base import Request
from ..request.reply import Reply
from ..request.types import Record, RequestError, RequestStatus
from ..signal import Signal

LOGGER = logging.getLogger(__name__)


def parent_path(uri: str) -> str:
    """Return *uri* without its last segment (``/videos/1`` -> ``/videos``)."""

    return uri.rpartition("/")[0]


def last_segment(uri: str) -> str:
    return uri.rpartition("/")[2]


def splice_uri(path: str, uri: str) -> str:
    """Address the resource behind *uri* inside the container at *path*."""

    separator = "" if path.endswith("/") else "/"
    return f"{path}{separator}{last_segment(uri)}"


def next_page(filters: Mapping[str, Any]) -> int:
    try:
        page = int(filters.get(PAGE_FILTER) or 0)
    except (TypeError, ValueError):
        page = 0
    return page + 1 if page > 0 else 2


class ResourceListModel:
    """Ordered, observable collection of API resources.

    At most one call is in flight at a time: every operation that issues a
    call is silently ignored while the previous one is pending or the request
    reports ``LOADING``.  Completions only touch the collection when the call
    finished ``READY``; ``status_changed`` is re-emitted on every completion
    regardless.

    Records are matched by their ``uri`` field.  The schema (ordered field
    names) is taken from the first record added to an empty collection and
    stays fixed until the collection is cleared.
    """

    def __init__(self, request: Request) -> None:
        self._request = request
        self._items: List[Record] = []
        self._schema: Optional[List[str]] = None
        self._resource_path = ""
        self._filters: Dict[str, Any] = {}
        self._has_more = False
        self._pending_delete_uri: Optional[str] = None
        self._reply: Optional[Reply] = None

        self.status_changed = Signal("status_changed")
        self.count_changed = Signal("count_changed")
        self.schema_changed = Signal("schema_changed")
        self.rows_about_to_be_inserted = Signal("rows_about_to_be_inserted")
        self.rows_inserted = Signal("rows_inserted")
        self.rows_about_to_be_removed = Signal("rows_about_to_be_removed")
        self.rows_removed = Signal("rows_removed")
        self.row_changed = Signal("row_changed")
        self.model_about_to_be_reset = Signal("model_about_to_be_reset")
        self.model_reset = Signal("model_reset")

        self.client_id_changed = request.client_id_changed
        self.client_secret_changed = request.client_secret_changed
        self.access_token_changed = request.access_token_changed

    # -- request mirrors ---------------------------------------------------

    @property
    def request(self) -> Request:
        return self._request

    @property
    def status(self) -> RequestStatus:
        return self._request.status

    @property
    def error(self) -> RequestError:
        return self._request.error

    @property
    def error_string(self) -> str:
        return self._request.error_string

    @property
    def result(self) -> Any:
        return self._request.result

    @property
    def client_id(self) -> str:
        return self._request.client_id

    @client_id.setter
    def client_id(self, value: str) -> None:
        self._request.client_id = value

    @property
    def client_secret(self) -> str:
        return self._request.client_secret

    @client_secret.setter
    def client_secret(self, value: str) -> None:
        self._request.client_secret = value

    @property
    def access_token(self) -> str:
        return self._request.access_token

    @access_token.setter
    def access_token(self, value: str) -> None:
        self._request.access_token = value

    # -- collection access -------------------------------------------------

    @property
    def resource_path(self) -> str:
        return self._resource_path

    @property
    def filters(self) -> Dict[str, Any]:
        return dict(self._filters)

    @property
    def schema(self) -> List[str]:
        return list(self._schema or [])

    @property
    def items(self) -> List[Record]:
        return list(self._items)

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def pending_delete_uri(self) -> Optional[str]:
        return self._pending_delete_uri

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._items))

    def get(self, row: int) -> Record:
        """Return the record at *row*, or an empty record when out of range."""

        if 0 <= row < len(self._items):
            return self._items[row]
        return {}

    def data(self, row: int, field: str) -> Any:
        return self.get(row).get(field)

    def index_of(self, uri: str) -> int:
        for i, item in enumerate(self._items):
            if item.get("uri") == uri:
                return i
        return -1

    def is_busy(self) -> bool:
        return self._reply is not None or self.status == RequestStatus.LOADING

    # -- operations --------------------------------------------------------

    def can_fetch_more(self) -> bool:
        return not self.is_busy() and self._has_more

    def fetch_more(self) -> None:
        if not self.can_fetch_more():
            return
        self._filters[PAGE_FILTER] = next_page(self._filters)
        self._issue(self._request.list(self._resource_path, dict(self._filters)), self._on_list_finished)

    def list(self, path: str, filters: Optional[Mapping[str, Any]] = None) -> None:
        """Replace the collection with the first page of *path*."""

        if self.is_busy():
            return
        self.clear()
        self._resource_path = path
        self._filters = dict(filters or {})
        self._has_more = False
        self._issue(self._request.list(path, dict(self._filters)), self._on_list_finished)

    def reload(self) -> None:
        """Clear the collection and list the current path again from page 1."""

        if self.is_busy():
            return
        self.clear()
        if self._filters.get(PAGE_FILTER) is not None:
            self._filters[PAGE_FILTER] = 1
        self._has_more = False
        self._issue(
            self._request.list(self._resource_path, dict(self._filters)),
            self._on_list_finished,
        )

    def insert(self, resource: Mapping[str, Any]) -> None:
        """Create *resource* under the current path."""

        if self.is_busy():
            return
        self._issue(self._request.insert(self._resource_path, resource), self._on_insert_finished)

    def insert_into(self, row: int, path: str) -> None:
        """Add the existing resource at *row* to the container at *path*."""

        if self.is_busy() or not self._valid_row(row):
            return
        target = splice_uri(path, str(self._items[row].get("uri", "")))
        self._issue(self._request.insert(target), self._on_insert_finished)

    def update(self, row: int, resource: Mapping[str, Any]) -> None:
        """Patch the resource at *row* with the fields in *resource*."""

        if self.is_busy() or not self._valid_row(row):
            return
        uri = str(self._items[row].get("uri", ""))
        self._issue(self._request.update(uri, resource), self._on_update_finished)

    def delete(self, row: int, path: Optional[str] = None) -> None:
        """Delete the resource at *row*, or remove it from *path* when given."""

        if self.is_busy() or not self._valid_row(row):
            return
        uri = str(self._items[row].get("uri", ""))
        self._pending_delete_uri = uri if path is None else splice_uri(path, uri)
        self._issue(self._request.delete(self._pending_delete_uri), self._on_delete_finished)

    def cancel(self) -> None:
        self._request.cancel()

    def clear(self) -> None:
        self.model_about_to_be_reset.emit()
        self._items = []
        self._schema = None
        self.model_reset.emit()
        self.count_changed.emit(0)

    # -- internals ---------------------------------------------------------

    def _valid_row(self, row: int) -> bool:
        return 0 <= row < len(self._items)

    def _issue(self, reply: Reply, handler: Callable[[Reply], None]) -> None:
        LOGGER.debug("Issued %r", reply)
        self._reply = reply
        self.status_changed.emit(self.status)
        reply.add_done_callback(handler)

    def _settle(self, reply: Reply) -> bool:
        """Release the busy flag; ``True`` when the call finished ``READY``."""

        if reply is self._reply:
            self._reply = None
        if reply.status != RequestStatus.READY:
            LOGGER.info(
                "%s %s ended %s: %s",
                reply.operation,
                reply.target,
                reply.status.name,
                reply.error_string,
            )
            return False
        return True

    def _set_schema(self, record: Mapping[str, Any]) -> None:
        self._schema = list(record.keys())
        self.schema_changed.emit(list(self._schema))

    def _on_list_finished(self, reply: Reply) -> None:
        if self._settle(reply) and isinstance(reply.result, Mapping) and reply.result:
            result = reply.result
            paging = result.get("paging")
            self._has_more = isinstance(paging, Mapping) and paging.get("next") is not None
            records = [dict(item) for item in result.get("data") or [] if isinstance(item, Mapping)]
            if records:
                if not self._items:
                    self._set_schema(records[0])
                first = len(self._items)
                last = first + len(records) - 1
                self.rows_about_to_be_inserted.emit(first, last)
                self._items.extend(records)
                self.rows_inserted.emit(first, last)
                self.count_changed.emit(len(self._items))
        self.status_changed.emit(self.status)

    def _on_insert_finished(self, reply: Reply) -> None:
        if self._settle(reply) and isinstance(reply.result, Mapping) and reply.result:
            record = dict(reply.result)
            uri = str(record.get("uri", ""))
            existing = self.index_of(uri)
            if existing >= 0:
                # Already listed: keep uris unique, take the server's copy.
                self._items[existing] = record
                self.row_changed.emit(existing)
            elif parent_path(uri) == self._resource_path:
                if not self._items:
                    self._set_schema(record)
                self.rows_about_to_be_inserted.emit(0, 0)
                self._items.insert(0, record)
                self.rows_inserted.emit(0, 0)
                self.count_changed.emit(len(self._items))
            else:
                LOGGER.debug("Inserted %s outside %s", record.get("uri"), self._resource_path)
        self.status_changed.emit(self.status)

    def _on_update_finished(self, reply: Reply) -> None:
        if self._settle(reply) and isinstance(reply.result, Mapping) and reply.result:
            uri = reply.result.get("uri")
            if uri is not None:
                # Resolved by uri rather than by the row passed to update():
                # the collection may have changed while the call was in flight.
                for i, item in enumerate(self._items):
                    if item.get("uri") == uri:
                        self._items[i] = dict(reply.result)
                        self.row_changed.emit(i)
                        break
        self.status_changed.emit(self.status)

    def _on_delete_finished(self, reply: Reply) -> None:
        uri = self._pending_delete_uri
        self._pending_delete_uri = None
        if self._settle(reply) and uri is not None:
            for i, item in enumerate(self._items):
                if item.get("uri") == uri:
                    self.rows_about_to_be_removed.emit(i, i)
                    del self._items[i]
                    self.rows_removed.emit(i, i)
                    self.count_changed.emit(len(self._items))
                    break
        self.status_changed.emit(self.status)


__all__ = ["ResourceListModel", "next_page", "parent_path", "splice_uri"]
