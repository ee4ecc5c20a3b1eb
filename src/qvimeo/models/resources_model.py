"""Qt list model exposing :class:`ResourceListModel` to views and QML."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from PySide6.QtCore import (
    Property,
    QAbstractListModel,
    QModelIndex,
    QObject,
    Qt,
    Signal,
    Slot,
)

from ..request.base import Request
from ..request.resources import ResourcesRequest
from ..request.types import RequestStatus
from .resource_list import ResourceListModel
from .roles import field_for_role, role_names

logger = logging.getLogger(__name__)


class ResourcesModel(QAbstractListModel):
    """List model for displaying Vimeo resources.

    Roles are created when the first record arrives: one role per field of
    that record, numbered from ``Qt.UserRole + 1`` in the record's key order,
    named after the field itself.  ``Qt.DisplayRole`` shows the ``name``
    field.

    Example::

        model = ResourcesModel()
        view.setModel(model)
        model.list("/videos", {"per_page": 10, "sort": "date", "query": "Qt"})
    """

    countChanged = Signal(int)  # noqa: N815
    statusChanged = Signal(int)  # noqa: N815
    schemaChanged = Signal()  # noqa: N815
    clientIdChanged = Signal()  # noqa: N815
    clientSecretChanged = Signal()  # noqa: N815
    accessTokenChanged = Signal(str)  # noqa: N815

    def __init__(self, request: Optional[Request] = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._list = ResourceListModel(request if request is not None else ResourcesRequest())

        self._list.rows_about_to_be_inserted.connect(self._on_rows_about_to_be_inserted)
        self._list.rows_inserted.connect(self._on_rows_inserted)
        self._list.rows_about_to_be_removed.connect(self._on_rows_about_to_be_removed)
        self._list.rows_removed.connect(self._on_rows_removed)
        self._list.row_changed.connect(self._on_row_changed)
        self._list.model_about_to_be_reset.connect(self._on_about_to_reset)
        self._list.model_reset.connect(self._on_reset)
        self._list.schema_changed.connect(self._on_schema_changed)
        self._list.count_changed.connect(self._on_count_changed)
        self._list.status_changed.connect(self._on_status_changed)
        self._list.client_id_changed.connect(self._on_client_id_changed)
        self._list.client_secret_changed.connect(self._on_client_secret_changed)
        self._list.access_token_changed.connect(self._on_access_token_changed)

    @property
    def resource_list(self) -> ResourceListModel:
        return self._list

    # ------------------------------------------------------------------
    # QAbstractListModel
    # ------------------------------------------------------------------
    def roleNames(self) -> Dict[int, bytes]:  # noqa: N802  # Qt override
        return role_names(self._list.schema)

    def rowCount(self, parent: QModelIndex | None = None) -> int:  # noqa: N802  # Qt override
        if parent is not None and parent.isValid():
            return 0
        return self._list.count

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not 0 <= index.row() < self._list.count:
            return None
        record = self._list.get(index.row())
        if role == Qt.ItemDataRole.DisplayRole:
            return record.get("name")
        field = field_for_role(self._list.schema, int(role))
        if field is None:
            return None
        return record.get(field)

    def canFetchMore(self, parent: QModelIndex | None = None) -> bool:  # noqa: N802  # Qt override
        if parent is not None and parent.isValid():
            return False
        return self._list.can_fetch_more()

    def fetchMore(self, parent: QModelIndex | None = None) -> None:  # noqa: N802  # Qt override
        if parent is not None and parent.isValid():
            return
        self._list.fetch_more()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @Property(int, notify=countChanged)
    def count(self) -> int:
        return self._list.count

    @Property(int, notify=statusChanged)
    def status(self) -> int:
        return int(self._list.status)

    @Property(int, notify=statusChanged)
    def error(self) -> int:
        return int(self._list.error)

    @Property(str, notify=statusChanged)
    def errorString(self) -> str:  # noqa: N802
        return self._list.error_string

    @Property("QVariant", notify=statusChanged)
    def result(self) -> Any:
        return self._list.result

    @Property("QStringList", notify=schemaChanged)
    def schema(self) -> list:
        return self._list.schema

    def _get_client_id(self) -> str:
        return self._list.client_id

    def _set_client_id(self, value: str) -> None:
        self._list.client_id = value

    clientId = Property(str, _get_client_id, _set_client_id, notify=clientIdChanged)  # noqa: N815

    def _get_client_secret(self) -> str:
        return self._list.client_secret

    def _set_client_secret(self, value: str) -> None:
        self._list.client_secret = value

    clientSecret = Property(str, _get_client_secret, _set_client_secret, notify=clientSecretChanged)  # noqa: N815

    def _get_access_token(self) -> str:
        return self._list.access_token

    def _set_access_token(self, value: str) -> None:
        self._list.access_token = value

    accessToken = Property(str, _get_access_token, _set_access_token, notify=accessTokenChanged)  # noqa: N815

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    @Slot(int, result="QVariantMap")
    def get(self, row: int) -> Dict[str, Any]:
        return dict(self._list.get(row))

    @Slot(str)
    @Slot(str, "QVariantMap")
    def list(self, path: str, filters: Optional[Dict[str, Any]] = None) -> None:
        self._list.list(path, filters)

    @Slot("QVariantMap")
    def insert(self, resource: Dict[str, Any]) -> None:
        self._list.insert(resource)

    @Slot(int, str)
    def insertInto(self, row: int, path: str) -> None:  # noqa: N802  # Qt slot uses camelCase
        self._list.insert_into(row, path)

    @Slot(int, "QVariantMap")
    def update(self, row: int, resource: Dict[str, Any]) -> None:
        self._list.update(row, resource)

    @Slot(int)
    @Slot(int, str)
    def delete(self, row: int, path: Optional[str] = None) -> None:
        self._list.delete(row, path)

    @Slot()
    def cancel(self) -> None:
        self._list.cancel()

    @Slot()
    def reload(self) -> None:
        self._list.reload()

    @Slot()
    def clear(self) -> None:
        self._list.clear()

    # ------------------------------------------------------------------
    # Core notifications
    # ------------------------------------------------------------------
    def _on_rows_about_to_be_inserted(self, first: int, last: int) -> None:
        self.beginInsertRows(QModelIndex(), first, last)

    def _on_rows_inserted(self, first: int, last: int) -> None:
        self.endInsertRows()

    def _on_rows_about_to_be_removed(self, first: int, last: int) -> None:
        self.beginRemoveRows(QModelIndex(), first, last)

    def _on_rows_removed(self, first: int, last: int) -> None:
        self.endRemoveRows()

    def _on_row_changed(self, row: int) -> None:
        index = self.index(row, 0)
        self.dataChanged.emit(index, index)

    def _on_about_to_reset(self) -> None:
        self.beginResetModel()

    def _on_reset(self) -> None:
        self.endResetModel()

    def _on_schema_changed(self, schema: list) -> None:
        logger.debug("Roles derived from schema: %s", schema)
        self.schemaChanged.emit()

    def _on_count_changed(self, count: int) -> None:
        self.countChanged.emit(count)

    def _on_status_changed(self, status: RequestStatus) -> None:
        self.statusChanged.emit(int(status))

    def _on_client_id_changed(self, _value: str) -> None:
        self.clientIdChanged.emit()

    def _on_client_secret_changed(self, _value: str) -> None:
        self.clientSecretChanged.emit()

    def _on_access_token_changed(self, value: str) -> None:
        self.accessTokenChanged.emit(value)


__all__ = ["ResourcesModel"]
