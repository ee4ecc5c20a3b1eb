"""Dynamic role table derived from a resource schema."""

from __future__ import annotations

from typing import Dict, Iterable

from PySide6.QtCore import Qt

FIRST_ROLE = int(Qt.ItemDataRole.UserRole) + 1


def role_names(schema: Iterable[str]) -> Dict[int, bytes]:
    """Return a mapping of Qt role numbers to field names.

    Roles are numbered from ``Qt.UserRole + 1`` in schema order so QML
    delegates can bind to ``model.name``, ``model.uri`` and so on.
    """

    return {FIRST_ROLE + offset: field.encode("utf-8") for offset, field in enumerate(schema)}


def field_for_role(schema: list[str], role: int) -> str | None:
    offset = role - FIRST_ROLE
    if 0 <= offset < len(schema):
        return schema[offset]
    return None


__all__ = ["FIRST_ROLE", "field_for_role", "role_names"]
