"""List models keeping API resources in sync with request completions.

:class:`ResourceListModel` is pure Python.  The ``QAbstractListModel``
adapter is imported from :mod:`.resources_model`.
"""

from .resource_list import ResourceListModel

__all__ = ["ResourceListModel"]
