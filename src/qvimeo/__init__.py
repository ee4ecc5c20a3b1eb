"""Qt/Python binding for the Vimeo API: requests, OAuth2 and list models.

The names exported here are importable without Qt.  The HTTP requests live in
:mod:`qvimeo.request.resources` and :mod:`qvimeo.request.authentication`, the
Qt list model in :mod:`qvimeo.models.resources_model`.
"""

from .models import ResourceListModel
from .request import BaseRequest, Reply, RequestError, RequestStatus

__version__ = "0.3.0"

__all__ = [
    "BaseRequest",
    "Reply",
    "RequestError",
    "RequestStatus",
    "ResourceListModel",
    "__version__",
]
