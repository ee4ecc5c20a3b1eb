"""Default configuration values for qvimeo."""

from __future__ import annotations

from typing import Final

# Every resource path handed to the request layer (``/videos``,
# ``/me/albums/123``...) is resolved against this base URL.
API_URL: Final[str] = "https://api.vimeo.com"
AUTHORIZE_URL: Final[str] = "https://api.vimeo.com/oauth/authorize"
TOKEN_URL: Final[str] = "https://api.vimeo.com/oauth/authorize/client"
ACCESS_TOKEN_URL: Final[str] = "https://api.vimeo.com/oauth/access_token"

# The API negotiates its version through the Accept header.
API_ACCEPT_HEADER: Final[str] = "application/vnd.vimeo.*+json;version=3.4"

REQUEST_TIMEOUT_SEC: Final[float] = 30.0
DEFAULT_PER_PAGE: Final[int] = 25
DEFAULT_SCOPES: Final[list[str]] = ["public"]

# Name of the filter carrying the page number when paginating list calls.
PAGE_FILTER: Final[str] = "page"
