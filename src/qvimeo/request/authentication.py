"""OAuth2 token requests."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlencode

from ..config import ACCESS_TOKEN_URL, AUTHORIZE_URL, DEFAULT_SCOPES, TOKEN_URL
from ..signal import Observable, Signal
from .http import HttpOutcome, HttpRequest
from .reply import Reply
from .types import RequestStatus

LOGGER = logging.getLogger(__name__)


class AuthenticationRequest(HttpRequest):
    """Obtain access tokens with the client-credentials or authorization-code grant.

    A successful call stores the returned ``access_token`` on the request
    (emitting ``access_token_changed``) before the reply's continuation runs.
    """

    scopes = Observable("scopes_changed", convert=list)

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        *,
        scopes: Optional[Iterable[str]] = None,
        redirect_uri: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(client_id, client_secret, **kwargs)
        self.scopes_changed = Signal("scopes_changed")
        self.scopes = scopes if scopes is not None else DEFAULT_SCOPES
        self.redirect_uri = redirect_uri

    def authorization_url(self, redirect_uri: Optional[str] = None, state: Optional[str] = None) -> str:
        """Return the page a user must visit to grant access to this client."""

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or self.redirect_uri,
            "scope": " ".join(self.scopes),
        }
        if state:
            params["state"] = state
        return f"{AUTHORIZE_URL}?{urlencode(params)}"

    def request_client_access_token(self) -> Reply:
        """Request an unauthenticated (client-credentials) access token."""

        return self._send(
            "client_access_token",
            "POST",
            TOKEN_URL,
            authorize=False,
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "client_credentials", "scope": " ".join(self.scopes)},
        )

    def exchange_code(self, code: str, redirect_uri: Optional[str] = None) -> Reply:
        """Exchange an authorization *code* for a user access token."""

        return self._send(
            "access_token",
            "POST",
            ACCESS_TOKEN_URL,
            authorize=False,
            auth=(self.client_id, self.client_secret),
            data={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": redirect_uri or self.redirect_uri,
            },
        )

    def _complete(self, reply: Reply, outcome: HttpOutcome) -> None:
        if outcome.status == RequestStatus.READY and isinstance(outcome.result, Mapping):
            token = outcome.result.get("access_token")
            if token:
                self.access_token = str(token)
                LOGGER.info("Obtained access token with scope %r", outcome.result.get("scope"))
        super()._complete(reply, outcome)


__all__ = ["AuthenticationRequest"]
