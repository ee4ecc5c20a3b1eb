"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
import logging
from typing import Any, Dict, List, Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from .errors import AuthenticationError, QVimeoError, RequestFailedError
from .models.resource_list import ResourceListModel
from .request.authentication import AuthenticationRequest
from .request.reply import Reply
from .request.resources import ResourcesRequest
from .request.types import RequestStatus
from .settings.manager import SettingsManager
from .utils.console_logger import ensure_console_logger

app = typer.Typer(help="Browse and edit Vimeo resources from the command line")
console = Console()

DEFAULT_FIELDS = ["uri", "name"]


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AuthenticationError as exc:
            typer.echo(f"Authentication failed: {exc}", err=True)
            raise typer.Exit(1) from exc
        except QVimeoError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _load_settings() -> SettingsManager:
    settings = SettingsManager()
    settings.load()
    return settings


def _resources_request(settings: SettingsManager) -> ResourcesRequest:
    return ResourcesRequest(
        settings.get("authentication.client_id", ""),
        settings.get("authentication.client_secret", ""),
        settings.get("authentication.access_token", ""),
        timeout=settings.get("api.timeout"),
        run_in_background=False,
    )


def _authentication_request(settings: SettingsManager) -> AuthenticationRequest:
    return AuthenticationRequest(
        settings.get("authentication.client_id", ""),
        settings.get("authentication.client_secret", ""),
        scopes=settings.get("authentication.scopes"),
        redirect_uri=settings.get("authentication.redirect_uri", ""),
        timeout=settings.get("api.timeout"),
        run_in_background=False,
    )


def parse_assignments(assignments: List[str]) -> Dict[str, Any]:
    """Turn ``key=value`` arguments into a payload; values are JSON when they parse."""

    payload: Dict[str, Any] = {}
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {assignment!r}")
        try:
            payload[key] = json.loads(raw)
        except ValueError:
            payload[key] = raw
    return payload


def _check(reply: Reply) -> Any:
    if reply.status != RequestStatus.READY:
        raise RequestFailedError(
            reply.error_string or reply.status.name.lower(), error=int(reply.error)
        )
    return reply.result


def _render(model: ResourceListModel, fields: List[str]) -> None:
    table = Table(show_lines=False)
    for field in fields:
        table.add_column(field)
    for record in model:
        table.add_row(*(_cell(record.get(field)) for field in fields))
    console.print(table)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests")) -> None:
    ensure_console_logger(
        logging.getLogger("qvimeo"),
        "qvimeo-cli",
        level=logging.DEBUG if verbose else logging.WARNING,
    )


@app.command()
@_handle_errors
def auth(
    client_id: Optional[str] = typer.Option(None, help="Client identifier"),
    client_secret: Optional[str] = typer.Option(None, help="Client secret"),
    scope: Optional[List[str]] = typer.Option(None, help="Requested scope (repeatable)"),
) -> None:
    """Request a client-credentials access token and store it in the settings."""

    settings = _load_settings()
    if client_id is not None:
        settings.set("authentication.client_id", client_id)
    if client_secret is not None:
        settings.set("authentication.client_secret", client_secret)
    if scope:
        settings.set("authentication.scopes", list(scope))
    request = _authentication_request(settings)
    reply = request.request_client_access_token()
    if reply.status != RequestStatus.READY or not request.access_token:
        raise AuthenticationError(reply.error_string or "no access token returned", error=int(reply.error))
    settings.set("authentication.access_token", request.access_token)
    print(f"[green]Stored access token in {settings.path}")


@app.command("list")
@_handle_errors
def list_resources(
    path: str = typer.Argument(..., help="Resource path, e.g. /videos or /me/albums"),
    per_page: Optional[int] = typer.Option(None, help="Items per page"),
    pages: int = typer.Option(1, min=1, help="Maximum number of pages to fetch"),
    filter_: Optional[List[str]] = typer.Option(None, "--filter", help="Extra key=value filter"),
    field: Optional[List[str]] = typer.Option(None, "--field", "-f", help="Column to show"),
) -> None:
    """List resources under PATH."""

    settings = _load_settings()
    filters = parse_assignments(filter_ or [])
    filters["per_page"] = per_page or settings.get("api.per_page")
    model = ResourceListModel(_resources_request(settings))
    model.list(path, filters)
    fetched = 1
    while model.status == RequestStatus.READY and fetched < pages and model.can_fetch_more():
        model.fetch_more()
        fetched += 1
    if model.status != RequestStatus.READY:
        raise RequestFailedError(model.error_string or model.status.name.lower(), error=int(model.error))

    schema = model.schema
    columns = list(field or []) or [name for name in DEFAULT_FIELDS if name in schema] or schema[:4]
    _render(model, columns)
    more = " (more available)" if model.can_fetch_more() else ""
    print(f"{model.count} resource(s){more}")


@app.command()
@_handle_errors
def insert(
    path: str = typer.Argument(..., help="Container path, e.g. /me/albums"),
    assignments: Optional[List[str]] = typer.Argument(None, help="key=value fields"),
) -> None:
    """Create a resource under PATH, or attach an existing one when no fields are given."""

    request = _resources_request(_load_settings())
    result = _check(request.insert(path, parse_assignments(assignments or [])))
    if isinstance(result, dict) and result.get("uri"):
        print(f"[green]Created {result['uri']}")
    else:
        print(f"[green]Added {path}")


@app.command()
@_handle_errors
def update(
    uri: str = typer.Argument(..., help="Resource uri, e.g. /videos/123"),
    assignments: List[str] = typer.Argument(..., help="key=value fields"),
) -> None:
    """Patch the resource at URI."""

    request = _resources_request(_load_settings())
    result = _check(request.update(uri, parse_assignments(assignments)))
    print(f"[green]Updated {result.get('uri', uri) if isinstance(result, dict) else uri}")


@app.command()
@_handle_errors
def delete(uri: str = typer.Argument(..., help="Resource uri, e.g. /videos/123")) -> None:
    """Delete the resource at URI."""

    request = _resources_request(_load_settings())
    _check(request.delete(uri))
    print(f"[green]Deleted {uri}")


if __name__ == "__main__":  # pragma: no cover
    app()
