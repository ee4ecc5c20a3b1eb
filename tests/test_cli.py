from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from qvimeo import cli
from qvimeo.config import API_URL
from qvimeo.request.authentication import AuthenticationRequest
from qvimeo.request.resources import ResourcesRequest

runner = CliRunner()

PAGES = {
    "1": {
        "data": [{"uri": "/videos/1", "name": "Alpha"}, {"uri": "/videos/2", "name": "Beta"}],
        "paging": {"next": "/videos?page=2"},
    },
    "2": {
        "data": [{"uri": "/videos/3", "name": "Gamma"}],
        "paging": {"next": None},
    },
}


def _videos(request: httpx.Request) -> httpx.Response:
    if request.method == "GET" and request.url.path == "/videos":
        page = request.url.params.get("page", "1")
        return httpx.Response(200, json=PAGES[page])
    if request.method == "PATCH":
        return httpx.Response(200, json={"uri": request.url.path, **json.loads(request.content)})
    if request.method == "DELETE" and request.url.path == "/videos/404":
        return httpx.Response(404, json={"error": "The requested video couldn't be found."})
    if request.method == "DELETE":
        return httpx.Response(204)
    return httpx.Response(400, json={"error": "unexpected"})


@pytest.fixture
def settings_path(tmp_path: Path, monkeypatch) -> Path:
    path = tmp_path / "settings.json"
    monkeypatch.setenv("QVIMEO_SETTINGS", str(path))
    return path


@pytest.fixture
def mock_api(monkeypatch, settings_path):
    def factory(settings):
        client = httpx.Client(base_url=API_URL, transport=httpx.MockTransport(_videos))
        return ResourcesRequest(
            access_token=settings.get("authentication.access_token", ""),
            client=client,
            run_in_background=False,
        )

    monkeypatch.setattr(cli, "_resources_request", factory)


def test_list_fetches_requested_pages(mock_api):
    result = runner.invoke(cli.app, ["list", "/videos", "--per-page", "2", "--pages", "2"])

    assert result.exit_code == 0, result.output
    assert "Alpha" in result.output
    assert "Gamma" in result.output
    assert "3 resource(s)" in result.output


def test_list_single_page_reports_more(mock_api):
    result = runner.invoke(cli.app, ["list", "/videos", "-f", "name"])

    assert result.exit_code == 0, result.output
    assert "Beta" in result.output
    assert "Gamma" not in result.output
    assert "(more available)" in result.output


def test_update_and_delete(mock_api):
    updated = runner.invoke(cli.app, ["update", "/videos/1", "name=Renamed", "privacy={\"view\": \"anybody\"}"])
    deleted = runner.invoke(cli.app, ["delete", "/videos/2"])

    assert updated.exit_code == 0, updated.output
    assert "Updated /videos/1" in updated.output
    assert deleted.exit_code == 0, deleted.output
    assert "Deleted /videos/2" in deleted.output


def test_failed_request_exits_with_error(mock_api):
    result = runner.invoke(cli.app, ["delete", "/videos/404"])

    assert result.exit_code == 1
    assert "couldn't be found" in result.output


def test_auth_stores_token(monkeypatch, settings_path):
    def factory(settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"access_token": "fresh", "scope": "public"})

        return AuthenticationRequest(
            settings.get("authentication.client_id"),
            settings.get("authentication.client_secret"),
            client=httpx.Client(transport=httpx.MockTransport(handler)),
            run_in_background=False,
        )

    monkeypatch.setattr(cli, "_authentication_request", factory)

    result = runner.invoke(cli.app, ["auth", "--client-id", "id", "--client-secret", "secret"])

    assert result.exit_code == 0, result.output
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["authentication"]["client_id"] == "id"
    assert stored["authentication"]["access_token"] == "fresh"


def test_parse_assignments():
    assert cli.parse_assignments(["name=A", "count=3", "tags=[\"a\"]"]) == {
        "name": "A",
        "count": 3,
        "tags": ["a"],
    }
