"""Unit tests for the variable converter HTTP transport."""

from __future__ import annotations

import sys
import types
from typing import TYPE_CHECKING, Protocol

import pytest

if TYPE_CHECKING:
    from fastapi.testclient import TestClient


class _UvicornLike(Protocol):
    def run(self, app_ref: str, *, host: str, port: int, reload: bool) -> None: ...


def _client() -> TestClient:
    pytest.importorskip("fastapi")
    pytest.importorskip("httpx")

    from fastapi.testclient import TestClient

    from variable_converter.converter import http_server

    return TestClient(http_server.create_app())


STEP = {
    "source_variable": "${GIT_BRANCH}",
    "source_variable_pattern": r"release/(\d+)\.(\d+)",
    "destination_variable": "VERSION",
    "destination_variable_pattern": "{1}.{2}",
}


def test_health_and_ready_endpoints() -> None:
    """Report liveness and readiness."""
    client = _client()
    assert client.get("/healthz").json() == {"status": "ok"}
    assert client.get("/readyz").json() == {"status": "ready"}


def test_convert_returns_variable() -> None:
    """Return the produced variable for a matching request."""
    client = _client()
    response = client.post(
        "/v1/convert",
        json={**STEP, "env": {"GIT_BRANCH": "origin/release/2.7"}},
    )
    assert response.status_code == 200
    assert response.json() == {"name": "VERSION", "value": "2.7"}


def test_convert_failure_returns_reason_and_detail() -> None:
    """Return 422 with the failure kind when nothing matches."""
    client = _client()
    response = client.post("/v1/convert", json={**STEP, "env": {"GIT_BRANCH": "main"}})
    assert response.status_code == 422
    body = response.json()
    assert body["reason"] == "NoMatch"
    assert body["detail"].startswith("No match of reg ex value")


def test_convert_blank_destination_reported_first() -> None:
    """Report a blank destination name before an invalid pattern."""
    client = _client()
    response = client.post(
        "/v1/convert",
        json={**STEP, "destination_variable": "", "source_variable_pattern": "(["},
    )
    assert response.status_code == 422
    assert response.json()["reason"] == "BlankDestinationName"


def test_convert_rejects_unknown_fields() -> None:
    """Reject request bodies with unknown keys."""
    client = _client()
    response = client.post("/v1/convert", json={**STEP, "unexpected": "x"})
    assert response.status_code == 422
    assert "reason" not in response.json()


def test_main_uses_environment_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pass host/port from the environment to uvicorn."""
    pytest.importorskip("fastapi")
    from variable_converter.converter import http_server

    seen: dict[str, object] = {}

    def fake_run(app_ref: str, *, host: str, port: int, reload: bool) -> None:
        seen.update(app_ref=app_ref, host=host, port=port, reload=reload)

    fake_uvicorn: _UvicornLike = types.SimpleNamespace(run=fake_run)
    monkeypatch.setattr(http_server, "uvicorn", fake_uvicorn)
    monkeypatch.setenv("VARIABLE_CONVERTER_HTTP_HOST", "127.0.0.1")
    monkeypatch.setenv("VARIABLE_CONVERTER_HTTP_PORT", "9100")
    monkeypatch.setattr(sys, "argv", ["variable-converter-http"])

    http_server.main()

    assert seen == {
        "app_ref": "variable_converter.converter.http_server:app",
        "host": "127.0.0.1",
        "port": 9100,
        "reload": False,
    }


def test_main_requires_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fail clearly when uvicorn is not installed."""
    pytest.importorskip("fastapi")
    from variable_converter.converter import http_server

    monkeypatch.setattr(http_server, "uvicorn", None)
    with pytest.raises(RuntimeError, match="uvicorn is required"):
        http_server.main()
