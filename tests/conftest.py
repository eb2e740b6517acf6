from __future__ import annotations

from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from evolution_node.api.app import create_app
from evolution_node.config.settings import Settings, get_settings
from evolution_node.infra.http import HttpClient
from evolution_node.node.models import Credentials, RequestDescriptor

SERVER_URL = "https://evo.example.com"
API_KEY = "test-apikey"


class RecordingTransport:
    """Transporte falso: grava descritores e devolve respostas enfileiradas."""

    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = {"ok": True} if response is None else response
        self.error = error
        self.calls: list[RequestDescriptor] = []

    async def __call__(self, descriptor: RequestDescriptor) -> Any:
        self.calls.append(descriptor)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture()
def credentials() -> Credentials:
    return Credentials.model_validate({"server-url": SERVER_URL, "apikey": API_KEY})


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def upstream_requests() -> list[httpx.Request]:
    return []


@pytest.fixture()
def upstream_handler(upstream_requests: list[httpx.Request]):
    """Handler padrão do MockTransport; testes podem sobrescrever ``reply``."""

    state: dict[str, Any] = {"status": 200, "json": {"ok": True}}

    def handler(request: httpx.Request) -> httpx.Response:
        upstream_requests.append(request)
        return httpx.Response(state["status"], json=state["json"])

    handler.state = state  # type: ignore[attr-defined]
    return handler


@pytest.fixture()
def client(monkeypatch: pytest.MonkeyPatch, upstream_handler):
    monkeypatch.setenv("EVOLUTION_SERVER_URL", SERVER_URL)
    monkeypatch.setenv("EVOLUTION_API_KEY", API_KEY)
    get_settings.cache_clear()
    http_client = HttpClient(transport=httpx.MockTransport(upstream_handler))
    app = create_app(Settings(), http_client=http_client)
    with TestClient(app) as test_client:
        yield test_client
    get_settings.cache_clear()


@pytest.fixture()
def make_transport() -> type[RecordingTransport]:
    return RecordingTransport
