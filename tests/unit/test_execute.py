"""Testes para o ponto de entrada do host (EvolutionApiNode.execute)."""

from __future__ import annotations

from typing import Any

import pytest

from evolution_node.node.errors import TransportError, UnsupportedOperationError
from evolution_node.node.execute import EvolutionApiNode, return_json_array


class FakeHost:
    """Host mínimo: parâmetros por nome, credenciais e request gravado."""

    def __init__(
        self, params: dict[str, Any], response: Any = None, error: Exception | None = None
    ):
        self.params = params
        self.response = {"ok": True} if response is None else response
        self.error = error
        self.requests: list[dict[str, Any]] = []
        self.credential_reads: list[str] = []

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        assert item_index == 0
        return self.params.get(name, default)

    async def get_credentials(self, name: str) -> dict[str, str]:
        self.credential_reads.append(name)
        return {"server-url": "https://evo.example.com", "apikey": "k"}

    async def request(self, options: dict[str, Any]) -> Any:
        self.requests.append(options)
        if self.error is not None:
            raise self.error
        return self.response


class TestReturnJsonArray:
    def test_dict_becomes_single_item(self) -> None:
        assert return_json_array({"a": 1}) == [{"json": {"a": 1}}]

    def test_list_becomes_one_item_per_element(self) -> None:
        assert return_json_array([{"a": 1}, {"b": 2}]) == [{"json": {"a": 1}}, {"json": {"b": 2}}]

    def test_none_becomes_empty(self) -> None:
        assert return_json_array(None) == []


class TestExecute:
    @pytest.mark.asyncio
    async def test_send_text_through_host(self) -> None:
        host = FakeHost(
            {
                "resource": "messages-api",
                "operation": "sendText",
                "instanceName": "bot1",
                "remoteJid": "5511999999999",
                "messageText": "olá",
            },
            response={"key": {"id": "1"}},
        )

        output = await EvolutionApiNode().execute(host)

        assert output == [[{"json": {"key": {"id": "1"}}}]]
        assert host.credential_reads == ["httpbinApi"]
        assert host.requests == [
            {
                "method": "POST",
                "uri": "https://evo.example.com/message/sendText/bot1",
                "headers": {"Content-Type": "application/json", "apikey": "k"},
                "body": {"number": "5511999999999", "text": "olá"},
                "json": True,
            }
        ]

    @pytest.mark.asyncio
    async def test_fetch_instances_returns_option_items(self) -> None:
        host = FakeHost(
            {"resource": "instances-api", "operation": "fetch-instances"},
            response={"instances": [{"id": "1", "name": "X"}, {"id": "2", "name": "Y"}]},
        )

        output = await EvolutionApiNode().execute(host)

        assert output == [
            [{"json": {"name": "X", "value": "1"}}, {"json": {"name": "Y", "value": "2"}}]
        ]

    @pytest.mark.asyncio
    async def test_unsupported_operation_propagates(self) -> None:
        host = FakeHost({"resource": "messages-api", "operation": "sendSticker"})

        with pytest.raises(UnsupportedOperationError):
            await EvolutionApiNode().execute(host)

        assert host.requests == []

    @pytest.mark.asyncio
    async def test_host_request_failure_propagates_as_transport_error(self) -> None:
        host = FakeHost(
            {"resource": "instances-api", "operation": "restart-instance", "instanceName": "a"},
            error=RuntimeError("socket closed"),
        )

        with pytest.raises(TransportError):
            await EvolutionApiNode().execute(host)

    def test_description_declares_credentials(self) -> None:
        assert EvolutionApiNode.description["credentials"] == [
            {"name": "httpbinApi", "required": True}
        ]
