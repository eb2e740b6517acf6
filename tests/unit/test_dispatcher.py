"""Testes para o dispatcher.

Valida:
- Seleção de template e erro explícito para pares desconhecidos
- Uma única chamada ao transporte por dispatch
- Conversão de falhas do transporte em TransportError
- Idempotência da construção de descritores
"""

from __future__ import annotations

import pytest

from evolution_node.domain.enums import Operation, Resource
from evolution_node.infra.http import HttpError
from evolution_node.node.dispatcher import build_request, dispatch, resolve_template
from evolution_node.node.errors import ShapeError, TransportError, UnsupportedOperationError
from evolution_node.node.models import OperationKey
from evolution_node.node.templates.registry import TEMPLATES

CREDS = {"server-url": "https://evo.example.com", "apikey": "test-apikey"}


class TestResolveTemplate:
    """Lookup OperationKey -> template."""

    def test_every_operation_of_each_resource_has_a_template(self) -> None:
        instance_ops = {
            Operation.CREATE_BASIC,
            Operation.CREATE_PROXY,
            Operation.FETCH_INSTANCES,
            Operation.FETCH_INSTANCE,
            Operation.CONNECT,
            Operation.RESTART,
            Operation.LOGOUT,
            Operation.DELETE,
            Operation.SETTINGS,
        }
        message_ops = set(Operation) - instance_ops

        for op in instance_ops:
            assert OperationKey(Resource.INSTANCES, op) in TEMPLATES
        for op in message_ops:
            assert OperationKey(Resource.MESSAGES, op) in TEMPLATES
        assert len(TEMPLATES) == len(Operation)

    def test_short_resource_names_are_accepted(self) -> None:
        key, _ = resolve_template("messages", "sendText")

        assert key == OperationKey(Resource.MESSAGES, Operation.SEND_TEXT)

    @pytest.mark.parametrize(
        ("resource", "operation"),
        [
            ("instances-api", "sendText"),
            ("messages-api", "instance-basic"),
            ("chats-api", "sendText"),
            ("messages-api", "sendSticker"),
        ],
    )
    def test_unmatched_pair_raises(self, resource, operation) -> None:
        with pytest.raises(UnsupportedOperationError) as exc_info:
            resolve_template(resource, operation)

        assert exc_info.value.resource == resource
        assert exc_info.value.operation == operation


class TestBuildRequest:
    """Construção pura do descritor."""

    def test_identical_inputs_yield_identical_descriptors(self) -> None:
        params = {
            "instanceName": "bot1",
            "remoteJid": "5511999999999",
            "pollName": "?",
            "pollOptions": {"metadataValues": [{"optionValue": "A"}]},
        }

        first = build_request("messages-api", "sendPoll", params, CREDS)
        second = build_request("messages-api", "sendPoll", params, CREDS)

        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_trailing_slash_in_server_url_is_stripped(self) -> None:
        creds = {"server-url": "https://evo.example.com/", "apikey": "k"}

        descriptor = build_request(
            "instances-api", "instance-connect", {"instanceName": "a"}, creds
        )

        assert descriptor.url == "https://evo.example.com/instance/connect/a"

    def test_request_options_match_host_contract(self) -> None:
        descriptor = build_request(
            "messages-api",
            "sendText",
            {"instanceName": "bot1", "remoteJid": "1", "messageText": "hi"},
            CREDS,
        )

        options = descriptor.as_request_options()

        assert options == {
            "method": "POST",
            "uri": "https://evo.example.com/message/sendText/bot1",
            "headers": {"Content-Type": "application/json", "apikey": "test-apikey"},
            "body": {"number": "1", "text": "hi"},
            "json": True,
        }

    def test_request_options_without_body(self) -> None:
        descriptor = build_request("instances-api", "fetch-instances", {}, CREDS)

        assert "body" not in descriptor.as_request_options()


class TestDispatch:
    """Execução com transporte."""

    @pytest.mark.asyncio
    async def test_send_text_end_to_end(self, transport) -> None:
        """Cenário ponta a ponta do envio de texto."""
        params = {
            "instanceName": "bot1",
            "remoteJid": "5511999999999",
            "messageText": "hi",
            "mentionsEveryOne": False,
        }
        transport.response = {"key": {"id": "MSG1"}, "status": "PENDING"}

        result = await dispatch("messages", "sendText", params, CREDS, transport)

        assert result == {"key": {"id": "MSG1"}, "status": "PENDING"}
        assert len(transport.calls) == 1
        descriptor = transport.calls[0]
        assert descriptor.method == "POST"
        assert descriptor.url == "https://evo.example.com/message/sendText/bot1"
        assert descriptor.headers["apikey"] == "test-apikey"
        assert descriptor.body == {"number": "5511999999999", "text": "hi"}

    @pytest.mark.asyncio
    async def test_fetch_instances_is_projected(self, transport) -> None:
        transport.response = {
            "instances": [{"id": "1", "name": "X"}, {"id": "2", "name": "Y"}]
        }

        result = await dispatch("instances-api", "fetch-instances", {}, CREDS, transport)

        assert result == [{"name": "X", "value": "1"}, {"name": "Y", "value": "2"}]

    @pytest.mark.asyncio
    async def test_fetch_instances_without_instances_raises_shape_error(self, transport) -> None:
        transport.response = [{"instance": {"instanceName": "X"}}]

        with pytest.raises(ShapeError) as exc_info:
            await dispatch("instances-api", "fetch-instances", {}, CREDS, transport)

        assert exc_info.value.operation == "fetch-instances"
        assert exc_info.value.response == [{"instance": {"instanceName": "X"}}]

    @pytest.mark.asyncio
    async def test_other_operations_pass_response_through(self, transport) -> None:
        transport.response = {"instance": {"state": "open"}}

        result = await dispatch(
            "instances-api", "instance-connect", {"instanceName": "bot1"}, CREDS, transport
        )

        assert result is transport.response

    @pytest.mark.asyncio
    async def test_unsupported_operation_makes_no_call(self, transport) -> None:
        with pytest.raises(UnsupportedOperationError):
            await dispatch("messages-api", "sendSticker", {}, CREDS, transport)

        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_transport_http_error_becomes_transport_error(self, make_transport) -> None:
        cause = HttpError("HTTP 404", status_code=404, response={"message": "not found"})
        failing = make_transport(error=cause)

        with pytest.raises(TransportError) as exc_info:
            await dispatch(
                "instances-api", "delete-instance", {"instanceName": "ghost"}, CREDS, failing
            )

        error = exc_info.value
        assert error.__cause__ is cause
        assert error.status_code == 404
        assert error.response == {"message": "not found"}
        assert error.resource == "instances-api"
        assert error.operation == "delete-instance"
        assert len(failing.calls) == 1

    @pytest.mark.asyncio
    async def test_generic_transport_failure_is_wrapped(self, make_transport) -> None:
        failing = make_transport(error=ConnectionError("boom"))

        with pytest.raises(TransportError) as exc_info:
            await dispatch("instances-api", "fetch-instances", {}, CREDS, failing)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, ConnectionError)
