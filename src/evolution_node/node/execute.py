"""Ponto de entrada do nó para o host de workflows."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from evolution_node.node.description import CREDENTIALS_NAME, NODE_DESCRIPTION
from evolution_node.node.dispatcher import dispatch
from evolution_node.node.models import Credentials, RequestDescriptor
from evolution_node.node.parameters import HostParameters
from evolution_node.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class ExecuteFunctions(Protocol):
    """Contrato consumido do host (parâmetros, credenciais e HTTP)."""

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        ...

    async def get_credentials(self, name: str) -> Mapping[str, Any]:
        ...

    async def request(self, options: dict[str, Any]) -> Any:
        ...


def return_json_array(data: Any) -> list[dict[str, Any]]:
    """Envolve a resposta no formato de itens do host (``[{"json": ...}]``)."""
    if data is None:
        return []
    items = data if isinstance(data, list) else [data]
    return [{"json": item} for item in items]


class EvolutionApiNode:
    """Nó Evolution API: um par recurso/operação -> uma chamada HTTP."""

    description: dict[str, Any] = NODE_DESCRIPTION
    credentials_name: str = CREDENTIALS_NAME

    async def execute(self, host: ExecuteFunctions) -> list[list[dict[str, Any]]]:
        """Lê parâmetros do item 0, chama a API e devolve os itens de saída.

        Erros do nó (``UnsupportedOperationError``, ``TransportError``,
        ``ShapeError``) são propagados sem tratamento local.
        """
        params = HostParameters(host, item_index=0)
        resource = params.get("resource")
        operation = params.get("operation")

        raw_credentials = await host.get_credentials(self.credentials_name)
        credentials = Credentials.model_validate(raw_credentials)

        async def transport(descriptor: RequestDescriptor) -> Any:
            return await host.request(descriptor.as_request_options())

        result = await dispatch(resource, operation, params, credentials, transport)
        items = return_json_array(result)
        logger.debug(
            "Execução concluída",
            extra={"resource": resource, "operation": operation, "items": len(items)},
        )
        return [items]
