"""Dispatcher de requisições do nó Evolution API.

Fluxo por invocação:
1. ``(resource, operation)`` -> template (lookup, sem cadeia de ifs)
2. template + parâmetros + credenciais -> ``RequestDescriptor``
3. uma única chamada ao transporte
4. projeção da resposta (identidade, exceto ``fetch-instances``)
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from evolution_node.node.errors import NodeError, TransportError, UnsupportedOperationError
from evolution_node.node.models import Credentials, OperationKey, RequestDescriptor
from evolution_node.node.parameters import ParameterBag, ParameterReader
from evolution_node.node.templates.base import RequestTemplate
from evolution_node.node.templates.registry import get_template
from evolution_node.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

Transport = Callable[[RequestDescriptor], Awaitable[Any]]


def _as_params(params: ParameterReader | Mapping[str, Any]) -> ParameterReader:
    if isinstance(params, Mapping):
        return ParameterBag(params)
    return params


def _as_credentials(credentials: Credentials | Mapping[str, Any]) -> Credentials:
    if isinstance(credentials, Credentials):
        return credentials
    return Credentials.model_validate(credentials)


def resolve_template(resource: str, operation: str) -> tuple[OperationKey, RequestTemplate]:
    """Seleciona o template do par.

    Raises:
        UnsupportedOperationError: Par desconhecido ou sem template
    """
    key = OperationKey.parse(resource, operation)
    template = get_template(key)
    if template is None:
        raise UnsupportedOperationError(resource, operation)
    return key, template


def build_request(
    resource: str,
    operation: str,
    params: ParameterReader | Mapping[str, Any],
    credentials: Credentials | Mapping[str, Any],
) -> RequestDescriptor:
    """Monta o descritor sem efeitos colaterais.

    Entradas idênticas produzem descritores iguais.
    """
    _, template = resolve_template(resource, operation)
    return template.build(_as_params(params), _as_credentials(credentials))


async def dispatch(
    resource: str,
    operation: str,
    params: ParameterReader | Mapping[str, Any],
    credentials: Credentials | Mapping[str, Any],
    transport: Transport,
) -> Any:
    """Executa a operação e devolve a resposta projetada.

    Args:
        resource: Recurso selecionado (``instances-api`` / ``messages-api``)
        operation: Operação selecionada
        params: Parâmetros do item 0
        credentials: ``{server-url, apikey}`` ou ``Credentials``
        transport: Corrotina ``request(descriptor) -> JSON``

    Returns:
        Resposta crua, ou lista de opções para ``fetch-instances``

    Raises:
        UnsupportedOperationError: Par sem template
        TransportError: Falha na chamada de saída
        ShapeError: Resposta sem o formato esperado
    """
    key, template = resolve_template(resource, operation)
    descriptor = template.build(_as_params(params), _as_credentials(credentials))

    logger.info(
        "Dispatch Evolution API",
        extra={"operation_key": str(key), "method": descriptor.method, "url": descriptor.url},
    )

    try:
        response = await transport(descriptor)
    except NodeError:
        raise
    except Exception as exc:
        status_code = getattr(exc, "status_code", None)
        logger.warning(
            "Falha no transporte",
            extra={
                "operation_key": str(key),
                "error_type": type(exc).__name__,
                "status_code": status_code,
            },
        )
        raise TransportError(
            f"Falha ao chamar Evolution API ({key}): {exc}",
            resource=key.resource.value,
            operation=key.operation.value,
            status_code=status_code,
            response=getattr(exc, "response", None),
        ) from exc

    return template.project(response, key)
