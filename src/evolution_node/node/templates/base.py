"""Interfaces e utilidades base para templates de requisição."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol
from urllib.parse import quote

from evolution_node.node.models import Credentials, OperationKey, RequestDescriptor
from evolution_node.node.parameters import ParameterReader


class RequestTemplate(Protocol):
    """Protocolo para templates: parâmetros -> requisição -> projeção."""

    def build(
        self,
        params: ParameterReader,
        credentials: Credentials,
    ) -> RequestDescriptor:
        """Monta o descritor da requisição (função pura).

        Args:
            params: Parâmetros da invocação (item 0)
            credentials: Credenciais do Evolution API

        Returns:
            Descritor pronto para o transporte
        """
        ...

    def project(self, response: Any, key: OperationKey) -> Any:
        """Projeta a resposta crua no registro de saída."""
        ...


class PassThroughProjection:
    """Mixin com projeção identidade (padrão de quase todas as operações)."""

    def project(self, response: Any, key: OperationKey) -> Any:
        return response


def build_headers(credentials: Credentials, with_body: bool) -> dict[str, str]:
    """Headers padrão: ``apikey`` sempre, ``Content-Type`` só com body."""
    headers: dict[str, str] = {}
    if with_body:
        headers["Content-Type"] = "application/json"
    headers["apikey"] = credentials.api_key
    return headers


def build_url(credentials: Credentials, *segments: Any) -> str:
    """Concatena ``server_url`` com os segmentos de path, cada um codificado."""
    path = "/".join(quote(str(segment), safe="") for segment in segments)
    return f"{credentials.server_url}/{path}"


def build_descriptor(
    method: str,
    url: str,
    credentials: Credentials,
    body: dict[str, Any] | None = None,
) -> RequestDescriptor:
    """Monta ``RequestDescriptor`` com headers derivados da presença de body."""
    return RequestDescriptor(
        method=method,
        url=url,
        headers=build_headers(credentials, with_body=body is not None),
        body=body,
    )


def include_if_truthy(
    params: ParameterReader,
    fields: Iterable[str] | Mapping[str, str],
) -> dict[str, Any]:
    """Seleciona apenas campos com valor truthy.

    ``False``, ``0``, ``""`` e ``None`` são omitidos (nunca enviados como
    "desligado"). ``fields`` pode ser uma lista de nomes (chave do body igual
    ao parâmetro) ou um mapping ``chave_do_body -> parâmetro``.
    """
    pairs = fields.items() if isinstance(fields, Mapping) else ((f, f) for f in fields)
    selected: dict[str, Any] = {}
    for body_key, param_name in pairs:
        value = params.get(param_name)
        if value:
            selected[body_key] = value
    return selected


def collection_entries(params: ParameterReader, name: str) -> list[Mapping[str, Any]]:
    """Entradas de uma coleção repetível; qualquer valor não-lista vira ``[]``."""
    value = params.get(name)
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]
