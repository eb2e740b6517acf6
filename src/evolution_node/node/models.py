"""Modelos do nó: chave de operação, credenciais e descritor de requisição.

Todos são criados no início de uma execução e descartados ao final;
nenhum estado sobrevive entre invocações.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from evolution_node.domain.enums import Operation, Resource
from evolution_node.node.errors import UnsupportedOperationError


@dataclass(frozen=True)
class OperationKey:
    """Par ``(resource, operation)`` que seleciona exatamente um template."""

    resource: Resource
    operation: Operation

    @classmethod
    def parse(cls, resource: str, operation: str) -> OperationKey:
        """Constrói a chave a partir dos valores crus vindos do host.

        Raises:
            UnsupportedOperationError: Se recurso ou operação são desconhecidos
        """
        try:
            return cls(Resource.parse(resource), Operation(operation))
        except ValueError as exc:
            raise UnsupportedOperationError(str(resource), str(operation)) from exc

    def __str__(self) -> str:
        return f"{self.resource.value}/{self.operation.value}"


class Credentials(BaseModel):
    """Credenciais opacas do Evolution API (``server-url`` + ``apikey``)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    server_url: str = Field(
        validation_alias=AliasChoices("server-url", "serverUrl", "server_url"),
    )
    api_key: str = Field(
        validation_alias=AliasChoices("apikey", "apiKey", "api_key"),
        repr=False,
    )

    @field_validator("server_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class RequestDescriptor(BaseModel):
    """Requisição de saída montada por um template."""

    model_config = ConfigDict(frozen=True)

    method: str
    url: str
    headers: dict[str, str]
    body: dict[str, Any] | None = None

    def as_request_options(self) -> dict[str, Any]:
        """Opções no formato do helper ``request`` do host."""
        options: dict[str, Any] = {
            "method": self.method,
            "uri": self.url,
            "headers": dict(self.headers),
            "json": True,
        }
        if self.body is not None:
            options["body"] = self.body
        return options
