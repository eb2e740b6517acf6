"""Modelos de entrada/saída do adapter HTTP."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ExecuteRequest(BaseModel):
    """Uma invocação do nó: par recurso/operação + parâmetros do item 0."""

    resource: str
    operation: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    # Formato do host: {"server-url": ..., "apikey": ...}
    credentials: dict[str, str] | None = None


class ExecuteResponse(BaseModel):
    """Itens de saída no formato do host."""

    items: list[dict[str, Any]]
    correlation_id: str | None = None
