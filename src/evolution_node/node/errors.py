"""Erros do nó Evolution API.

Cada erro carrega o par ``(resource, operation)`` que o originou para
diagnóstico no host. Nenhum deles é tratado localmente: todos são
propagados para o host, que decide a política de retry do workflow.
"""

from __future__ import annotations

from typing import Any


class NodeError(Exception):
    """Erro base do nó, com o par recurso/operação da invocação."""

    def __init__(self, message: str, resource: str, operation: str) -> None:
        super().__init__(message)
        self.resource = resource
        self.operation = operation


class UnsupportedOperationError(NodeError):
    """Nenhum template registrado para o par ``(resource, operation)``."""

    def __init__(self, resource: str, operation: str) -> None:
        super().__init__(
            f"Operação não suportada: {resource}/{operation}",
            resource=resource,
            operation=operation,
        )


class TransportError(NodeError):
    """Falha na chamada de saída (rede, status não-2xx, JSON inválido).

    A exceção original fica em ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        resource: str,
        operation: str,
        status_code: int | None = None,
        response: Any = None,
    ) -> None:
        super().__init__(message, resource=resource, operation=operation)
        self.status_code = status_code
        self.response = response


class ShapeError(NodeError):
    """Resposta sem o campo esperado pela projeção."""

    def __init__(
        self,
        message: str,
        resource: str,
        operation: str,
        response: Any = None,
    ) -> None:
        super().__init__(message, resource=resource, operation=operation)
        self.response = response
