"""Middlewares de observabilidade.

Cada request recebe um correlation_id (propagado do header quando válido),
disponível via ``get_correlation_id()`` e em ``request.state``, e devolvido
no header da resposta.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from contextvars import ContextVar, Token

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_ID_HEADER = "x-correlation-id"

# Ids vindos de fora vão para logs e headers: só caracteres seguros
_VALID_CORRELATION_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

logger = logging.getLogger(__name__)


def get_correlation_id() -> str:
    """Retorna o correlation_id corrente (ou vazio)."""

    return _correlation_id.get()


def set_correlation_id(value: str) -> Token[str]:
    """Define o correlation_id corrente; retorna token para reset."""

    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def resolve_correlation_id(incoming: str | None) -> str:
    """Reaproveita o id recebido se for válido; senão gera um novo."""
    if incoming and _VALID_CORRELATION_ID.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Propaga correlation_id e registra a conclusão de cada request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = resolve_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        request.state.correlation_id = correlation_id
        token = set_correlation_id(correlation_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "Requisição HTTP concluída",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        finally:
            reset_correlation_id(token)

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
