"""Rotas HTTP: expõem o nó para hosts que falam HTTP."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from evolution_node.api.dependencies import get_http_client, get_settings
from evolution_node.api.schemas import ExecuteRequest, ExecuteResponse
from evolution_node.config.settings import Settings
from evolution_node.infra.http import HttpClient
from evolution_node.node.description import NODE_DESCRIPTION
from evolution_node.node.dispatcher import dispatch
from evolution_node.node.errors import ShapeError, TransportError, UnsupportedOperationError
from evolution_node.node.execute import return_json_array
from evolution_node.node.models import Credentials
from evolution_node.observability.logging import get_logger
from evolution_node.observability.middleware import get_correlation_id

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """Healthcheck simples."""
    return {"status": "ok", "service": settings.service_name, "version": settings.version}


@router.get("/v1/description")
def node_description() -> dict[str, Any]:
    """Schema de UI do nó."""
    return NODE_DESCRIPTION


def _resolve_credentials(body: ExecuteRequest, settings: Settings) -> Credentials:
    raw = body.credentials or settings.default_credentials()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "missing_credentials"},
        )
    try:
        return Credentials.model_validate(raw)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_credentials"},
        ) from exc


@router.post("/v1/execute")
async def execute(
    body: ExecuteRequest,
    settings: Settings = Depends(get_settings),
    http_client: HttpClient = Depends(get_http_client),
) -> ExecuteResponse:
    """Executa uma operação do nó com uma única chamada ao Evolution API."""
    credentials = _resolve_credentials(body, settings)
    correlation_id = get_correlation_id()

    try:
        result = await dispatch(
            body.resource,
            body.operation,
            body.parameters,
            credentials,
            http_client.request,
        )
    except UnsupportedOperationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "unsupported_operation",
                "resource": exc.resource,
                "operation": exc.operation,
            },
        ) from exc
    except ShapeError as exc:
        logger.warning("Resposta com formato inesperado", extra={"operation": exc.operation})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "error": "unexpected_response_shape",
                "operation": exc.operation,
                "correlation_id": correlation_id,
            },
        ) from exc
    except TransportError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "error": "upstream_error",
                "operation": exc.operation,
                "status_code": exc.status_code,
                "response": exc.response,
                "correlation_id": correlation_id,
            },
        ) from exc

    return ExecuteResponse(items=return_json_array(result), correlation_id=correlation_id)
