"""Fábrica da aplicação FastAPI."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from evolution_node.api.routes import router
from evolution_node.config.settings import Settings, get_settings
from evolution_node.infra.http import HttpClient, create_http_client
from evolution_node.observability.logging import configure_logging, get_logger
from evolution_node.observability.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    http_client: HttpClient | None = None,
) -> FastAPI:
    """Cria a aplicação FastAPI."""
    settings = settings or get_settings()

    validation_errors: list[str] = []
    validation_errors.extend(settings.validate_logging_config())
    validation_errors.extend(settings.validate_credentials_config())

    if validation_errors:
        error_msg = "; ".join(validation_errors)
        raise ValueError(f"Configuração inválida: {error_msg}")

    configure_logging(settings.log_level.upper(), settings.service_name, settings.log_format)

    client = http_client or create_http_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await client.close()

    app = FastAPI(title=settings.service_name, version=settings.version, lifespan=lifespan)
    app.add_middleware(CorrelationIdMiddleware)
    app.include_router(router)

    app.state.settings = settings
    app.state.http_client = client

    logger.info(
        "Aplicação criada",
        extra={
            "environment": settings.environment,
            "default_credentials": settings.has_default_credentials,
        },
    )
    return app


app = create_app()
