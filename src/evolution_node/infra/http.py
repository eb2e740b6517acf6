"""Transporte HTTP padrão do nó (httpx assíncrono).

Implementa o contrato ``request(descriptor) -> JSON`` usado quando o nó roda
fora de um host que forneça o próprio helper. Exatamente uma chamada por
requisição:
- Sem retry (a política de retry pertence ao host)
- Timeout configurável
- Logging estruturado sem a apikey
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from evolution_node.node.models import RequestDescriptor
from evolution_node.observability.logging import get_logger, redact_headers

if TYPE_CHECKING:
    from evolution_node.config.settings import Settings

logger: logging.Logger = get_logger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem expor informações sensíveis.

    ``response`` guarda o corpo devolvido pelo servidor (JSON decodificado
    quando possível) para diagnóstico.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
        response: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable
        self.response = response


def _is_retryable_status(status_code: int) -> bool:
    """Determina se o status permitiria retry no host (429 ou 5xx)."""
    return status_code == 429 or 500 <= status_code < 600


def _error_body(response: httpx.Response) -> Any:
    """Corpo de erro para diagnóstico: JSON se possível, senão texto."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


def _log_request_start(descriptor: RequestDescriptor) -> None:
    logger.debug(
        "Executando requisição Evolution API",
        extra={
            "method": descriptor.method,
            "url": descriptor.url,
            "headers": redact_headers(descriptor.headers),
            "has_body": descriptor.body is not None,
        },
    )


def _log_request_success(descriptor: RequestDescriptor, status_code: int) -> None:
    logger.debug(
        "Requisição Evolution API bem-sucedida",
        extra={
            "method": descriptor.method,
            "url": descriptor.url,
            "status_code": status_code,
        },
    )


def _log_request_failure(descriptor: RequestDescriptor, status_code: int) -> None:
    logger.warning(
        "Requisição Evolution API falhou",
        extra={
            "method": descriptor.method,
            "url": descriptor.url,
            "status_code": status_code,
        },
    )


def _log_transport_error(descriptor: RequestDescriptor, msg: str, error: str) -> None:
    logger.warning(
        msg,
        extra={
            "method": descriptor.method,
            "url": descriptor.url,
            "error": error,
        },
    )


class HttpClient:
    """Cliente HTTP assíncrono de chamada única.

    Uso típico:
        async with HttpClient(config) as client:
            data = await client.request(descriptor)
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Inicializa cliente com configuração.

        Args:
            config: Configuração HTTP
            transport: Transporte httpx alternativo (ex.: ``httpx.MockTransport``)
        """
        self._config = config or HttpClientConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Retorna cliente httpx (lazy loading)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_seconds),
                headers=self._config.default_headers,
                verify=self._config.verify_ssl,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Fecha o cliente e libera recursos."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpClient:
        """Suporte a async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Fecha cliente ao sair do context."""
        await self.close()

    async def request(self, descriptor: RequestDescriptor) -> Any:
        """Executa o descritor e devolve o JSON da resposta.

        Corpo vazio resulta em None.

        Raises:
            HttpError: Timeout, erro de conexão, status não-2xx ou JSON inválido
        """
        client = await self._get_client()
        _log_request_start(descriptor)

        try:
            response = await client.request(
                descriptor.method,
                descriptor.url,
                headers=descriptor.headers,
                json=descriptor.body,
            )
        except httpx.TimeoutException as exc:
            _log_transport_error(descriptor, "Timeout em requisição HTTP", str(exc))
            raise HttpError("Timeout", is_retryable=True) from exc
        except httpx.TransportError as exc:
            _log_transport_error(descriptor, "Erro de conexão HTTP", str(exc))
            raise HttpError("Erro de conexão", is_retryable=True) from exc

        return self._process_response(response, descriptor)

    def _process_response(self, response: httpx.Response, descriptor: RequestDescriptor) -> Any:
        """Valida status e decodifica o JSON."""
        if not response.is_success:
            _log_request_failure(descriptor, response.status_code)
            raise HttpError(
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                is_retryable=_is_retryable_status(response.status_code),
                response=_error_body(response),
            )

        _log_request_success(descriptor, response.status_code)
        if not response.content:
            return None

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("Response JSON inválido", extra={"url": descriptor.url})
            raise HttpError(
                "Response JSON inválido",
                status_code=response.status_code,
                response=response.text,
            ) from exc


def create_http_client(settings: Settings | None = None) -> HttpClient:
    """Factory para criar cliente HTTP configurado.

    Args:
        settings: Configurações da aplicação. Se None, usa get_settings()

    Returns:
        HttpClient configurado conforme settings
    """
    if settings is None:
        from evolution_node.config.settings import get_settings

        settings = get_settings()

    config = HttpClientConfig(
        timeout_seconds=float(settings.evolution_request_timeout_seconds),
        default_headers={
            "Accept": "application/json",
            "User-Agent": f"{settings.service_name}/{settings.version}",
        },
        verify_ssl=settings.evolution_verify_ssl,
    )

    logger.info(
        "Cliente HTTP criado",
        extra={"timeout_seconds": config.timeout_seconds},
    )

    return HttpClient(config)
