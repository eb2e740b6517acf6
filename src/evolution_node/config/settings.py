"""Configurações da aplicação via variáveis de ambiente.

Credenciais padrão (``EVOLUTION_SERVER_URL`` / ``EVOLUTION_API_KEY``) só são
usadas pelo adapter HTTP quando a requisição não traz credenciais próprias.
Nunca hardcode a apikey.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from evolution_node.node.description import CREDENTIALS_NAME


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "evolution_node"
    version: str = "0.1.0"
    environment: str = "development"

    # Observabilidade
    log_level: str = "INFO"
    log_format: str = "json"  # json | text

    # Evolution API
    evolution_server_url: str | None = None  # Ex.: https://evolution.example.com
    evolution_api_key: str | None = None  # apikey global do servidor
    evolution_request_timeout_seconds: float = 30.0  # Timeout HTTP do transporte padrão
    evolution_verify_ssl: bool = True
    credentials_name: str = CREDENTIALS_NAME

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_staging(self) -> bool:
        """Retorna True se ambiente é staging."""
        return self.environment.lower() in ("staging", "stage")

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é desenvolvimento."""
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def has_default_credentials(self) -> bool:
        """True se servidor e apikey padrão estão configurados."""
        return bool(self.evolution_server_url and self.evolution_api_key)

    def default_credentials(self) -> dict[str, str] | None:
        """Credenciais padrão no formato do host, ou None."""
        if not self.has_default_credentials:
            return None
        return {
            "server-url": self.evolution_server_url or "",
            "apikey": self.evolution_api_key or "",
        }

    def validate_logging_config(self) -> list[str]:
        """Valida nível e formato de log. Retorna lista de erros (vazia = OK)."""
        errors: list[str] = []
        if self.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            errors.append(f"LOG_LEVEL '{self.log_level}' inválido")
        if self.log_format.lower() not in {"json", "text"}:
            errors.append("LOG_FORMAT inválido: use json | text")
        return errors

    def validate_credentials_config(self) -> list[str]:
        """Valida credenciais padrão.

        Servidor sem apikey (ou o contrário) é configuração pela metade.
        Em staging/prod o servidor deve usar https.
        """
        errors: list[str] = []
        if bool(self.evolution_server_url) != bool(self.evolution_api_key):
            errors.append(
                "EVOLUTION_SERVER_URL e EVOLUTION_API_KEY devem ser configurados juntos"
            )
        if (
            self.evolution_server_url
            and (self.is_staging or self.is_production)
            and not self.evolution_server_url.startswith("https://")
        ):
            errors.append("EVOLUTION_SERVER_URL deve usar https em staging/production")
        if self.evolution_request_timeout_seconds <= 0:
            errors.append("EVOLUTION_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Retorna instância única de Settings."""
    return Settings()
