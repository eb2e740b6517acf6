"""Dependências injetadas nas rotas."""

from __future__ import annotations

from fastapi import Request

from evolution_node.config.settings import Settings
from evolution_node.infra.http import HttpClient


def get_settings(request: Request) -> Settings:
    """Retorna settings da aplicação."""

    return request.app.state.settings


def get_http_client(request: Request) -> HttpClient:
    """Retorna o transporte HTTP compartilhado pela aplicação."""

    return request.app.state.http_client
