"""Templates de requisição por par recurso/operação."""

from evolution_node.node.templates.base import (
    RequestTemplate,
    build_headers,
    include_if_truthy,
)
from evolution_node.node.templates.registry import TEMPLATES, get_template

__all__ = [
    "RequestTemplate",
    "TEMPLATES",
    "build_headers",
    "get_template",
    "include_if_truthy",
]
