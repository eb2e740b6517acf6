"""Nó Evolution API: dispatcher de templates de requisição.

Este pacote exporta o ponto de entrada do host e as operações do
dispatcher.
"""

from evolution_node.node.dispatcher import build_request, dispatch, resolve_template
from evolution_node.node.errors import (
    NodeError,
    ShapeError,
    TransportError,
    UnsupportedOperationError,
)
from evolution_node.node.execute import EvolutionApiNode, return_json_array
from evolution_node.node.models import Credentials, OperationKey, RequestDescriptor
from evolution_node.node.parameters import HostParameters, ParameterBag

__all__ = [
    "Credentials",
    "EvolutionApiNode",
    "HostParameters",
    "NodeError",
    "OperationKey",
    "ParameterBag",
    "RequestDescriptor",
    "ShapeError",
    "TransportError",
    "UnsupportedOperationError",
    "build_request",
    "dispatch",
    "resolve_template",
    "return_json_array",
]
