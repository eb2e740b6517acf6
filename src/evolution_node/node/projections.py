"""Projeções de resposta.

Todas as operações repassam a resposta crua, exceto ``fetch-instances``,
que vira uma lista de opções ``{name, value}`` para campos de seleção.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from evolution_node.node.errors import ShapeError
from evolution_node.node.models import OperationKey


def project_instance_options(response: Any, key: OperationKey) -> list[dict[str, Any]]:
    """Mapeia ``response["instances"]`` para ``[{name, value: id}]`` na ordem recebida.

    Raises:
        ShapeError: Se ``instances`` estiver ausente, não for lista, ou se
            algum item não for um objeto
    """
    if not isinstance(response, Mapping) or "instances" not in response:
        raise ShapeError(
            "Resposta sem campo 'instances'",
            resource=key.resource.value,
            operation=key.operation.value,
            response=response,
        )

    instances = response["instances"]
    if not isinstance(instances, list):
        raise ShapeError(
            "Campo 'instances' não é uma lista",
            resource=key.resource.value,
            operation=key.operation.value,
            response=response,
        )

    options: list[dict[str, Any]] = []
    for instance in instances:
        if not isinstance(instance, Mapping):
            raise ShapeError(
                "Item de 'instances' não é um objeto",
                resource=key.resource.value,
                operation=key.operation.value,
                response=response,
            )
        options.append({"name": instance.get("name"), "value": instance.get("id")})
    return options
