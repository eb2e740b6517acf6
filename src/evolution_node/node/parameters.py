"""Leitura de parâmetros do nó.

Templates leem parâmetros por um ``ParameterReader`` (apenas ``get``).
Duas implementações:
- ``ParameterBag``: mapping em memória (testes, adapter HTTP)
- ``HostParameters``: delega para ``get_node_parameter`` do host no item 0
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from evolution_node.node.description import get_parameter_default

_MISSING = object()


class ParameterReader(Protocol):
    """Protocolo mínimo consumido pelos templates."""

    def get(self, name: str, default: Any = None) -> Any:
        """Retorna o valor do parâmetro ou o default."""
        ...


class NodeParameterSource(Protocol):
    """Contrato do host para leitura de parâmetros por item."""

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        ...


def _lookup(values: Mapping[str, Any], name: str) -> Any:
    """Resolve ``name`` em ``values``; nomes com ponto percorrem mappings."""
    if name in values:
        return values[name]

    current: Any = values
    for part in name.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


class ParameterBag:
    """Parâmetros em memória, somente leitura.

    Ausentes caem no default declarado na descrição do nó e, por fim,
    no default do chamador.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: Mapping[str, Any] = dict(values or {})

    def get(self, name: str, default: Any = None) -> Any:
        value = _lookup(self._values, name)
        if value is not _MISSING:
            return value
        declared = get_parameter_default(name)
        return default if declared is None else declared

    def get_node_parameter(self, name: str, item_index: int = 0, default: Any = None) -> Any:
        """Compatível com o contrato do host (o índice é ignorado)."""
        return self.get(name, default)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _lookup(self._values, name) is not _MISSING

    def __repr__(self) -> str:
        return f"ParameterBag(names={sorted(self._values)})"


class HostParameters:
    """Adapta ``get_node_parameter(name, item_index)`` do host para ``get``.

    O nó só lê o item 0. Cada nome é consultado no host no máximo uma vez
    por invocação.
    """

    def __init__(self, source: NodeParameterSource, item_index: int = 0) -> None:
        self._source = source
        self._item_index = item_index
        self._cache: dict[str, Any] = {}

    def get(self, name: str, default: Any = None) -> Any:
        if name not in self._cache:
            declared = get_parameter_default(name)
            fallback = default if declared is None else declared
            self._cache[name] = self._source.get_node_parameter(
                name, self._item_index, fallback
            )
        return self._cache[name]
