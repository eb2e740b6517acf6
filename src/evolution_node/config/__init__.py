"""Configurações centralizadas do evolution_node.

Uso típico:
    from evolution_node.config import get_settings
"""

from evolution_node.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
