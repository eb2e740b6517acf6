"""Nó Evolution API para hosts de automação de workflows."""

__version__ = "0.1.0"
