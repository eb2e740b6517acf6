"""Camada de infraestrutura (transporte HTTP)."""
