"""Falhas tipadas do motor de presença e dos stores.

A camada HTTP mapeia cada uma para um status em ``roximity.main``.
"""

from __future__ import annotations


class AttendanceError(RuntimeError):
    """Base de todas as falhas da apuração."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AttendanceError):
    """Janela da sessão ou fração de presença inválida. Cabe ao chamador corrigir."""


class NotFoundError(AttendanceError):
    """A sessão referenciada não existe."""

    def __init__(self, resource: str, identifier: object):
        super().__init__(f"{resource} {identifier} not found")
        self.resource = resource
        self.identifier = identifier


class StoreError(AttendanceError):
    """Falha no banco (sessões, detecções, matrículas ou gravação dos registros)."""
