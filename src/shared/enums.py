"""Shared enumerations used across modules."""

from __future__ import annotations

from datetime import date
from enum import StrEnum


class AppointmentStatus(StrEnum):
    NOVO = "NOVO"
    CONFIRMADO = "CONFIRMADO"
    EM_ROTA = "EM_ROTA"
    EM_EXECUCAO = "EM_EXECUCAO"
    FINALIZADO = "FINALIZADO"
    CANCELADO = "CANCELADO"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({AppointmentStatus.FINALIZADO, AppointmentStatus.CANCELADO})


class BusinessModel(StrEnum):
    FIXED = "FIXED"
    DELIVERY = "DELIVERY"

    @classmethod
    def of(cls, is_delivery: bool) -> "BusinessModel":
        return cls.DELIVERY if is_delivery else cls.FIXED


class VehicleType(StrEnum):
    CARRO = "CARRO"
    SUV = "SUV"
    MOTO = "MOTO"
    UTILITARIO = "UTILITARIO"


class ExpenseCategory(StrEnum):
    FIXO = "FIXO"
    VARIAVEL = "VARIAVEL"
    MARKETING = "MARKETING"
    IMPOSTO = "IMPOSTO"


class InsightType(StrEnum):
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    OPPORTUNITY = "OPPORTUNITY"


def day_of_week(value: date) -> int:
    """Return the weekday index with Sunday as 0, as stored in operating rules."""
    return (value.weekday() + 1) % 7
