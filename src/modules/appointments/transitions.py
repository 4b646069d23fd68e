"""Appointment status machine.

FIXED appointments go straight from CONFIRMADO to EM_EXECUCAO (the vehicle
enters a bay); DELIVERY appointments pass through EM_ROTA while the driver
travels to the customer's address.
"""

from __future__ import annotations

from collections.abc import Mapping

from src.core.exceptions import InvalidTransition
from src.shared.enums import AppointmentStatus, BusinessModel


FIXED_TRANSITIONS: Mapping[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.NOVO: frozenset({AppointmentStatus.CONFIRMADO, AppointmentStatus.CANCELADO}),
    AppointmentStatus.CONFIRMADO: frozenset({AppointmentStatus.EM_EXECUCAO, AppointmentStatus.CANCELADO}),
    AppointmentStatus.EM_ROTA: frozenset(),
    AppointmentStatus.EM_EXECUCAO: frozenset({AppointmentStatus.FINALIZADO}),
    AppointmentStatus.FINALIZADO: frozenset(),
    AppointmentStatus.CANCELADO: frozenset(),
}

DELIVERY_TRANSITIONS: Mapping[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.NOVO: frozenset({AppointmentStatus.CONFIRMADO, AppointmentStatus.CANCELADO}),
    AppointmentStatus.CONFIRMADO: frozenset({AppointmentStatus.EM_ROTA, AppointmentStatus.CANCELADO}),
    AppointmentStatus.EM_ROTA: frozenset({AppointmentStatus.EM_EXECUCAO, AppointmentStatus.CANCELADO}),
    AppointmentStatus.EM_EXECUCAO: frozenset({AppointmentStatus.FINALIZADO}),
    AppointmentStatus.FINALIZADO: frozenset(),
    AppointmentStatus.CANCELADO: frozenset(),
}

TRANSITIONS: Mapping[BusinessModel, Mapping[AppointmentStatus, frozenset[AppointmentStatus]]] = {
    BusinessModel.FIXED: FIXED_TRANSITIONS,
    BusinessModel.DELIVERY: DELIVERY_TRANSITIONS,
}


def allowed_next(current: AppointmentStatus, model: BusinessModel) -> frozenset[AppointmentStatus]:
    return TRANSITIONS[model][current]


def is_allowed(current: AppointmentStatus, target: AppointmentStatus, model: BusinessModel) -> bool:
    return target in allowed_next(current, model)


def check_transition(
    current: AppointmentStatus,
    target: AppointmentStatus,
    model: BusinessModel,
    expected: AppointmentStatus | None = None,
) -> bool:
    """Validate a status change.

    Returns ``True`` when the change must be applied and ``False`` when it is a
    repeat of a change that already happened (the caller saw ``expected`` and
    the appointment is now at ``target``). Raises ``InvalidTransition``
    otherwise, including every call against a terminal status.
    """
    if current.is_terminal:
        raise InvalidTransition(f"Appointment is already {current} and can no longer change")

    if expected is not None and expected != current:
        if current == target and is_allowed(expected, target, model):
            return False
        raise InvalidTransition(f"Appointment is now {current}, not {expected}; refresh the schedule")

    if not is_allowed(current, target, model):
        options = ", ".join(sorted(allowed_next(current, model))) or "none"
        raise InvalidTransition(
            f"Cannot move a {model} appointment from {current} to {target} (allowed: {options})"
        )
    return True
