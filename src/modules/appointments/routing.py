"""Business-model routing: keep FIXED and DELIVERY workflows apart."""

from __future__ import annotations

from collections.abc import Iterable

from src.core.exceptions import ValidationError
from src.modules.appointments.allocation import (
    ensure_bay_free,
    ensure_bay_in_range,
    ensure_route_capacity,
)
from src.modules.appointments.schemas import Appointment, AppointmentBoard
from src.modules.studios.schemas import BusinessSettings
from src.shared.enums import TERMINAL_STATUSES, AppointmentStatus, BusinessModel


def _schedule_key(appointment: Appointment) -> tuple:
    return appointment.date, appointment.time


def filter_by_model(appointments: Iterable[Appointment], model: BusinessModel) -> list[Appointment]:
    return [item for item in appointments if item.business_model == model]


def active_queue(appointments: Iterable[Appointment], model: BusinessModel) -> list[Appointment]:
    items = [item for item in filter_by_model(appointments, model) if item.status not in TERMINAL_STATUSES]
    return sorted(items, key=_schedule_key)


def history(appointments: Iterable[Appointment], model: BusinessModel) -> list[Appointment]:
    items = [item for item in filter_by_model(appointments, model) if item.status in TERMINAL_STATUSES]
    return sorted(items, key=_schedule_key, reverse=True)


def partition(appointments: list[Appointment], model: BusinessModel) -> AppointmentBoard:
    return AppointmentBoard(queue=active_queue(appointments, model), history=history(appointments, model))


def check_capacity(
    appointment: Appointment,
    target: AppointmentStatus,
    box_id: int | None,
    appointments: list[Appointment],
    studio: BusinessSettings,
) -> None:
    """Apply the capacity rule of the appointment's model before a status change."""
    if appointment.is_delivery:
        if box_id is not None:
            raise ValidationError("Delivery appointments are not assigned to a bay")
        if target == AppointmentStatus.EM_ROTA:
            ensure_route_capacity(appointments, studio.driver_capacity, appointment.id)
        return

    if box_id is not None:
        ensure_bay_in_range(box_id, studio.box_capacity)
    if target == AppointmentStatus.EM_EXECUCAO:
        if box_id is None:
            raise ValidationError("Choose a bay before starting the service")
        ensure_bay_free(appointments, box_id, appointment.id)
