"""Scheduling facade used by the schedule view, the dashboard and public booking.

The module-level functions are pure: they take a ``TenantState`` snapshot and
return a new snapshot together with their result, leaving the input untouched
when they raise. ``AppointmentService`` binds them to a tenant store.
"""

from __future__ import annotations

import logging
from datetime import date

from src.core.exceptions import BusinessLogicError, NotFound, ValidationError
from src.modules.appointments.allocation import bay_occupancy, ensure_bay_in_range, first_free_bay
from src.modules.appointments.routing import active_queue, check_capacity, partition
from src.modules.appointments.schemas import (
    Appointment,
    AppointmentBoard,
    AppointmentDraft,
    BayOccupancy,
    StatusTransitionRequest,
)
from src.modules.appointments.transitions import check_transition
from src.modules.catalog.schemas import ServiceItem
from src.modules.schedule.service import generate_slots
from src.modules.studios.state import TenantState
from src.modules.studios.store import TenantStore, apply_change
from src.shared.enums import AppointmentStatus, BusinessModel
from src.shared.times import time_str_to_minutes
from src.shared.ulid import generate_ulid

logger = logging.getLogger(__name__)


def list_for_date(state: TenantState, target_date: date, model: BusinessModel) -> list[Appointment]:
    return [item for item in active_queue(state.appointments, model) if item.date == target_date]


def board(state: TenantState, model: BusinessModel) -> AppointmentBoard:
    return partition(state.appointments, model)


def occupancy(state: TenantState) -> BayOccupancy:
    return bay_occupancy(state.appointments, state.settings.box_capacity)


def compute_slots(state: TenantState, target_date: date, service: ServiceItem | int) -> list[str]:
    duration = service if isinstance(service, int) else service.duration_minutes
    return generate_slots(target_date, duration, state.settings)


def create(state: TenantState, draft: AppointmentDraft) -> tuple[TenantState, Appointment]:
    _validate_draft(draft)

    box_id = draft.box_id
    address = (draft.address or "").strip() or None
    if draft.is_delivery:
        if address is None:
            raise ValidationError("Delivery appointments need the customer's address")
        if box_id is not None:
            raise ValidationError("Delivery appointments are not assigned to a bay")
    elif box_id is not None:
        ensure_bay_in_range(box_id, state.settings.box_capacity)
    else:
        box_id = first_free_bay(state.appointments, state.settings.box_capacity)

    appointment = Appointment(
        id=generate_ulid(),
        customer_id=draft.customer_id,
        vehicle_id=draft.vehicle_id,
        box_id=box_id,
        service_id=draft.service_id,
        service_type=draft.service_type.strip(),
        date=draft.date,
        time=draft.time,
        duration_minutes=draft.duration_minutes,
        price=draft.price,
        status=AppointmentStatus.NOVO,
        is_delivery=draft.is_delivery,
        address=address,
        observation=draft.observation,
        staff_name=draft.staff_name,
    )
    new_state = state.model_copy(update={"appointments": [*state.appointments, appointment]})
    logger.info("Created %s appointment %s on %s %s", appointment.business_model, appointment.id, draft.date, draft.time)
    return new_state, appointment


def transition(
    state: TenantState,
    appointment_id: str,
    target: AppointmentStatus,
    expected: AppointmentStatus | None = None,
    box_id: int | None = None,
    cancellation_reason: str | None = None,
) -> tuple[TenantState, Appointment]:
    """Move an appointment along its model's status machine.

    Reaching FINALIZADO updates the customer's totals in the same snapshot.
    """
    appointment = _require_appointment(state, appointment_id)
    model = appointment.business_model
    if appointment.is_delivery or box_id is not None:
        effective_box = box_id
    else:
        effective_box = appointment.box_id
    try:
        if not check_transition(appointment.status, target, model, expected):
            return state, appointment
        check_capacity(appointment, target, effective_box, state.appointments, state.settings)
    except BusinessLogicError as exc:
        logger.warning("Rejected %s -> %s for %s: %s", appointment.status, target, appointment_id, exc)
        raise

    changes: dict = {"status": target}
    if not appointment.is_delivery and box_id is not None:
        changes["box_id"] = box_id
    if target == AppointmentStatus.CANCELADO and cancellation_reason:
        changes["cancellation_reason"] = cancellation_reason
    updated = appointment.model_copy(update=changes)

    new_state = _replace_appointment(state, updated)
    if target == AppointmentStatus.FINALIZADO:
        new_state = _record_completion(new_state, updated)
    logger.info("Appointment %s moved %s -> %s", appointment_id, appointment.status, target)
    return new_state, updated


def assign_box(state: TenantState, appointment_id: str, box_id: int) -> tuple[TenantState, Appointment]:
    appointment = _require_appointment(state, appointment_id)
    if appointment.is_delivery:
        raise ValidationError("Delivery appointments are not assigned to a bay")
    if appointment.status.is_terminal:
        raise ValidationError(f"Appointment is already {appointment.status}")
    check_capacity(appointment, appointment.status, box_id, state.appointments, state.settings)
    updated = appointment.model_copy(update={"box_id": box_id})
    return _replace_appointment(state, updated), updated


def _validate_draft(draft: AppointmentDraft) -> None:
    if not draft.customer_id.strip():
        raise ValidationError("Choose a customer for the appointment")
    if not draft.service_type.strip():
        raise ValidationError("Choose a service for the appointment")
    if draft.duration_minutes <= 0:
        raise ValidationError("Service duration must be greater than zero")
    if draft.price < 0:
        raise ValidationError("Price cannot be negative")
    try:
        time_str_to_minutes(draft.time)
    except ValueError as exc:
        raise ValidationError("Time must use the HH:MM format") from exc


def _require_appointment(state: TenantState, appointment_id: str) -> Appointment:
    appointment = state.find_appointment(appointment_id)
    if appointment is None:
        raise NotFound("This appointment no longer exists, refresh the schedule")
    return appointment


def _replace_appointment(state: TenantState, updated: Appointment) -> TenantState:
    appointments = [updated if item.id == updated.id else item for item in state.appointments]
    return state.model_copy(update={"appointments": appointments})


def _record_completion(state: TenantState, appointment: Appointment) -> TenantState:
    customer = state.find_customer(appointment.customer_id)
    if customer is None:
        logger.warning(
            "Customer %s of finished appointment %s not found; totals not updated",
            appointment.customer_id,
            appointment.id,
        )
        return state

    changes = {
        "total_spent": customer.total_spent + appointment.price,
        "last_visit": appointment.date,
    }
    if state.settings.loyalty_program_enabled:
        changes["washes"] = customer.washes + 1
    updated = customer.model_copy(update=changes)
    customers = [updated if item.id == customer.id else item for item in state.customers]
    return state.model_copy(update={"customers": customers})


class AppointmentService:
    def __init__(self, store: TenantStore, tenant_key: str):
        self.store = store
        self.tenant_key = tenant_key

    async def list_for_date(self, target_date: date, model: BusinessModel) -> list[Appointment]:
        state = await self.store.load(self.tenant_key)
        return list_for_date(state, target_date, model)

    async def board(self, model: BusinessModel) -> AppointmentBoard:
        return board(await self.store.load(self.tenant_key), model)

    async def occupancy(self) -> BayOccupancy:
        return occupancy(await self.store.load(self.tenant_key))

    async def create(self, draft: AppointmentDraft) -> Appointment:
        return await apply_change(self.store, self.tenant_key, lambda state: create(state, draft))

    async def transition(self, appointment_id: str, request: StatusTransitionRequest) -> Appointment:
        return await apply_change(
            self.store,
            self.tenant_key,
            lambda state: transition(
                state,
                appointment_id,
                request.target_status,
                expected=request.expected_status,
                box_id=request.box_id,
                cancellation_reason=request.cancellation_reason,
            ),
        )

    async def assign_box(self, appointment_id: str, box_id: int) -> Appointment:
        return await apply_change(self.store, self.tenant_key, lambda state: assign_box(state, appointment_id, box_id))
