"""Client-facing booking flow.

Bookings go through the same ``create`` path as the internal schedule, after
checking that online booking is on, the date lies in the booking window and
the time is one of the offered slots.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from src.core.config import settings
from src.core.exceptions import BookingUnavailable
from src.modules.appointments.schemas import Appointment, AppointmentDraft
from src.modules.appointments.service import compute_slots, create
from src.modules.booking.schemas import PublicBookingRequest
from src.modules.catalog.service import require_service
from src.modules.customers.schemas import Customer, CustomerCreate
from src.modules.customers.service import add_customer, add_vehicle, find_by_phone
from src.modules.studios.state import TenantState

logger = logging.getLogger(__name__)


def booking_window(today: date | None = None) -> tuple[date, date]:
    """First and last date a client may book, matching the public calendar."""
    first = today or date.today()
    return first, first + timedelta(days=settings.public_booking_horizon_days - 1)


def public_slots(
    state: TenantState,
    target_date: date,
    service_id: str,
    today: date | None = None,
) -> list[str]:
    _ensure_online_booking(state)
    first, last = booking_window(today)
    if not first <= target_date <= last:
        raise BookingUnavailable(f"Online booking is open from {first} to {last}")
    service = require_service(state, service_id)
    if not service.active:
        raise BookingUnavailable("This service is not available for online booking")
    return compute_slots(state, target_date, service)


def book_online(
    state: TenantState,
    request: PublicBookingRequest,
    today: date | None = None,
) -> tuple[TenantState, Appointment]:
    if request.time not in public_slots(state, request.date, request.service_id, today):
        raise BookingUnavailable(f"{request.time} is not an available time on {request.date}")
    service = require_service(state, request.service_id)

    state, customer = _resolve_customer(state, request)
    vehicle = next(
        (item for item in customer.vehicles if item.plate.upper() == request.vehicle.plate.upper()),
        None,
    )
    if vehicle is None:
        state, vehicle = add_vehicle(state, customer.id, request.vehicle)

    draft = AppointmentDraft(
        customer_id=customer.id,
        vehicle_id=vehicle.id,
        service_id=service.id,
        service_type=service.name,
        date=request.date,
        time=request.time,
        duration_minutes=service.duration_minutes,
        price=service.price,
        observation=request.observation,
    )
    state, appointment = create(state, draft)
    logger.info("Online booking %s for %s", appointment.id, state.settings.slug)
    return state, appointment


def _resolve_customer(state: TenantState, request: PublicBookingRequest) -> tuple[TenantState, Customer]:
    customer = find_by_phone(state, request.contact.phone)
    if customer is not None:
        return state, customer
    contact = request.contact
    return add_customer(state, CustomerCreate(name=contact.name, phone=contact.phone, email=contact.email))


def _ensure_online_booking(state: TenantState) -> None:
    if not state.settings.online_booking_enabled:
        raise BookingUnavailable("Online booking is disabled for this studio", status_code=403)
