"""Public booking routes (no operator authentication)."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from src.core.deps import get_store
from src.modules.booking.schemas import BookingConfirmation, PublicBookingRequest
from src.modules.booking.service import book_online, public_slots
from src.modules.catalog.service import require_service
from src.modules.schedule.schemas import SlotList
from src.modules.studios.store import TenantStore, apply_change

router = APIRouter(prefix="/api/v1/public/studios", tags=["public"])


@router.get("/{slug}/slots", response_model=SlotList)
async def available_slots(
    slug: str,
    date_value: date = Query(..., alias="date"),
    service_id: str = Query(..., alias="serviceId"),
    store: TenantStore = Depends(get_store),
) -> SlotList:
    state = await store.load(slug)
    slots = public_slots(state, date_value, service_id)
    duration = require_service(state, service_id).duration_minutes
    return SlotList(date=date_value, duration_minutes=duration, slots=slots)


@router.post("/{slug}/bookings", response_model=BookingConfirmation, status_code=status.HTTP_201_CREATED)
async def create_booking(
    slug: str,
    payload: PublicBookingRequest,
    store: TenantStore = Depends(get_store),
) -> BookingConfirmation:
    appointment = await apply_change(store, slug, lambda state: book_online(state, payload))
    return BookingConfirmation(
        appointment_id=appointment.id,
        service_type=appointment.service_type,
        date=appointment.date,
        time=appointment.time,
        duration_minutes=appointment.duration_minutes,
        status=appointment.status,
    )
