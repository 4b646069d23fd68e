"""Public booking schemas."""

import datetime as dt

from pydantic import Field

from src.modules.customers.schemas import VehicleCreate
from src.shared.schemas import CamelModel
from src.shared.times import TIME_PATTERN


class BookingContact(CamelModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=8)
    email: str = ""


class PublicBookingRequest(CamelModel):
    service_id: str
    date: dt.date
    time: str = Field(..., pattern=TIME_PATTERN)
    contact: BookingContact
    vehicle: VehicleCreate
    observation: str | None = None


class BookingConfirmation(CamelModel):
    appointment_id: str
    service_type: str
    date: dt.date
    time: str
    duration_minutes: int
    status: str
