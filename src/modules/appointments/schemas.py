"""Appointment records and request/response schemas."""

import datetime as dt
from decimal import Decimal

from pydantic import Field

from src.shared.enums import AppointmentStatus, BusinessModel
from src.shared.schemas import CamelModel
from src.shared.times import TIME_PATTERN


class Appointment(CamelModel):
    """One booked service; service fields are a snapshot taken at booking time."""

    id: str
    customer_id: str
    vehicle_id: str = ""
    box_id: int | None = None
    service_id: str | None = None
    service_type: str
    date: dt.date
    time: str = Field(pattern=TIME_PATTERN)
    duration_minutes: int = Field(gt=0)
    price: Decimal = Field(ge=0)
    status: AppointmentStatus = AppointmentStatus.NOVO
    is_delivery: bool = False
    address: str | None = None
    observation: str | None = None
    staff_name: str | None = None
    cancellation_reason: str | None = None

    @property
    def business_model(self) -> BusinessModel:
        return BusinessModel.of(self.is_delivery)


class AppointmentDraft(CamelModel):
    """Unvalidated input of the booking forms; checked by the scheduling service."""

    customer_id: str
    vehicle_id: str = ""
    box_id: int | None = None
    service_id: str | None = None
    service_type: str
    date: dt.date
    time: str
    duration_minutes: int
    price: Decimal
    is_delivery: bool = False
    address: str | None = None
    observation: str | None = None
    staff_name: str | None = None


class StatusTransitionRequest(CamelModel):
    target_status: AppointmentStatus
    expected_status: AppointmentStatus | None = None
    box_id: int | None = None
    cancellation_reason: str | None = None


class BoxAssignmentRequest(CamelModel):
    box_id: int


class AppointmentBoard(CamelModel):
    queue: list[Appointment]
    history: list[Appointment]


class BayStatus(CamelModel):
    box_id: int
    appointment: Appointment | None = None

    @property
    def in_use(self) -> bool:
        return self.appointment is not None


class BayOccupancy(CamelModel):
    box_capacity: int
    in_use: int
    utilization_rate: float
    bays: list[BayStatus]
