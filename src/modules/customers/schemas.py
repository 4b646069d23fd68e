"""CRM schemas."""

import datetime as dt
from decimal import Decimal

from pydantic import Field

from src.shared.enums import VehicleType
from src.shared.schemas import CamelModel


class VehicleCreate(CamelModel):
    brand: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    plate: str = Field(..., min_length=1)
    color: str = "A definir"
    type: VehicleType = VehicleType.CARRO


class Vehicle(VehicleCreate):
    id: str


class CustomerCreate(CamelModel):
    name: str = Field(..., min_length=1)
    phone: str = ""
    email: str = ""
    vehicle: VehicleCreate | None = None


class Customer(CamelModel):
    id: str
    name: str
    phone: str = ""
    email: str = ""
    total_spent: Decimal = Decimal("0")
    last_visit: dt.date | None = None
    washes: int = 0
    vehicles: list[Vehicle] = Field(default_factory=list)
