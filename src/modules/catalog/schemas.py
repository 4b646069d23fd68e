"""Service catalogue schemas."""

from decimal import Decimal

from pydantic import Field

from src.shared.enums import VehicleType
from src.shared.schemas import CamelModel


class ServiceCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str = ""
    duration_minutes: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0)
    compatible_vehicles: list[VehicleType] = Field(default_factory=lambda: [VehicleType.CARRO, VehicleType.SUV])
    active: bool = True
    allows_fixed: bool = True


class ServiceItem(ServiceCreate):
    id: str


class ServiceUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=120)
    description: str | None = None
    duration_minutes: int | None = Field(None, gt=0)
    price: Decimal | None = Field(None, ge=0)
    compatible_vehicles: list[VehicleType] | None = None
    active: bool | None = None
    allows_fixed: bool | None = None
