"""Studio (tenant) configuration schemas."""

import datetime as dt

from pydantic import Field, model_validator

from src.modules.catalog.schemas import ServiceItem
from src.shared.schemas import CamelModel
from src.shared.times import TIME_PATTERN, time_str_to_minutes


class OperatingRule(CamelModel):
    day_of_week: int = Field(..., ge=0, le=6)
    is_open: bool
    open_time: str = Field("08:00", pattern=TIME_PATTERN)
    close_time: str = Field("18:00", pattern=TIME_PATTERN)
    reason: str | None = None

    @model_validator(mode="after")
    def validate_hours(self) -> "OperatingRule":
        if self.is_open and time_str_to_minutes(self.open_time) >= time_str_to_minutes(self.close_time):
            raise ValueError("openTime must be before closeTime on an open day")
        return self


class SpecialClosure(CamelModel):
    date: dt.date
    reason: str = ""


class BusinessSettings(CamelModel):
    business_name: str = Field(..., min_length=1)
    slug: str = Field(..., pattern=r"^[a-z0-9][a-z0-9-]{1,62}$")
    address: str | None = None
    box_capacity: int = Field(..., ge=1)
    slot_interval_minutes: int = Field(..., gt=0)
    operating_days: list[OperatingRule] = Field(default_factory=list)
    online_booking_enabled: bool = True
    loyalty_program_enabled: bool = True
    special_closures: list[SpecialClosure] = Field(default_factory=list)
    driver_capacity: int | None = Field(None, ge=1)

    @model_validator(mode="after")
    def validate_weekdays(self) -> "BusinessSettings":
        seen = [rule.day_of_week for rule in self.operating_days]
        if len(seen) != len(set(seen)):
            raise ValueError("Each weekday may only have one operating rule")
        return self


class BusinessSettingsUpdate(CamelModel):
    business_name: str | None = None
    address: str | None = None
    box_capacity: int | None = None
    slot_interval_minutes: int | None = None
    operating_days: list[OperatingRule] | None = None
    online_booking_enabled: bool | None = None
    loyalty_program_enabled: bool | None = None
    special_closures: list[SpecialClosure] | None = None
    driver_capacity: int | None = None


class PublicStudio(CamelModel):
    business_name: str
    slug: str
    address: str | None = None
    online_booking_enabled: bool
    services: list[ServiceItem]


class CalendarDay(CamelModel):
    date: dt.date
    day_of_week: int
    is_open: bool
    closure_reason: str | None = None
