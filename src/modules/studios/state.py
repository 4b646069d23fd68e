"""Tenant state: everything one studio owns, loaded and saved as a unit."""

from decimal import Decimal

from pydantic import Field

from src.core.config import settings as app_settings
from src.modules.appointments.schemas import Appointment
from src.modules.catalog.schemas import ServiceItem
from src.modules.customers.schemas import Customer
from src.modules.finance.schemas import Expense
from src.modules.studios.schemas import BusinessSettings, OperatingRule
from src.shared.enums import VehicleType
from src.shared.schemas import CamelModel
from src.shared.ulid import generate_ulid

COLLECTIONS = ("settings", "customers", "services", "appointments", "expenses")


class TenantState(CamelModel):
    """Plain snapshot of a studio's collections; ``version`` guards concurrent saves."""

    version: int = 0
    settings: BusinessSettings
    customers: list[Customer] = Field(default_factory=list)
    services: list[ServiceItem] = Field(default_factory=list)
    appointments: list[Appointment] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)

    def find_appointment(self, appointment_id: str) -> Appointment | None:
        return next((item for item in self.appointments if item.id == appointment_id), None)

    def find_customer(self, customer_id: str) -> Customer | None:
        return next((item for item in self.customers if item.id == customer_id), None)

    def find_service(self, service_id: str) -> ServiceItem | None:
        return next((item for item in self.services if item.id == service_id), None)


def default_operating_days() -> list[OperatingRule]:
    rules = [OperatingRule(day_of_week=0, is_open=False, open_time="00:00", close_time="00:00")]
    rules.extend(
        OperatingRule(day_of_week=day, is_open=True, open_time="08:00", close_time="18:00") for day in range(1, 6)
    )
    rules.append(OperatingRule(day_of_week=6, is_open=True, open_time="09:00", close_time="14:00"))
    return rules


def default_services() -> list[ServiceItem]:
    cars = [VehicleType.CARRO, VehicleType.SUV]
    return [
        ServiceItem(
            id=generate_ulid(),
            name="Lavagem Simples",
            description="Lavagem externa e aspiração",
            duration_minutes=45,
            price=Decimal("60"),
            compatible_vehicles=cars,
        ),
        ServiceItem(
            id=generate_ulid(),
            name="Lavagem Detalhada",
            description="Limpeza de motor, chassi e cera",
            duration_minutes=90,
            price=Decimal("150"),
            compatible_vehicles=[*cars, VehicleType.UTILITARIO],
        ),
        ServiceItem(
            id=generate_ulid(),
            name="Polimento Técnico",
            description="Correção de verniz (1 etapa)",
            duration_minutes=240,
            price=Decimal("450"),
            compatible_vehicles=cars,
        ),
        ServiceItem(
            id=generate_ulid(),
            name="Higienização Interna",
            description="Limpeza profunda de estofados",
            duration_minutes=120,
            price=Decimal("200"),
            compatible_vehicles=[*cars, VehicleType.UTILITARIO],
        ),
    ]


def new_tenant_state(slug: str, business_name: str) -> TenantState:
    """Initial state for a freshly registered studio."""
    studio_settings = BusinessSettings(
        business_name=business_name,
        slug=slug,
        box_capacity=app_settings.default_box_capacity,
        slot_interval_minutes=app_settings.default_slot_interval_minutes,
        operating_days=default_operating_days(),
    )
    return TenantState(settings=studio_settings, services=default_services())
