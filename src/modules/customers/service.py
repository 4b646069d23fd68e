"""CRM operations on the tenant state."""

from __future__ import annotations

from src.core.exceptions import NotFound
from src.modules.customers.schemas import Customer, CustomerCreate, Vehicle, VehicleCreate
from src.modules.studios.state import TenantState
from src.shared.ulid import generate_ulid


def add_customer(state: TenantState, payload: CustomerCreate) -> tuple[TenantState, Customer]:
    vehicles = [_new_vehicle(payload.vehicle)] if payload.vehicle else []
    customer = Customer(
        id=generate_ulid(),
        name=payload.name.strip(),
        phone=payload.phone,
        email=payload.email,
        vehicles=vehicles,
    )
    return state.model_copy(update={"customers": [*state.customers, customer]}), customer


def add_vehicle(state: TenantState, customer_id: str, payload: VehicleCreate) -> tuple[TenantState, Vehicle]:
    customer = state.find_customer(customer_id)
    if customer is None:
        raise NotFound("Customer not found")
    vehicle = _new_vehicle(payload)
    updated = customer.model_copy(update={"vehicles": [*customer.vehicles, vehicle]})
    customers = [updated if item.id == customer_id else item for item in state.customers]
    return state.model_copy(update={"customers": customers}), vehicle


def delete_customer(state: TenantState, customer_id: str) -> tuple[TenantState, None]:
    """Remove the customer record; their appointments are kept as they are."""
    if state.find_customer(customer_id) is None:
        raise NotFound("Customer not found")
    customers = [item for item in state.customers if item.id != customer_id]
    return state.model_copy(update={"customers": customers}), None


def find_by_phone(state: TenantState, phone: str) -> Customer | None:
    digits = _digits(phone)
    if not digits:
        return None
    return next((item for item in state.customers if _digits(item.phone) == digits), None)


def _new_vehicle(payload: VehicleCreate) -> Vehicle:
    return Vehicle(id=generate_ulid(), **payload.model_dump())


def _digits(value: str) -> str:
    return "".join(char for char in value if char.isdigit())
