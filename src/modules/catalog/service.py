"""Service catalogue operations."""

from __future__ import annotations

from pydantic import ValidationError as SchemaValidationError

from src.core.exceptions import NotFound, ValidationError
from src.modules.catalog.schemas import ServiceCreate, ServiceItem, ServiceUpdate
from src.modules.studios.state import TenantState
from src.shared.ulid import generate_ulid


def add_service(state: TenantState, payload: ServiceCreate) -> tuple[TenantState, ServiceItem]:
    service = ServiceItem(id=generate_ulid(), **payload.model_dump())
    return state.model_copy(update={"services": [*state.services, service]}), service


def update_service(state: TenantState, service_id: str, payload: ServiceUpdate) -> tuple[TenantState, ServiceItem]:
    """Edit a catalogue entry; booked appointments keep their own snapshot."""
    service = require_service(state, service_id)
    merged = service.model_dump()
    merged.update(payload.model_dump(exclude_unset=True))
    try:
        updated = ServiceItem.model_validate(merged)
    except SchemaValidationError as exc:
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error.get("loc", ()))
        raise ValidationError(f"{location}: {error['msg']}" if location else error["msg"]) from exc
    services = [updated if item.id == service_id else item for item in state.services]
    return state.model_copy(update={"services": services}), updated


def require_service(state: TenantState, service_id: str) -> ServiceItem:
    service = state.find_service(service_id)
    if service is None:
        raise NotFound("Service not found")
    return service
