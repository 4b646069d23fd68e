"""Studio registration and settings management."""

from __future__ import annotations

import logging

from pydantic import ValidationError as SchemaValidationError

from src.core.exceptions import ValidationError
from src.modules.appointments.allocation import occupied_bays
from src.modules.studios.schemas import BusinessSettings, BusinessSettingsUpdate, PublicStudio
from src.modules.studios.state import TenantState, new_tenant_state
from src.modules.studios.store import TenantStore

logger = logging.getLogger(__name__)


async def register_studio(store: TenantStore, slug: str, business_name: str) -> TenantState:
    try:
        state = new_tenant_state(slug, business_name)
    except SchemaValidationError as exc:
        raise ValidationError(_first_error(exc)) from exc
    return await store.create(slug, state)


def update_settings(state: TenantState, payload: BusinessSettingsUpdate) -> tuple[TenantState, BusinessSettings]:
    merged = state.settings.model_dump()
    merged.update(payload.model_dump(exclude_unset=True))
    try:
        studio = BusinessSettings.model_validate(merged)
    except SchemaValidationError as exc:
        raise ValidationError(_first_error(exc)) from exc

    busy = [box_id for box_id in occupied_bays(state.appointments) if box_id > studio.box_capacity]
    if busy:
        raise ValidationError(f"Bay {max(busy)} is in use; finish that service before reducing the bay count")

    logger.info("Updated settings for %s", studio.slug)
    return state.model_copy(update={"settings": studio}), studio


def public_profile(state: TenantState) -> PublicStudio:
    studio = state.settings
    return PublicStudio(
        business_name=studio.business_name,
        slug=studio.slug,
        address=studio.address,
        online_booking_enabled=studio.online_booking_enabled,
        services=[service for service in state.services if service.active],
    )


def _first_error(exc: SchemaValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else error["msg"]
