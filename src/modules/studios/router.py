"""Studio settings and public profile routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from src.core.config import settings
from src.core.deps import get_current_tenant, get_store
from src.modules.schedule.service import calendar_days
from src.modules.studios.schemas import BusinessSettings, BusinessSettingsUpdate, CalendarDay, PublicStudio
from src.modules.studios.service import public_profile, update_settings
from src.modules.studios.store import TenantStore, apply_change

router = APIRouter(prefix="/api/v1/studio", tags=["studio"])
public_router = APIRouter(prefix="/api/v1/public/studios", tags=["public"])


@router.get("/settings", response_model=BusinessSettings)
async def get_settings(
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> BusinessSettings:
    return (await store.load(tenant_key)).settings


@router.put("/settings", response_model=BusinessSettings)
async def put_settings(
    payload: BusinessSettingsUpdate,
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> BusinessSettings:
    return await apply_change(store, tenant_key, lambda state: update_settings(state, payload))


@public_router.get("/{slug}", response_model=PublicStudio)
async def studio_profile(slug: str, store: TenantStore = Depends(get_store)) -> PublicStudio:
    return public_profile(await store.load(slug))


@public_router.get("/{slug}/calendar", response_model=list[CalendarDay])
async def studio_calendar(
    slug: str,
    start: date | None = Query(None),
    store: TenantStore = Depends(get_store),
) -> list[CalendarDay]:
    state = await store.load(slug)
    return calendar_days(state.settings, start or date.today(), settings.public_booking_horizon_days)
