"""Schedule routes."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.core.deps import get_current_tenant, get_store
from src.modules.appointments.service import compute_slots
from src.modules.catalog.service import require_service
from src.modules.schedule.schemas import SlotList
from src.modules.studios.store import TenantStore

router = APIRouter(prefix="/api/v1/schedule", tags=["schedule"])


@router.get("/slots", response_model=SlotList)
async def slots(
    date_value: date = Query(..., alias="date"),
    service_id: str | None = Query(None, alias="serviceId"),
    duration_minutes: int | None = Query(None, alias="durationMinutes"),
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> SlotList:
    state = await store.load(tenant_key)
    if service_id is not None:
        duration = require_service(state, service_id).duration_minutes
    elif duration_minutes is not None:
        duration = duration_minutes
    else:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="serviceId or durationMinutes is required")
    return SlotList(date=date_value, duration_minutes=duration, slots=compute_slots(state, date_value, duration))
