"""Insight routes."""

from fastapi import APIRouter, Depends

from src.core.deps import get_current_tenant, get_store
from src.modules.insights.schemas import Insight
from src.modules.insights.service import generate_insights
from src.modules.studios.store import TenantStore

router = APIRouter(prefix="/api/v1/insights", tags=["insights"])


@router.get("", response_model=list[Insight])
async def insights(
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> list[Insight]:
    return await generate_insights(await store.load(tenant_key))
