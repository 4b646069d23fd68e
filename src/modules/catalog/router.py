"""Service catalogue routes."""

from fastapi import APIRouter, Depends, status

from src.core.deps import get_current_tenant, get_store
from src.modules.catalog.schemas import ServiceCreate, ServiceItem, ServiceUpdate
from src.modules.catalog.service import add_service, update_service
from src.modules.studios.store import TenantStore, apply_change

router = APIRouter(prefix="/api/v1/catalog/services", tags=["catalog"])


@router.get("", response_model=list[ServiceItem])
async def list_services(
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> list[ServiceItem]:
    return (await store.load(tenant_key)).services


@router.post("", response_model=ServiceItem, status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServiceCreate,
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> ServiceItem:
    return await apply_change(store, tenant_key, lambda state: add_service(state, payload))


@router.put("/{service_id}", response_model=ServiceItem)
async def edit_service(
    service_id: str,
    payload: ServiceUpdate,
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> ServiceItem:
    return await apply_change(store, tenant_key, lambda state: update_service(state, service_id, payload))
