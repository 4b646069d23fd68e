"""CRM routes."""

from fastapi import APIRouter, Depends, status

from src.core.deps import get_current_tenant, get_store
from src.modules.customers.schemas import Customer, CustomerCreate, Vehicle, VehicleCreate
from src.modules.customers.service import add_customer, add_vehicle, delete_customer
from src.modules.studios.store import TenantStore, apply_change

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.get("", response_model=list[Customer])
async def list_customers(
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> list[Customer]:
    return (await store.load(tenant_key)).customers


@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
async def create_customer(
    payload: CustomerCreate,
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> Customer:
    return await apply_change(store, tenant_key, lambda state: add_customer(state, payload))


@router.post("/{customer_id}/vehicles", response_model=Vehicle, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    customer_id: str,
    payload: VehicleCreate,
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> Vehicle:
    return await apply_change(store, tenant_key, lambda state: add_vehicle(state, customer_id, payload))


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_customer(
    customer_id: str,
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> None:
    await apply_change(store, tenant_key, lambda state: delete_customer(state, customer_id))
