"""Finance routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from src.core.deps import get_current_tenant, get_store
from src.modules.finance.schemas import Expense, ExpenseCreate, FinancialSummary
from src.modules.finance.service import add_expense, summarize
from src.modules.studios.store import TenantStore, apply_change

router = APIRouter(prefix="/api/v1/finance", tags=["finance"])


@router.get("/summary", response_model=FinancialSummary)
async def financial_summary(
    start: date | None = Query(None),
    end: date | None = Query(None),
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> FinancialSummary:
    return summarize(await store.load(tenant_key), start, end)


@router.get("/expenses", response_model=list[Expense])
async def list_expenses(
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> list[Expense]:
    return (await store.load(tenant_key)).expenses


@router.post("/expenses", response_model=Expense, status_code=status.HTTP_201_CREATED)
async def create_expense(
    payload: ExpenseCreate,
    tenant_key: str = Depends(get_current_tenant),
    store: TenantStore = Depends(get_store),
) -> Expense:
    return await apply_change(store, tenant_key, lambda state: add_expense(state, payload))
