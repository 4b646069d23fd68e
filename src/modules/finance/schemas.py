"""Finance schemas."""

import datetime as dt
from decimal import Decimal

from pydantic import Field

from src.shared.enums import ExpenseCategory
from src.shared.schemas import CamelModel


class ExpenseCreate(CamelModel):
    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    date: dt.date
    category: ExpenseCategory = ExpenseCategory.VARIAVEL


class Expense(ExpenseCreate):
    id: str


class FinancialSummary(CamelModel):
    start: dt.date | None = None
    end: dt.date | None = None
    revenue: Decimal
    expenses: Decimal
    net_profit: Decimal
    completed_count: int
    average_ticket: Decimal
