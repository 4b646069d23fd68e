"""Financial aggregation over finished appointments and expenses."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from src.modules.finance.schemas import Expense, ExpenseCreate, FinancialSummary
from src.modules.studios.state import TenantState
from src.shared.enums import AppointmentStatus
from src.shared.ulid import generate_ulid

CENT = Decimal("0.01")


def add_expense(state: TenantState, payload: ExpenseCreate) -> tuple[TenantState, Expense]:
    expense = Expense(id=generate_ulid(), **payload.model_dump())
    return state.model_copy(update={"expenses": [*state.expenses, expense]}), expense


def summarize(state: TenantState, start: date | None = None, end: date | None = None) -> FinancialSummary:
    def in_range(value: date) -> bool:
        return (start is None or value >= start) and (end is None or value <= end)

    finished = [
        item
        for item in state.appointments
        if item.status == AppointmentStatus.FINALIZADO and in_range(item.date)
    ]
    revenue = sum((item.price for item in finished), Decimal("0"))
    expenses = sum((item.amount for item in state.expenses if in_range(item.date)), Decimal("0"))
    average = (revenue / len(finished)).quantize(CENT) if finished else Decimal("0")
    return FinancialSummary(
        start=start,
        end=end,
        revenue=revenue,
        expenses=expenses,
        net_profit=revenue - expenses,
        completed_count=len(finished),
        average_ticket=average,
    )
