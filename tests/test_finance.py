from datetime import date
from decimal import Decimal

from src.modules.finance.schemas import ExpenseCreate
from src.modules.finance.service import add_expense, summarize
from src.shared.enums import AppointmentStatus, ExpenseCategory

MONDAY = date(2024, 6, 10)


def test_summary_counts_only_finished_appointments(make_appointment, make_state):
    state = make_state(
        make_appointment(status=AppointmentStatus.FINALIZADO, price=Decimal("150")),
        make_appointment(status=AppointmentStatus.FINALIZADO, price=Decimal("450")),
        make_appointment(status=AppointmentStatus.CANCELADO, price=Decimal("999")),
        make_appointment(status=AppointmentStatus.EM_EXECUCAO, price=Decimal("60"), box_id=1),
    )
    state, _ = add_expense(
        state,
        ExpenseCreate(description="Aluguel", amount=Decimal("200"), date=MONDAY, category=ExpenseCategory.FIXO),
    )

    summary = summarize(state)

    assert summary.revenue == Decimal("600")
    assert summary.expenses == Decimal("200")
    assert summary.net_profit == Decimal("400")
    assert summary.completed_count == 2
    assert summary.average_ticket == Decimal("300.00")


def test_summary_respects_date_range(make_appointment, make_state):
    state = make_state(
        make_appointment(status=AppointmentStatus.FINALIZADO, price=Decimal("150"), date=date(2024, 5, 31)),
        make_appointment(status=AppointmentStatus.FINALIZADO, price=Decimal("60")),
    )
    summary = summarize(state, start=date(2024, 6, 1), end=date(2024, 6, 30))
    assert summary.revenue == Decimal("60")
    assert summary.completed_count == 1


def test_empty_summary_has_zero_ticket(make_state):
    summary = summarize(make_state())
    assert summary.average_ticket == Decimal("0")
    assert summary.completed_count == 0
