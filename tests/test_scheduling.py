from datetime import date, timedelta
from decimal import Decimal

import pytest

from src.core.exceptions import NotFound, ValidationError
from src.modules.appointments.schemas import AppointmentDraft
from src.modules.appointments.service import board, compute_slots, create, list_for_date, transition
from src.modules.catalog.schemas import ServiceUpdate
from src.modules.catalog.service import update_service
from src.shared.enums import AppointmentStatus, BusinessModel

MONDAY = date(2024, 6, 10)


def _draft(**overrides) -> AppointmentDraft:
    data = {
        "customer_id": "c1",
        "vehicle_id": "v1",
        "service_type": "Polimento Técnico",
        "date": MONDAY,
        "time": "10:00",
        "duration_minutes": 240,
        "price": Decimal("450"),
    }
    data.update(overrides)
    return AppointmentDraft(**data)


def test_create_appends_a_new_appointment(make_state):
    state = make_state()

    new_state, appointment = create(state, _draft())

    assert appointment.status == AppointmentStatus.NOVO
    assert appointment.id
    assert appointment.box_id == 1
    assert new_state.appointments == [appointment]
    assert state.appointments == []


def test_create_offers_the_first_bay_not_in_use(make_appointment, make_state):
    state = make_state(make_appointment(status=AppointmentStatus.EM_EXECUCAO, box_id=1))
    _, appointment = create(state, _draft())
    assert appointment.box_id == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"is_delivery": True},
        {"is_delivery": True, "address": "   "},
        {"is_delivery": True, "address": "Rua A, 1", "box_id": 1},
        {"duration_minutes": 0},
        {"duration_minutes": -15},
        {"price": Decimal("-1")},
        {"time": "25:00"},
        {"time": "9h"},
        {"customer_id": ""},
        {"service_type": " "},
        {"box_id": 3},
    ],
)
def test_create_rejects_invalid_drafts(make_state, overrides):
    state = make_state()
    with pytest.raises(ValidationError):
        create(state, _draft(**overrides))
    assert state.appointments == []


def test_delivery_appointment_keeps_address_and_no_bay(make_state):
    _, appointment = create(make_state(), _draft(is_delivery=True, address=" Rua das Flores, 10 "))
    assert appointment.address == "Rua das Flores, 10"
    assert appointment.box_id is None
    assert appointment.business_model == BusinessModel.DELIVERY


def test_list_for_date_never_mixes_models(make_appointment, make_state):
    fixed = make_appointment(time="14:00")
    early_fixed = make_appointment(time="08:30")
    delivery = make_appointment(is_delivery=True, address="Rua A, 1")
    finished = make_appointment(status=AppointmentStatus.FINALIZADO)
    other_day = make_appointment(date=MONDAY + timedelta(days=1))
    state = make_state(fixed, early_fixed, delivery, finished, other_day)

    assert [item.id for item in list_for_date(state, MONDAY, BusinessModel.FIXED)] == [early_fixed.id, fixed.id]
    assert [item.id for item in list_for_date(state, MONDAY, BusinessModel.DELIVERY)] == [delivery.id]


def test_board_splits_queue_and_history(make_appointment, make_state):
    old = make_appointment(status=AppointmentStatus.FINALIZADO, date=MONDAY - timedelta(days=7))
    recent = make_appointment(status=AppointmentStatus.CANCELADO, time="15:00")
    late = make_appointment(time="16:00")
    early = make_appointment(time="08:00")
    state = make_state(old, recent, late, early)

    result = board(state, BusinessModel.FIXED)

    assert [item.id for item in result.queue] == [early.id, late.id]
    assert [item.id for item in result.history] == [recent.id, old.id]


def test_finishing_updates_customer_totals(make_appointment, make_state):
    state = make_state(
        make_appointment(id="A", status=AppointmentStatus.EM_EXECUCAO, box_id=1, price=Decimal("890.00"))
    )

    new_state, _ = transition(state, "A", AppointmentStatus.FINALIZADO)

    customer = new_state.find_customer("c1")
    assert customer.total_spent == Decimal("2140.00")
    assert customer.last_visit == MONDAY
    assert customer.washes == 8
    assert state.find_customer("c1").total_spent == Decimal("1250.00")


def test_loyalty_counter_only_runs_when_enabled(make_appointment, make_state):
    state = make_state(
        make_appointment(id="A", status=AppointmentStatus.EM_EXECUCAO, box_id=1),
        loyalty_program_enabled=False,
    )
    new_state, _ = transition(state, "A", AppointmentStatus.FINALIZADO)
    assert new_state.find_customer("c1").washes == 7
    assert new_state.find_customer("c1").total_spent == Decimal("1400.00")


@pytest.mark.parametrize(
    "status,target",
    [
        (AppointmentStatus.NOVO, AppointmentStatus.CONFIRMADO),
        (AppointmentStatus.NOVO, AppointmentStatus.CANCELADO),
        (AppointmentStatus.CONFIRMADO, AppointmentStatus.EM_EXECUCAO),
        (AppointmentStatus.CONFIRMADO, AppointmentStatus.CANCELADO),
    ],
)
def test_other_transitions_never_touch_customer_totals(make_appointment, make_state, status, target):
    state = make_state(make_appointment(id="A", status=status, box_id=1))
    new_state, _ = transition(state, "A", target)
    assert new_state.find_customer("c1") == state.find_customer("c1")


def test_finishing_for_a_deleted_customer_still_succeeds(make_appointment, make_state):
    state = make_state(make_appointment(id="A", status=AppointmentStatus.EM_EXECUCAO, box_id=1, customer_id="guest"))
    new_state, finished = transition(state, "A", AppointmentStatus.FINALIZADO)
    assert finished.status == AppointmentStatus.FINALIZADO
    assert new_state.customers == state.customers


def test_unknown_appointment_is_not_found(make_state):
    with pytest.raises(NotFound):
        transition(make_state(), "missing", AppointmentStatus.CONFIRMADO)


def test_service_changes_do_not_alter_booked_snapshots(make_state):
    state = make_state()
    service = state.services[0]
    state, appointment = create(
        state,
        _draft(
            service_id=service.id,
            service_type=service.name,
            duration_minutes=service.duration_minutes,
            price=service.price,
        ),
    )

    state, _ = update_service(state, service.id, ServiceUpdate(price=Decimal("99"), duration_minutes=60))

    stored = state.find_appointment(appointment.id)
    assert stored.price == service.price
    assert stored.duration_minutes == service.duration_minutes


def test_compute_slots_accepts_service_or_duration(make_state):
    state = make_state()
    service = next(item for item in state.services if item.duration_minutes == 90)
    assert compute_slots(state, MONDAY, service) == compute_slots(state, MONDAY, 90)


@pytest.mark.parametrize(
    "payload",
    [{"durationMinutes": None}, {"name": None}, {"price": None}, {"compatibleVehicles": None}],
)
def test_service_update_with_null_field_is_rejected(make_state, payload):
    state = make_state()
    service = state.services[0]
    with pytest.raises(ValidationError):
        update_service(state, service.id, ServiceUpdate.model_validate(payload))
    assert state.find_service(service.id) == service


def test_service_update_keeps_unset_fields(make_state):
    state = make_state()
    service = state.services[0]
    new_state, updated = update_service(state, service.id, ServiceUpdate(active=False))
    assert updated.active is False
    assert updated.duration_minutes == service.duration_minutes
    assert new_state.find_service(service.id) == updated


def test_update_unknown_service_is_not_found(make_state):
    with pytest.raises(NotFound):
        update_service(make_state(), "missing", ServiceUpdate(price=Decimal("10")))
