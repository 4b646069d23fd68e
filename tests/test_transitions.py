from decimal import Decimal

import pytest

from src.core.exceptions import InvalidTransition, ValidationError
from src.modules.appointments.service import transition
from src.modules.appointments.transitions import TRANSITIONS, allowed_next, check_transition
from src.shared.enums import AppointmentStatus, BusinessModel


ALL_CASES = [
    (status, model, target)
    for model in BusinessModel
    for status in AppointmentStatus
    for target in AppointmentStatus
]
ILLEGAL_CASES = [case for case in ALL_CASES if case[2] not in TRANSITIONS[case[1]][case[0]]]
LEGAL_CASES = [case for case in ALL_CASES if case[2] in TRANSITIONS[case[1]][case[0]]]


def _appointment_for(make_appointment, status, model):
    is_delivery = model == BusinessModel.DELIVERY
    return make_appointment(
        status=status,
        is_delivery=is_delivery,
        address="Rua das Flores, 10" if is_delivery else None,
        box_id=None if is_delivery else 1,
    )


def test_fixed_and_delivery_tables_match_the_operational_flow():
    cancelled = AppointmentStatus.CANCELADO
    assert allowed_next(AppointmentStatus.CONFIRMADO, BusinessModel.FIXED) == {AppointmentStatus.EM_EXECUCAO, cancelled}
    assert allowed_next(AppointmentStatus.CONFIRMADO, BusinessModel.DELIVERY) == {AppointmentStatus.EM_ROTA, cancelled}
    assert allowed_next(AppointmentStatus.EM_ROTA, BusinessModel.FIXED) == frozenset()
    assert allowed_next(AppointmentStatus.EM_ROTA, BusinessModel.DELIVERY) == {AppointmentStatus.EM_EXECUCAO, cancelled}
    assert allowed_next(AppointmentStatus.EM_EXECUCAO, BusinessModel.FIXED) == {AppointmentStatus.FINALIZADO}


@pytest.mark.parametrize("status,model,target", ILLEGAL_CASES)
def test_illegal_transition_leaves_state_untouched(make_appointment, make_state, status, model, target):
    appointment = _appointment_for(make_appointment, status, model)
    state = make_state(appointment)
    before = state.model_dump_json()

    with pytest.raises(InvalidTransition):
        transition(state, appointment.id, target)

    assert state.model_dump_json() == before


@pytest.mark.parametrize("status,model,target", LEGAL_CASES)
def test_legal_transition_applies_target(make_appointment, make_state, status, model, target):
    appointment = _appointment_for(make_appointment, status, model)
    state = make_state(appointment)

    new_state, updated = transition(state, appointment.id, target)

    assert updated.status == target
    assert new_state.find_appointment(appointment.id).status == target
    assert state.find_appointment(appointment.id).status == status


@pytest.mark.parametrize("status", [AppointmentStatus.FINALIZADO, AppointmentStatus.CANCELADO])
@pytest.mark.parametrize("target", list(AppointmentStatus))
def test_terminal_status_rejects_every_target(status, target):
    for model in BusinessModel:
        with pytest.raises(InvalidTransition):
            check_transition(status, target, model)
        with pytest.raises(InvalidTransition):
            check_transition(status, target, model, expected=status)


def test_stale_expected_status_is_rejected(make_appointment, make_state):
    state = make_state(make_appointment(status=AppointmentStatus.NOVO, id="a-1"))

    with pytest.raises(InvalidTransition) as exc:
        transition(state, "a-1", AppointmentStatus.CANCELADO, expected=AppointmentStatus.CONFIRMADO)
    assert "refresh" in exc.value.detail
    assert state.find_appointment("a-1").status == AppointmentStatus.NOVO


def test_repeated_transition_with_expected_status_is_a_noop(make_appointment, make_state):
    state = make_state(make_appointment(id="a-1", status=AppointmentStatus.NOVO))
    confirmed_state, _ = transition(state, "a-1", AppointmentStatus.CONFIRMADO, expected=AppointmentStatus.NOVO)

    again_state, again = transition(
        confirmed_state, "a-1", AppointmentStatus.CONFIRMADO, expected=AppointmentStatus.NOVO
    )

    assert again_state is confirmed_state
    assert again.status == AppointmentStatus.CONFIRMADO


def test_same_status_without_expected_is_not_a_transition(make_appointment, make_state):
    state = make_state(make_appointment(id="a-1", status=AppointmentStatus.CONFIRMADO))
    with pytest.raises(InvalidTransition):
        transition(state, "a-1", AppointmentStatus.CONFIRMADO)


def test_fixed_appointment_needs_a_bay_to_start(make_appointment, make_state):
    state = make_state(make_appointment(id="a-1", status=AppointmentStatus.CONFIRMADO, box_id=None))

    with pytest.raises(ValidationError):
        transition(state, "a-1", AppointmentStatus.EM_EXECUCAO)

    _, started = transition(state, "a-1", AppointmentStatus.EM_EXECUCAO, box_id=2)
    assert started.box_id == 2


def test_cancellation_reason_is_recorded(make_appointment, make_state):
    state = make_state(make_appointment(id="a-1", status=AppointmentStatus.CONFIRMADO, price=Decimal("60")))
    _, cancelled = transition(state, "a-1", AppointmentStatus.CANCELADO, cancellation_reason="Cliente desmarcou")
    assert cancelled.cancellation_reason == "Cliente desmarcou"
