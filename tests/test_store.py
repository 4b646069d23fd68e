from decimal import Decimal

import pytest

from src.core.exceptions import InvalidTransition, NotFound, StaleState, ValidationError
from src.modules.appointments.service import transition
from src.modules.customers.schemas import CustomerCreate
from src.modules.customers.service import add_customer
from src.modules.studios.state import new_tenant_state
from src.modules.studios.store import InMemoryTenantStore, SqlTenantStore, apply_change
from src.shared.enums import AppointmentStatus


@pytest.fixture(params=["sql", "memory"])
def store(request, db_session):
    if request.param == "sql":
        return SqlTenantStore(db_session)
    return InMemoryTenantStore()


@pytest.mark.asyncio
async def test_state_round_trips_through_the_store(store, make_appointment):
    state = new_tenant_state("carbon", "Carbon Detail")
    state = state.model_copy(update={"appointments": [make_appointment(id="A", price=Decimal("150.50"))]})
    await store.create("carbon", state)

    loaded = await store.load("carbon")

    assert loaded.version == 0
    assert loaded.settings.slug == "carbon"
    assert loaded.appointments[0].price == Decimal("150.50")
    assert [item.name for item in loaded.services] == [item.name for item in state.services]


@pytest.mark.asyncio
async def test_save_bumps_version(store):
    await store.create("carbon", new_tenant_state("carbon", "Carbon Detail"))
    state = await store.load("carbon")
    state, _ = add_customer(state, CustomerCreate(name="Ana Souza", phone="11988885678"))

    saved = await store.save("carbon", state)

    assert saved.version == 1
    reloaded = await store.load("carbon")
    assert reloaded.version == 1
    assert [item.name for item in reloaded.customers] == ["Ana Souza"]


@pytest.mark.asyncio
async def test_concurrent_save_is_rejected(store):
    await store.create("carbon", new_tenant_state("carbon", "Carbon Detail"))
    first = await store.load("carbon")
    second = await store.load("carbon")

    first, _ = add_customer(first, CustomerCreate(name="Operator One"))
    second, _ = add_customer(second, CustomerCreate(name="Operator Two"))
    await store.save("carbon", first)

    with pytest.raises(StaleState):
        await store.save("carbon", second)
    assert [item.name for item in (await store.load("carbon")).customers] == ["Operator One"]


@pytest.mark.asyncio
async def test_unknown_tenant_is_not_found(store):
    assert not await store.exists("ghost")
    with pytest.raises(NotFound):
        await store.load("ghost")


@pytest.mark.asyncio
async def test_duplicate_slug_is_rejected(store):
    await store.create("carbon", new_tenant_state("carbon", "Carbon Detail"))
    with pytest.raises(ValidationError):
        await store.create("carbon", new_tenant_state("carbon", "Other"))


@pytest.mark.asyncio
async def test_failed_change_writes_nothing(store, make_appointment):
    state = new_tenant_state("carbon", "Carbon Detail")
    state = state.model_copy(update={"appointments": [make_appointment(id="A", status=AppointmentStatus.FINALIZADO)]})
    await store.create("carbon", state)

    with pytest.raises(InvalidTransition):
        await apply_change(store, "carbon", lambda current: transition(current, "A", AppointmentStatus.CANCELADO))

    reloaded = await store.load("carbon")
    assert reloaded.version == 0
    assert reloaded.appointments[0].status == AppointmentStatus.FINALIZADO
