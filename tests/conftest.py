import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("OPERATOR_ACCESS_CODE", "carbon-test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from src.core.database import Base, get_db  # noqa: E402
from src.modules.appointments.schemas import Appointment  # noqa: E402
from src.modules.customers.schemas import Customer, Vehicle  # noqa: E402
from src.modules.studios import models as studio_models  # noqa: E402,F401
from src.modules.studios.schemas import BusinessSettings  # noqa: E402
from src.modules.studios.state import TenantState, default_operating_days, default_services  # noqa: E402
from src.shared.enums import AppointmentStatus  # noqa: E402
from src.shared.ulid import generate_ulid  # noqa: E402

ACCESS_CODE = os.environ["OPERATOR_ACCESS_CODE"]
MONDAY = date(2024, 6, 10)


@pytest_asyncio.fixture
async def db_session():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    SessionLocal = async_sessionmaker(engine, expire_on_commit=False)
    async with SessionLocal() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session):
    from main import create_app

    app = create_app()

    async def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest.fixture
def studio_settings() -> BusinessSettings:
    return BusinessSettings(
        business_name="Carbon Detail",
        slug="carbon",
        box_capacity=2,
        slot_interval_minutes=30,
        operating_days=default_operating_days(),
    )


@pytest.fixture
def customer() -> Customer:
    return Customer(
        id="c1",
        name="Roberto Silva",
        phone="(11) 99999-1234",
        email="roberto@email.com",
        total_spent=Decimal("1250.00"),
        washes=7,
        vehicles=[Vehicle(id="v1", brand="BMW", model="X5", plate="ABC-1234", color="Preto", type="SUV")],
    )


@pytest.fixture
def make_appointment():
    def factory(**overrides) -> Appointment:
        data = {
            "id": generate_ulid(),
            "customer_id": "c1",
            "vehicle_id": "v1",
            "service_type": "Lavagem Detalhada",
            "date": MONDAY,
            "time": "09:00",
            "duration_minutes": 90,
            "price": Decimal("150.00"),
            "status": AppointmentStatus.NOVO,
        }
        data.update(overrides)
        return Appointment(**data)

    return factory


@pytest.fixture
def make_state(studio_settings, customer):
    def factory(*appointments: Appointment, **settings_overrides) -> TenantState:
        studio = studio_settings.model_copy(update=settings_overrides)
        return TenantState(
            settings=studio,
            customers=[customer],
            services=default_services(),
            appointments=list(appointments),
        )

    return factory
