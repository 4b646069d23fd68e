"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config import settings
from src.core.database import DATABASE_URL, create_tables, is_sqlite
from src.core.exceptions import register_exception_handlers
from src.core.logging import configure_logging
from src.modules.appointments.router import router as appointments_router
from src.modules.auth.router import router as auth_router
from src.modules.booking.router import router as booking_router
from src.modules.catalog.router import router as catalog_router
from src.modules.customers.router import router as customers_router
from src.modules.finance.router import router as finance_router
from src.modules.insights.router import router as insights_router
from src.modules.schedule.router import router as schedule_router
from src.modules.studios.router import public_router as public_studio_router
from src.modules.studios.router import router as studio_router


@asynccontextmanager
async def lifespan(_: FastAPI):
    if is_sqlite(DATABASE_URL):
        await create_tables()
    yield


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version="0.1.0",
        lifespan=lifespan,
    )
    register_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(studio_router)
    app.include_router(public_studio_router)
    app.include_router(booking_router)
    app.include_router(catalog_router)
    app.include_router(customers_router)
    app.include_router(appointments_router)
    app.include_router(schedule_router)
    app.include_router(finance_router)
    app.include_router(insights_router)

    return app


app = create_app()
