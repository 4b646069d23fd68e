"""Check that the configured database and insight endpoint are reachable."""

import asyncio

import httpx
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine

from src.core.config import settings
from src.core.database import resolve_async_database_url

DB_LABELS = {
    "postgresql": "PostgreSQL",
    "sqlite": "SQLite",
}

HEALTH_QUERIES = {
    "postgresql": "SELECT version();",
    "sqlite": "SELECT sqlite_version();",
}


async def verify_database() -> bool:
    print("-" * 30)
    try:
        async_url = resolve_async_database_url(settings.database_url)
    except ValueError as exc:
        print(f"Unsupported DATABASE_URL: {exc}")
        return False

    url = make_url(async_url)
    backend = url.get_backend_name()
    label = DB_LABELS.get(backend, backend)
    print(f"Checking {label} at {url.render_as_string(hide_password=True)}")

    engine = create_async_engine(async_url, echo=False)
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text(HEALTH_QUERIES.get(backend, "SELECT 1")))
            print(f"{label} OK: {result.scalar()}")
        return True
    except Exception as exc:  # noqa: BLE001 - surface connection failure
        print(f"{label} connection failed: {exc}")
        return False
    finally:
        await engine.dispose()


async def verify_insights() -> bool:
    print("-" * 30)
    if not settings.insights_api_base:
        print("INSIGHTS_API_BASE not set, the dashboard will show the built-in insights")
        return True
    try:
        async with httpx.AsyncClient(base_url=settings.insights_api_base, timeout=settings.insights_timeout_seconds) as client:
            response = await client.get("/")
        print(f"Insight endpoint answered {response.status_code}")
        return True
    except httpx.HTTPError as exc:
        print(f"Insight endpoint unreachable: {exc}")
        return False


async def main() -> None:
    db_ok = await verify_database()
    insights_ok = await verify_insights()
    print("-" * 30)
    if db_ok and insights_ok:
        print("Environment OK")
    else:
        print("Check DATABASE_URL and INSIGHTS_API_BASE in your .env file")


if __name__ == "__main__":
    asyncio.run(main())
