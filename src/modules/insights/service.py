"""Operational insights from an external text-generation endpoint.

The endpoint is optional; any failure returns the static fallback list.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from src.core.config import settings
from src.modules.finance.service import summarize
from src.modules.insights.schemas import Insight
from src.modules.studios.state import TenantState
from src.shared.enums import TERMINAL_STATUSES, InsightType

logger = logging.getLogger(__name__)

_INSIGHTS_PATH = "/v1/insights"
_INSIGHT_LIST = TypeAdapter(list[Insight])

FALLBACK_INSIGHTS = [
    Insight(
        id="fallback-idle-bays",
        problem="Bays idle between morning and afternoon services",
        impact="Lost capacity on slow hours",
        action="Offer quick washes on the public booking page for midday slots",
        type=InsightType.OPPORTUNITY,
    ),
    Insight(
        id="fallback-returning-customers",
        problem="Customers without a visit in the last 30 days",
        impact="Recurring revenue at risk",
        action="Send a loyalty reminder to customers with a completed wash",
        type=InsightType.WARNING,
    ),
]


def build_context(state: TenantState) -> dict:
    summary = summarize(state)
    pending = sum(1 for item in state.appointments if item.status not in TERMINAL_STATUSES)
    return {
        "studio": state.settings.business_name,
        "boxCapacity": state.settings.box_capacity,
        "customers": len(state.customers),
        "pendingAppointments": pending,
        "revenue": str(summary.revenue),
        "expenses": str(summary.expenses),
        "completed": summary.completed_count,
    }


async def generate_insights(state: TenantState, client: httpx.AsyncClient | None = None) -> list[Insight]:
    if client is None and not settings.insights_api_base:
        return list(FALLBACK_INSIGHTS)

    created_client = False
    if client is None:
        headers = {"Authorization": f"Bearer {settings.insights_api_key}"} if settings.insights_api_key else {}
        client = httpx.AsyncClient(
            base_url=settings.insights_api_base,
            timeout=settings.insights_timeout_seconds,
            headers=headers,
        )
        created_client = True
    try:
        response = await client.post(_INSIGHTS_PATH, json=build_context(state))
    except httpx.HTTPError as exc:
        logger.warning("Insight generator unavailable, using fallback: %s", exc)
        return list(FALLBACK_INSIGHTS)
    finally:
        if created_client:
            await client.aclose()

    if response.status_code != httpx.codes.OK:
        logger.warning("Insight generator returned %s, using fallback", response.status_code)
        return list(FALLBACK_INSIGHTS)

    try:
        payload = response.json()
        insights = _INSIGHT_LIST.validate_python(payload.get("insights", []))
    except (ValueError, AttributeError, SchemaValidationError) as exc:
        logger.warning("Insight generator response unusable, using fallback: %s", exc)
        return list(FALLBACK_INSIGHTS)
    return insights or list(FALLBACK_INSIGHTS)
