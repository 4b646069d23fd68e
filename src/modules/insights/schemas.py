"""Insight schemas."""

from src.shared.enums import InsightType
from src.shared.schemas import CamelModel


class Insight(CamelModel):
    id: str
    problem: str
    impact: str
    action: str
    type: InsightType
