"""Schedule schemas."""

import datetime as dt

from src.shared.schemas import CamelModel


class SlotList(CamelModel):
    date: dt.date
    duration_minutes: int
    slots: list[str]
