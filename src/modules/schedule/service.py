"""Slot generation for the internal schedule and the public booking flow.

Slots answer "could a service of this length start here", computed from the
studio's operating hours alone. Existing bookings are not consulted; bay
exclusivity is enforced when an appointment starts execution.
"""

from __future__ import annotations

from datetime import date, timedelta

from src.core.exceptions import ValidationError
from src.modules.studios.schemas import BusinessSettings, CalendarDay, OperatingRule, SpecialClosure
from src.shared.enums import day_of_week
from src.shared.times import minutes_to_time_str, time_str_to_minutes


def operating_rule_for(studio: BusinessSettings, target_date: date) -> OperatingRule | None:
    weekday = day_of_week(target_date)
    return next((rule for rule in studio.operating_days if rule.day_of_week == weekday), None)


def closure_for(studio: BusinessSettings, target_date: date) -> SpecialClosure | None:
    return next((closure for closure in studio.special_closures if closure.date == target_date), None)


def is_open_on(studio: BusinessSettings, target_date: date) -> bool:
    rule = operating_rule_for(studio, target_date)
    return rule is not None and rule.is_open and closure_for(studio, target_date) is None


def generate_slots(target_date: date, duration_minutes: int, studio: BusinessSettings) -> list[str]:
    """Ordered "HH:MM" start times whose whole service window fits before closing."""
    if duration_minutes <= 0:
        raise ValidationError("Service duration must be greater than zero")
    rule = operating_rule_for(studio, target_date)
    if rule is None or not rule.is_open or closure_for(studio, target_date) is not None:
        return []

    return [
        minutes_to_time_str(start)
        for start in _generate_slots(
            time_str_to_minutes(rule.open_time),
            time_str_to_minutes(rule.close_time),
            duration_minutes,
            studio.slot_interval_minutes,
        )
    ]


def _generate_slots(open_minute: int, close_minute: int, duration: int, interval: int) -> list[int]:
    slots: list[int] = []
    cursor = open_minute
    while cursor + duration <= close_minute:
        slots.append(cursor)
        cursor += interval
    return slots


def calendar_days(studio: BusinessSettings, start: date, days: int) -> list[CalendarDay]:
    """Open/closed flags for the public booking date picker."""
    calendar: list[CalendarDay] = []
    for offset in range(days):
        current = start + timedelta(days=offset)
        rule = operating_rule_for(studio, current)
        closure = closure_for(studio, current)
        if closure is not None:
            reason = closure.reason or None
        elif rule is not None and not rule.is_open:
            reason = rule.reason
        else:
            reason = None
        calendar.append(
            CalendarDay(
                date=current,
                day_of_week=day_of_week(current),
                is_open=is_open_on(studio, current),
                closure_reason=reason,
            )
        )
    return calendar
