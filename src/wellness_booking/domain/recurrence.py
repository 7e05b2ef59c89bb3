"""Recurrence expansion for slot series."""

import calendar
from datetime import datetime, timedelta
from enum import StrEnum

MONTHS_PER_YEAR = 12


class Recurrence(StrEnum):
    """Supported repetition rules for a slot series."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


_FIXED_STEPS = {
    Recurrence.DAILY: timedelta(days=1),
    Recurrence.WEEKLY: timedelta(weeks=1),
    Recurrence.BIWEEKLY: timedelta(weeks=2),
}


def add_months(value: datetime, months: int) -> datetime:
    """Shift a datetime by calendar months, clamping to the month's last day."""
    month_index = value.month - 1 + months
    year = value.year + month_index // MONTHS_PER_YEAR
    month = month_index % MONTHS_PER_YEAR + 1
    last_day = calendar.monthrange(year, month)[1]
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def expand_occurrences(
    start_time: datetime,
    end_time: datetime,
    recurrence: Recurrence,
    repeat_count: int,
) -> list[tuple[datetime, datetime]]:
    """Return (start, end) pairs for every occurrence of a series.

    Monthly occurrences are measured from the first start, so a series
    starting on the 31st lands on the last day of shorter months and returns
    to the 31st afterwards.
    """
    duration = end_time - start_time
    if recurrence == Recurrence.NONE:
        return [(start_time, end_time)]

    occurrences = []
    for index in range(repeat_count):
        if recurrence == Recurrence.MONTHLY:
            occurrence_start = add_months(start_time, index)
        else:
            occurrence_start = start_time + _FIXED_STEPS[recurrence] * index
        occurrences.append((occurrence_start, occurrence_start + duration))
    return occurrences
