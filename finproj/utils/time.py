"""
Clock and calendar helpers.

Cache expiry uses a monotonic-style seconds clock, goal deadlines use
calendar dates. Both are injectable so tests never depend on wall-clock time.
"""

import math
import time
from datetime import date, datetime, timezone
from typing import Callable, Optional

from dateutil.relativedelta import relativedelta


class Clock:
    """Wall-clock source used by the cache, recorder and allocator."""

    def now(self) -> float:
        """Current time in seconds."""
        return time.time()

    def today(self) -> date:
        """Current UTC calendar date."""
        return utc_now().date()


class FixedClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0, today: Optional[date] = None) -> None:
        self._now = start
        self._today = today or date(2024, 1, 1)

    def now(self) -> float:
        return self._now

    def today(self) -> date:
        return self._today

    def advance(self, seconds: float) -> None:
        self._now += seconds


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def months_between(start: date, end: date) -> int:
    """
    Whole months from ``start`` until ``end``, rounded up.

    A partial month counts as a full month so that a deadline three weeks
    away still leaves one contribution period.

    Args:
        start: As-of date
        end: Target date

    Returns:
        Number of months, zero or negative when ``end`` is not after ``start``
    """
    delta = relativedelta(end, start)
    months = delta.years * 12 + delta.months
    if end > start and (delta.days > 0 or months == 0):
        months += 1
    return months


def add_months(start: date, months: float) -> date:
    """Shift ``start`` forward by ``months`` (rounded up to whole months)."""
    return start + relativedelta(months=int(math.ceil(months)))


def elapsed_ms(timer: Callable[[], float], started: float) -> float:
    """Milliseconds since ``started`` measured with ``timer``."""
    return (timer() - started) * 1000.0
