"""
Per-user daily prompt quota.

The counter lives on the user record (prompts_used_today,
prompts_reset_date). It is reset lazily: the first check on a new calendar
day zeroes it, no scheduled job is involved.

Dates are compared in the server's local time zone.
"""

from dataclasses import dataclass
from datetime import date, datetime

from webbuilder.config import DAILY_PROMPT_LIMIT


@dataclass
class UsageCounter:
    count: int
    reset_date: date

    def __post_init__(self):
        if self.count < 0:
            raise ValueError("count must be >= 0")


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_stale(counter: UsageCounter, now: datetime) -> bool:
    """True when the counter belongs to an earlier (or later) calendar day."""
    return _as_date(now) != _as_date(counter.reset_date)


def has_reached_limit(
    counter: UsageCounter,
    now: datetime,
    limit: int = DAILY_PROMPT_LIMIT,
) -> bool:
    """
    Check the daily quota.

    Resets the counter in place when `now` falls on a different calendar
    day than `reset_date`, then evaluates `count >= limit`.
    """
    if is_stale(counter, now):
        counter.count = 0
        counter.reset_date = _as_date(now)

    return counter.count >= limit


def remaining(counter: UsageCounter, now: datetime, limit: int = DAILY_PROMPT_LIMIT) -> int:
    has_reached_limit(counter, now, limit)
    return max(limit - counter.count, 0)
