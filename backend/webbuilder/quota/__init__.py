from webbuilder.quota.limiter import (
    UsageCounter,
    has_reached_limit,
    is_stale,
    remaining,
)

__all__ = [
    "UsageCounter",
    "has_reached_limit",
    "is_stale",
    "remaining",
]
