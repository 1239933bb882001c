# utility functions for grid load simulation

import random
from datetime import datetime, timezone


def iso_now() -> str:
    """Current UTC time as an ISO-8601 string with a Z suffix."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def sample_range(bounds) -> float:
    low, high = bounds
    return random.uniform(low, high)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
