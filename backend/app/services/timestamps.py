from datetime import datetime, timezone


def parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 string into a naive UTC datetime.

    A trailing ``Z`` or an explicit offset is converted to UTC; a value with
    no offset is taken to already be UTC. Fractional seconds beyond
    microseconds are truncated. Raises ValueError for anything that is not an
    ISO-8601 timestamp or that falls outside the datetime range once in UTC.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"timestamp must be a non-empty string, got {value!r}")
    text = value.strip()
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"invalid timestamp {value!r}: {e}") from e
    return parsed


def utc_now() -> datetime:
    """Current time as naive UTC, the form timestamps are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(ts):
    """Attach UTC to a stored (naive) timestamp for output."""
    if ts is None:
        return None
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)
