from datetime import datetime, timezone


def get_current_timestamp() -> int:
    """Milliseconds since the epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
