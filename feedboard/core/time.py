from datetime import UTC, datetime


def now_utc() -> datetime:
    return datetime.now(UTC)


def isoformat_z(value: datetime) -> str:
    """Render an aware datetime as ISO-8601 UTC with milliseconds, e.g. 2024-01-02T00:00:00.000Z."""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
