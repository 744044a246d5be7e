from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from dateutil import parser as date_parser

# Sort key for anything parse_timestamp cannot read: older than every real date.
UNPARSEABLE = datetime.min.replace(tzinfo=UTC)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an RFC 822 or ISO-8601 (or similar) feed timestamp into an aware UTC datetime.

    Feeds disagree on formats, so RFC 822 is tried first (what RSS mandates) and
    dateutil handles the rest. Naive results are read as UTC. Returns None when the
    value cannot be understood.
    """
    if not value or not value.strip():
        return None
    text = value.strip()

    parsed: datetime | None = None
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        parsed = None
    if parsed is None:
        try:
            parsed = date_parser.parse(text)
        except (ValueError, OverflowError):
            return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        return None


def sort_key(value: str | None) -> datetime:
    return parse_timestamp(value) or UNPARSEABLE
