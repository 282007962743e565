"""UTC time helpers shared by services and repositories."""

from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    """
    Normalize a datetime to aware UTC.

    SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
    columns; everything this application writes is UTC, so naive values are
    labelled as UTC rather than converted.

    :param value: Datetime to normalize (``None`` passes through).
    :returns: Aware UTC datetime or ``None``.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
