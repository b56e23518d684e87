"""Timestamp helpers shared by the record wire mappings."""

from __future__ import annotations

from datetime import datetime, time, timezone


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO-8601 timestamp from the backend into an aware datetime.

    Values without an offset are taken as UTC, which is how the backend stores them.
    """

    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with a ``Z`` suffix (second precision)."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_time_of_day(value: str | time | datetime | None) -> time | None:
    """Accept ``HH:MM[:SS]`` or a full timestamp and return the local time of day."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.time()
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    text = str(value).strip()
    if "T" in text or len(text) > 8 and text[4] == "-":
        # Full timestamps carry the reminder as an instant; read it in local time.
        return parse_timestamp(text).astimezone().time()
    return time.fromisoformat(text).replace(tzinfo=None)


def format_time_of_day(value: time) -> str:
    return value.strftime("%H:%M:%S")
