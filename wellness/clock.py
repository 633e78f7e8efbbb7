# wellness/clock.py
"""
Wall-clock access for the aggregation and stats code.

Activity timestamps are stored as naive datetimes in the owner's local zone
(their profile ``timezone``, else ``WELLNESS_TIMEZONE``), so a calendar day
is simply ``dt.date()``. Tests swap the clock through ``app.config["CLOCK"]``.
"""
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from flask import current_app


def local_zone(name: Optional[str] = None) -> ZoneInfo:
    return ZoneInfo(name or current_app.config.get("WELLNESS_TIMEZONE") or "UTC")


def now(zone: Optional[ZoneInfo] = None) -> datetime:
    """Current local time, naive."""
    zone = zone or local_zone()
    clock = current_app.config.get("CLOCK")
    current = clock() if clock else datetime.now(zone)
    return to_local_naive(current, zone)


def today(zone: Optional[ZoneInfo] = None) -> date:
    return now(zone).date()


def to_local_naive(value: datetime, zone: Optional[ZoneInfo] = None) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(zone or local_zone()).replace(tzinfo=None)


def parse_datetime(raw, zone: Optional[ZoneInfo] = None) -> datetime:
    """
    Accepts ISO 8601 strings ("2025-01-02", "2025-01-02T08:30:00Z", ...).
    Naive values are taken as already local. Raises ValueError on anything
    else.
    """
    if isinstance(raw, datetime):
        return to_local_naive(raw, zone)
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError("date must be an ISO 8601 string")
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_local_naive(datetime.fromisoformat(text), zone)
