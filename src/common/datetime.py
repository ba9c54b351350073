"""Datetime utilities."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from dateutil.parser import parse as parse_date

# Timezone abbreviations for date parsing
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "IST": timezone(timedelta(hours=5, minutes=30)),
}

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_published(value: Optional[str]) -> Optional[datetime]:
    """Parse a raw feed/page timestamp; None if missing or unparseable."""
    if not value:
        return None
    try:
        dt = parse_date(value, tzinfos=TZINFOS)
    except (ValueError, OverflowError, TypeError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def published_sort_key(value: Optional[str]) -> datetime:
    """Sort key placing unparseable timestamps oldest."""
    return parse_published(value) or _EPOCH
