# utils/dates.py
from datetime import date, datetime
from typing import Optional

from dateutil import parser


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def days_until(start: datetime, end: datetime) -> int:
    """Whole calendar days from ``start`` to ``end``, never negative."""
    return max((start_of_day(end) - start_of_day(start)).days, 0)


def parse_date(x) -> Optional[datetime]:
    if not x:
        return None
    if isinstance(x, datetime):
        return x
    if isinstance(x, date):
        return datetime(x.year, x.month, x.day)
    try:
        return parser.parse(str(x))
    except (ValueError, OverflowError):
        return None
