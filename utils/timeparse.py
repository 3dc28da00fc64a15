import re
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

# Calendar dates are only ever taken from the string prefix of a stored value.
# Nothing here goes through a timezone-aware constructor.

_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_CLOCK = re.compile(r"(\d{1,2}):(\d{2})")
_MONTH_DAY = re.compile(r"^(\d{1,2})-(\d{1,2})$")

EMPTY_MARKERS = ("", "-")


def _valid_date(year: int, month: int, day: int) -> Optional[str]:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def extract_date(value) -> Optional[str]:
    """Return the ``YYYY-MM-DD`` calendar date carried by ``value``, or None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    if not text:
        return None
    prefix = re.split(r"[T ]", text, maxsplit=1)[0]
    match = _ISO_DATE.match(prefix)
    if match:
        return _valid_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    match = _SLASH_DATE.match(prefix)
    if match:
        return _valid_date(int(match.group(3)), int(match.group(1)), int(match.group(2)))
    return None


def extract_minutes(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value <= 1439 else None
    if isinstance(value, (datetime, time)):
        return value.hour * 60 + value.minute
    text = str(value).strip()
    if text in EMPTY_MARKERS:
        return None
    match = _CLOCK.search(text)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours * 60 + minutes


def split_timestamp(value) -> Optional[Tuple[str, int]]:
    day = extract_date(value)
    if day is None:
        return None
    if isinstance(value, str):
        parts = re.split(r"[T ]", value.strip(), maxsplit=1)
        minutes = extract_minutes(parts[1]) if len(parts) > 1 else None
    else:
        minutes = extract_minutes(value)
    if minutes is None:
        return None
    return day, minutes


def extract_month_day(value) -> Optional[str]:
    full = extract_date(value)
    if full:
        return full[5:10]
    if value is None:
        return None
    match = _MONTH_DAY.match(str(value).strip())
    if not match:
        return None
    month, day = int(match.group(1)), int(match.group(2))
    # 2000 is a leap year, so Feb 29 is accepted
    if _valid_date(2000, month, day) is None:
        return None
    return f"{month:02d}-{day:02d}"


def minutes_to_hhmm(value: Optional[int]) -> Optional[str]:
    if value is None or value < 0:
        return None
    return f"{value // 60:02d}:{value % 60:02d}"


def date_range(date_from: str, date_to: str) -> List[str]:
    start = extract_date(date_from)
    end = extract_date(date_to)
    if not start or not end:
        return []
    current = date.fromisoformat(start)
    last = date.fromisoformat(end)
    days = []
    while current <= last:
        days.append(current.isoformat())
        current += timedelta(days=1)
    return days


def is_weekend(date_str: str) -> bool:
    day = extract_date(date_str)
    if not day:
        return False
    return date.fromisoformat(day).weekday() >= 5
