from datetime import date

from models.schema import DayExceptions
from utils.timeparse import is_weekend


def is_absent(day: str, today: date, filled_count: int, exceptions: DayExceptions) -> bool:
    if is_weekend(day) or exceptions.has_leave or exceptions.has_travel or exceptions.is_holiday:
        return False
    if filled_count != 0:
        return False
    # today and future dates are still open
    return day < today.isoformat()
