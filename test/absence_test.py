from models.schema import HolidayRecord, LeaveRecord, TravelRecord
from reconcile.absence import is_absent

from sample_data import SATURDAY, TODAY, day_exceptions

YESTERDAY = "2025-08-21"


def test_past_weekday_with_nothing_is_absent():
    assert is_absent(YESTERDAY, TODAY, 0, day_exceptions(YESTERDAY)) is True


def test_today_and_future_are_never_absent():
    assert is_absent("2025-08-22", TODAY, 0, day_exceptions("2025-08-22")) is False
    assert is_absent("2025-08-25", TODAY, 0, day_exceptions("2025-08-25")) is False


def test_weekend_is_never_absent():
    assert is_absent(SATURDAY, TODAY, 0, day_exceptions(SATURDAY)) is False


def test_excused_days_are_not_absent():
    assert is_absent(YESTERDAY, TODAY, 0, day_exceptions(YESTERDAY, leaves=[LeaveRecord()])) is False
    assert is_absent(YESTERDAY, TODAY, 0, day_exceptions(YESTERDAY, travels=[TravelRecord()])) is False
    assert is_absent(YESTERDAY, TODAY, 0, day_exceptions(YESTERDAY, holidays=[HolidayRecord()])) is False


def test_any_filled_slot_is_presence():
    assert is_absent(YESTERDAY, TODAY, 1, day_exceptions(YESTERDAY)) is False
