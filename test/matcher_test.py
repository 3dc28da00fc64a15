from datetime import datetime

from models.schema import RawPunch, Slot
from reconcile.matcher import index_punches, match_day, pick_am_in
from reconcile.shift_windows import resolve_shift

from sample_data import ampm_schedule, standard_schedule


def hm(hours, minutes=0):
    return hours * 60 + minutes


def test_am_in_prefers_earliest_on_time_punch():
    matched = match_day(resolve_shift(standard_schedule()), [hm(7, 45), hm(7, 55), hm(8, 10)])
    assert matched[Slot.AM_IN] == hm(7, 45)


def test_am_in_takes_nearest_when_all_late():
    matched = match_day(resolve_shift(standard_schedule()), [hm(8, 20), hm(8, 5)])
    assert matched[Slot.AM_IN] == hm(8, 5)


def test_am_in_without_nominal_takes_earliest():
    assert pick_am_in([hm(9), hm(7)], None) == hm(7)


def test_outs_and_pm_in():
    minutes = [hm(11, 58), hm(12, 5), hm(12, 45), hm(12, 50), hm(16, 30), hm(17, 5), hm(18, 10)]
    matched = match_day(resolve_shift(standard_schedule()), minutes)
    assert matched[Slot.AM_OUT] == hm(11, 58)
    assert matched[Slot.PM_IN] == hm(12, 45)
    assert matched[Slot.PM_OUT] == hm(18, 10)


def test_punch_outside_every_window_is_ignored():
    matched = match_day(resolve_shift(standard_schedule()), [hm(2, 0)])
    assert all(value is None for value in matched.values())


def test_inactive_slots_are_never_matched():
    matched = match_day(resolve_shift(ampm_schedule()), [hm(8), hm(12), hm(13), hm(17)])
    assert matched[Slot.AM_IN] == hm(8)
    assert matched[Slot.AM_OUT] is None
    assert matched[Slot.PM_IN] is None
    assert matched[Slot.PM_OUT] == hm(17)


def test_index_punches_groups_by_date_and_skips_bad_rows():
    punches = [
        RawPunch(employee_id="1", timestamp="garbage"),
        RawPunch(employee_id="1", timestamp="2025-08-18 17:00:00"),
        RawPunch(employee_id="1", timestamp="2025-08-18 08:00:00"),
        RawPunch(employee_id="1", timestamp=datetime(2025, 8, 19, 7, 59)),
        RawPunch(employee_id="1", timestamp=None),
    ]
    assert index_punches(punches) == {"2025-08-18": [480, 1020], "2025-08-19": [479]}
