from models.schema import (
    ActiveColumns,
    CdoUsageEntry,
    DayFlags,
    DayResult,
    DaySlots,
    FixLogRecord,
    HolidayRecord,
    LeaveRecord,
    LocatorRecord,
    RemarkType,
    Slot,
    TravelRecord,
)
from reconcile.remarks import FILE_A_LOCATOR, NO_SHIFT_ASSIGNED, compose_remarks, display_cell

from sample_data import SATURDAY, TODAY, day_exceptions, raw

YESTERDAY = "2025-08-21"
ALL_ACTIVE = ActiveColumns(am_in=True, am_out=True, pm_in=True, pm_out=True)


def texts(entries):
    return [entry.text for entry in entries]


def test_remark_order_and_dedup():
    exceptions = day_exceptions(
        SATURDAY,
        holidays=[HolidayRecord(name="Founding Day")],
        holiday_display="Founding Day",
        locators_filed=[
            LocatorRecord(ref_no="LOC-1", status="Approved"),
            LocatorRecord(ref_no="LOC-2", status="Approved"),
            LocatorRecord(ref_no="LOC-3", status="Returned"),
        ],
        leaves=[LeaveRecord(ref_no="LV-1")],
        travels=[TravelRecord()],
        cdo_entries=[CdoUsageEntry(entry_id="9")],
    )
    entries = compose_remarks(SATURDAY, exceptions, True, False, 0, 4, TODAY)
    assert texts(entries) == [
        "Weekend",
        "Founding Day",
        "Locator(Approved)",
        "Locator(Returned)",
        "Leave(LV-1)",
        "Travel(N/A)",
        "CDO(CDO-9)",
    ]
    assert entries[2].reference == "LOC-1"
    assert entries[2].type == RemarkType.LOCATOR


def test_absent_remark():
    entries = compose_remarks(YESTERDAY, day_exceptions(YESTERDAY), False, True, 0, 4, TODAY)
    assert texts(entries) == ["Absent"]
    assert entries[0].type == RemarkType.ABSENT


def test_plain_complete_day_has_no_remarks():
    assert compose_remarks(YESTERDAY, day_exceptions(YESTERDAY), False, False, 4, 4, TODAY) == []


def test_file_a_locator_on_incomplete_past_day():
    entries = compose_remarks(YESTERDAY, day_exceptions(YESTERDAY), False, False, 2, 4, TODAY)
    assert texts(entries) == [FILE_A_LOCATOR]
    assert entries[0].type == RemarkType.ACTION


def test_no_file_a_locator_when_something_was_filed():
    with_locator = day_exceptions(YESTERDAY, locators_filed=[LocatorRecord(status="ForApproval")])
    assert FILE_A_LOCATOR not in texts(compose_remarks(YESTERDAY, with_locator, False, False, 2, 4, TODAY))

    with_fix_log = day_exceptions(YESTERDAY, fix_logs_filed=[FixLogRecord(status="ForApproval")])
    assert FILE_A_LOCATOR not in texts(compose_remarks(YESTERDAY, with_fix_log, False, False, 2, 4, TODAY))


def test_no_file_a_locator_for_today_or_excused_days():
    today = TODAY.isoformat()
    assert compose_remarks(today, day_exceptions(today), False, False, 2, 4, TODAY) == []
    on_leave = day_exceptions(YESTERDAY, leaves=[LeaveRecord(ref_no="LV-1")])
    assert texts(compose_remarks(YESTERDAY, on_leave, False, False, 2, 4, TODAY)) == ["Leave(LV-1)"]


def result(**flags):
    return DayResult(date=YESTERDAY, slots=DaySlots(), flags=DayFlags(**flags))


def test_display_cell_values_and_inactive_columns():
    day = DayResult(date=YESTERDAY, slots=DaySlots(am_in=raw(485)), flags=DayFlags(is_weekend=True))
    assert display_cell(day, Slot.AM_IN, ALL_ACTIVE) == "08:05"
    assert display_cell(day, Slot.AM_IN, ActiveColumns(pm_out=True)) == "-"
    assert display_cell(day, Slot.PM_OUT, ALL_ACTIVE) == "Weekend"


def test_display_cell_precedence():
    assert display_cell(result(is_weekend=True, has_leave=True), Slot.AM_IN, ALL_ACTIVE) == "Weekend"
    assert display_cell(result(has_leave=True, has_travel=True), Slot.AM_IN, ALL_ACTIVE) == "Leave"
    assert display_cell(result(has_travel=True, has_cdo=True), Slot.AM_IN, ALL_ACTIVE) == "Travel"
    assert display_cell(result(has_cdo=True, is_holiday=True), Slot.AM_IN, ALL_ACTIVE) == "CDO"
    assert display_cell(result(is_holiday=True), Slot.AM_IN, ALL_ACTIVE) == "Holiday"
    assert display_cell(result(is_absent=True), Slot.AM_IN, ALL_ACTIVE) == "-"
    assert display_cell(result(), Slot.AM_IN, ALL_ACTIVE) == "-"


def test_display_cell_holiday_name_and_missing_shift():
    holiday = DayResult(date=YESTERDAY, slots=DaySlots(), flags=DayFlags(is_holiday=True),
                        holiday_display="Work Suspension")
    assert display_cell(holiday, Slot.AM_IN, ALL_ACTIVE) == "Work Suspension"
    assert display_cell(result(), Slot.AM_IN, None) == NO_SHIFT_ASSIGNED
    assert display_cell(result(is_absent=True), Slot.AM_IN, None) == "-"
