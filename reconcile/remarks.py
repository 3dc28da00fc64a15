from datetime import date
from typing import List, Optional

from models.schema import ActiveColumns, DayExceptions, DayResult, RemarkEntry, RemarkType, Slot, Status

STATUS_LABELS = {
    Status.FOR_APPROVAL: "For Approval",
    Status.APPROVED: "Approved",
    Status.RETURNED: "Returned",
    Status.CANCELLED: "Cancelled",
}

FILE_A_LOCATOR = "File a locator"
NO_SHIFT_ASSIGNED = "No Shift Assigned"
DASH = "-"


def add_remark(entries: List[RemarkEntry], type_: RemarkType, text: str, reference: Optional[str] = None) -> None:
    if any(entry.type == type_ and entry.text == text for entry in entries):
        return
    entries.append(RemarkEntry(type=type_, text=text, reference=reference))


def needs_locator(day: str, today: date, weekend: bool, exceptions: DayExceptions,
                  filled_count: int, expected_count: int) -> bool:
    if weekend or day >= today.isoformat():
        return False
    if exceptions.locators_filed or exceptions.fix_logs_filed:
        return False
    if exceptions.has_leave or exceptions.has_travel or exceptions.is_holiday:
        return False
    return 0 < filled_count < expected_count


def compose_remarks(day: str, exceptions: DayExceptions, weekend: bool, absent: bool,
                    filled_count: int, expected_count: int, today: date) -> List[RemarkEntry]:
    entries: List[RemarkEntry] = []
    if weekend:
        add_remark(entries, RemarkType.WEEKEND, "Weekend")
    if exceptions.holiday_display:
        add_remark(entries, RemarkType.HOLIDAY, exceptions.holiday_display)
    for locator in exceptions.locators_filed:
        add_remark(entries, RemarkType.LOCATOR, f"Locator({STATUS_LABELS[locator.status]})", locator.ref_no)
    for leave in exceptions.leaves:
        add_remark(entries, RemarkType.LEAVE, f"Leave({leave.ref_no or 'N/A'})", leave.ref_no)
    for travel in exceptions.travels:
        add_remark(entries, RemarkType.TRAVEL, f"Travel({travel.ref_no or 'N/A'})", travel.ref_no)
    for entry in exceptions.cdo_entries:
        add_remark(entries, RemarkType.CDO, f"CDO({entry.display_ref})", entry.ref_no or entry.entry_id)
    if absent:
        add_remark(entries, RemarkType.ABSENT, "Absent")
    if needs_locator(day, today, weekend, exceptions, filled_count, expected_count):
        add_remark(entries, RemarkType.ACTION, FILE_A_LOCATOR)
    return entries


def display_cell(result: DayResult, slot: Slot, columns: Optional[ActiveColumns]) -> str:
    """Text for one time-slot cell; ``columns=None`` means the employee has no shift."""
    if columns is not None and not columns.is_active(slot):
        return DASH
    value = result.slots.get(slot)
    if value is not None:
        return value.time
    flags = result.flags
    if flags.is_weekend:
        return "Weekend"
    if flags.has_leave:
        return "Leave"
    if flags.has_travel:
        return "Travel"
    if flags.has_cdo:
        return "CDO"
    if flags.is_holiday:
        return result.holiday_display or "Holiday"
    if flags.is_absent:
        return DASH
    if columns is None:
        return NO_SHIFT_ASSIGNED
    return DASH
