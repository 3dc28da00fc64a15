from typing import Dict, Optional

from models.schema import (
    SLOT_ORDER,
    ActiveColumns,
    ResolvedShift,
    ShiftMode,
    ShiftSchedule,
    Slot,
    SlotWindow,
)

# Used when an active slot carries no explicit acceptance window.
FALLBACK_WINDOWS = {
    Slot.AM_IN: (4 * 60, 11 * 60 + 59),
    Slot.AM_OUT: (11 * 60, 12 * 60 + 30),
    Slot.PM_IN: (12 * 60 + 31, 14 * 60),
    Slot.PM_OUT: (14 * 60 + 1, 23 * 60 + 59),
}


def nominal_time(schedule: ShiftSchedule, slot: Slot) -> Optional[int]:
    definition = schedule.slot(slot)
    return definition.nominal_time if definition else None


def resolve_active_columns(schedule: Optional[ShiftSchedule]) -> ActiveColumns:
    if schedule is None:
        return ActiveColumns()
    return ActiveColumns(**{slot.value: nominal_time(schedule, slot) is not None for slot in SLOT_ORDER})


def resolve_window(schedule: ShiftSchedule, slot: Slot) -> SlotWindow:
    if nominal_time(schedule, slot) is None:
        return SlotWindow()
    definition = schedule.slot(slot)
    if definition.window_start is not None and definition.window_end is not None:
        return SlotWindow(start=definition.window_start, end=definition.window_end)
    start, end = FALLBACK_WINDOWS[slot]
    return SlotWindow(start=start, end=end)


def resolve_mode(schedule: ShiftSchedule, columns: ActiveColumns) -> ShiftMode:
    if "AMPM" in schedule.assigned_modes():
        return ShiftMode.AMPM
    if columns.am_in and columns.pm_out and not columns.am_out and not columns.pm_in:
        return ShiftMode.AMPM
    return ShiftMode.STANDARD


def resolve_shift(schedule: ShiftSchedule) -> ResolvedShift:
    columns = resolve_active_columns(schedule)
    return ResolvedShift(
        columns=columns,
        windows=resolve_windows(schedule),
        nominal={slot: nominal_time(schedule, slot) for slot in SLOT_ORDER},
        mode=resolve_mode(schedule, columns),
        credits=schedule.credit_table(),
        shift_name=schedule.shift_name,
    )


def resolve_windows(schedule: ShiftSchedule) -> Dict[Slot, SlotWindow]:
    return {slot: resolve_window(schedule, slot) for slot in SLOT_ORDER}
