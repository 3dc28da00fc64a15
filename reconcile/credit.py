from models.schema import DayExceptions, ResolvedShift, ShiftMode, Slot

from reconcile.backfill import SlotMap


def _has(resolved: ResolvedShift, slots: SlotMap, slot: Slot) -> bool:
    return resolved.columns.is_active(slot) and slots.get(slot) is not None


def compute_day_credit(resolved: ResolvedShift, slots: SlotMap, day: DayExceptions, travel_day_credit: float = 1.0) -> float:
    if day.has_leave or day.is_holiday:
        return 0.0

    has_am_in = _has(resolved, slots, Slot.AM_IN)
    has_am_out = _has(resolved, slots, Slot.AM_OUT)
    has_pm_in = _has(resolved, slots, Slot.PM_IN)
    has_pm_out = _has(resolved, slots, Slot.PM_OUT)

    if day.has_travel and not (has_am_in or has_am_out or has_pm_in or has_pm_out):
        return round(travel_day_credit, 2)

    credits = resolved.credits
    if resolved.mode == ShiftMode.AMPM:
        total = 0.0
        if has_am_in:
            total += credits.ampm / 2
        if has_pm_out:
            total += credits.ampm / 2
        return round(total, 2)

    full = credits.am + credits.pm
    # partial-day patterns must be checked before the pair rule
    if has_am_in and not has_am_out and has_pm_in and has_pm_out:
        return round(full, 2)
    if has_am_in and has_am_out and not has_pm_in and has_pm_out:
        return round(full, 2)
    if not has_am_in and has_am_out and has_pm_in and has_pm_out:
        return round(full / 2, 2)
    if has_am_in and has_am_out and has_pm_in and not has_pm_out:
        return round(full / 2, 2)
    if has_am_in and not has_am_out and not has_pm_in and has_pm_out:
        return round(full, 2)

    total = 0.0
    if has_am_in and has_am_out:
        total += credits.am
    if has_pm_in and has_pm_out:
        total += credits.pm
    return round(total, 2)
