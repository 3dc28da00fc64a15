from models.schema import CHECK_IN_SLOTS, SLOT_ORDER, DayExceptions, ResolvedShift

from reconcile.backfill import SlotMap


def compute_late_minutes(resolved: ResolvedShift, slots: SlotMap, day: DayExceptions) -> int:
    if day.has_leave or day.has_travel or day.has_cdo:
        return 0
    late = 0
    for slot in SLOT_ORDER:
        nominal = resolved.nominal[slot]
        value = slots.get(slot)
        if not resolved.columns.is_active(slot) or nominal is None or value is None:
            continue
        if slot in CHECK_IN_SLOTS:
            late += max(0, value.minutes - nominal)
        else:
            late += max(0, nominal - value.minutes)
    return late
