import logging
from typing import Dict, Optional

from models.schema import SLOT_ORDER, DayExceptions, Provenance, ResolvedShift, Slot, SlotValue

SlotMap = Dict[Slot, Optional[SlotValue]]


def slots_from_matches(matched: Dict[Slot, Optional[int]]) -> SlotMap:
    return {
        slot: SlotValue.of(minutes, Provenance.RAW) if minutes is not None else None
        for slot, minutes in matched.items()
    }


def apply_locator_backfill(resolved: ResolvedShift, slots: SlotMap, day: DayExceptions) -> bool:
    filled = False
    if not day.locator_windows:
        return filled
    for slot in SLOT_ORDER:
        nominal = resolved.nominal[slot]
        if slots.get(slot) is not None or nominal is None or not resolved.columns.is_active(slot):
            continue
        if any(window.contains(nominal) for window in day.locator_windows):
            slots[slot] = SlotValue.of(nominal, Provenance.LOCATOR)
            filled = True
            logging.debug(f"Locator backfill on {day.date} for {slot.value}")
    return filled


def apply_fix_log(resolved: ResolvedShift, slots: SlotMap, day: DayExceptions) -> bool:
    fix_log = day.fix_log
    if fix_log is None:
        return False
    applied = False
    for slot in SLOT_ORDER:
        if not resolved.columns.is_active(slot):
            continue
        override = fix_log.override(slot)
        if override is None:
            continue
        slots[slot] = SlotValue.of(override, Provenance.FIXLOG)
        applied = True
        logging.debug(f"Fix log applied on {day.date} for {slot.value}")
    return applied


def backfill_day(resolved: ResolvedShift, slots: SlotMap, day: DayExceptions) -> SlotMap:
    # Locator precedence is per day: one locator-filled slot rules out the fix log entirely.
    if not apply_locator_backfill(resolved, slots, day):
        apply_fix_log(resolved, slots, day)
    return slots
