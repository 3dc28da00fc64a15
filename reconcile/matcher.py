import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from models.schema import SLOT_ORDER, RawPunch, ResolvedShift, Slot
from utils.timeparse import split_timestamp


def index_punches(punches: Iterable[RawPunch]) -> Dict[str, List[int]]:
    by_date: Dict[str, List[int]] = defaultdict(list)
    for punch in punches:
        parts = split_timestamp(punch.timestamp)
        if parts is None:
            logging.warning(f"Skipping malformed punch timestamp: {punch.timestamp!r}")
            continue
        day, minutes = parts
        by_date[day].append(minutes)
    return {day: sorted(values) for day, values in by_date.items()}


def pick_am_in(candidates: List[int], nominal: Optional[int]) -> int:
    if nominal is not None:
        on_time = [m for m in candidates if m <= nominal]
        if on_time:
            return min(on_time)
        return min(candidates, key=lambda m: (abs(m - nominal), m))
    return min(candidates)


def pick_slot(slot: Slot, candidates: List[int], nominal: Optional[int]) -> int:
    if slot == Slot.AM_IN:
        return pick_am_in(candidates, nominal)
    if slot == Slot.PM_OUT:
        return max(candidates)
    return min(candidates)


def match_day(resolved: ResolvedShift, day_minutes: Iterable[int]) -> Dict[Slot, Optional[int]]:
    minutes = list(day_minutes)
    matched: Dict[Slot, Optional[int]] = {}
    for slot in SLOT_ORDER:
        matched[slot] = None
        if not resolved.columns.is_active(slot):
            continue
        window = resolved.windows[slot]
        candidates = [m for m in minutes if window.contains(m)]
        if candidates:
            matched[slot] = pick_slot(slot, candidates, resolved.nominal[slot])
    return matched
