import logging
from datetime import date
from typing import Iterable, List, Optional

from models.schema import (
    SLOT_ORDER,
    AttendanceSummary,
    DayExceptions,
    DayFlags,
    DayResult,
    DaySlots,
    EmployeeRef,
    ExceptionBundle,
    RawPunch,
    ResolvedShift,
    ShiftSchedule,
)
from reconcile.absence import is_absent
from reconcile.aggregator import ExceptionAggregator
from reconcile.backfill import backfill_day, slots_from_matches
from reconcile.credit import compute_day_credit
from reconcile.errors import ShiftScheduleNotAssigned
from reconcile.lateness import compute_late_minutes
from reconcile.matcher import index_punches, match_day
from reconcile.remarks import compose_remarks
from reconcile.shift_windows import resolve_shift
from utils.config import get_engine_settings
from utils.helper import (
    get_cdo_entries,
    get_fix_logs,
    get_holidays,
    get_leaves,
    get_locators,
    get_punches,
    get_shift_schedule,
    get_travels,
)
from utils.timeparse import date_range, is_weekend


def reconcile_day(day: str, resolved: ResolvedShift, day_minutes: Iterable[int], exceptions: DayExceptions,
                  today: date, travel_day_credit: float = 1.0) -> DayResult:
    slots = backfill_day(resolved, slots_from_matches(match_day(resolved, day_minutes)), exceptions)
    filled = sum(1 for slot in SLOT_ORDER if slots[slot] is not None)
    weekend = is_weekend(day)
    absent = is_absent(day, today, filled, exceptions)

    fix_log = exceptions.fix_log
    if fix_log is None and exceptions.fix_logs_filed:
        fix_log = exceptions.fix_logs_filed[0]

    return DayResult(
        date=day,
        slots=DaySlots(**{slot.value: slots[slot] for slot in SLOT_ORDER}),
        late_minutes=compute_late_minutes(resolved, slots, exceptions),
        day_credit=compute_day_credit(resolved, slots, exceptions, travel_day_credit),
        remarks=compose_remarks(day, exceptions, weekend, absent, filled, resolved.columns.count(), today),
        flags=DayFlags(
            is_weekend=weekend,
            is_holiday=exceptions.is_holiday,
            has_leave=exceptions.has_leave,
            has_travel=exceptions.has_travel,
            has_locator=exceptions.has_locator,
            has_cdo=exceptions.has_cdo,
            is_absent=absent,
        ),
        holiday_display=exceptions.holiday_display,
        fix_log=fix_log,
    )


def reconcile_range(employee: EmployeeRef, schedule: Optional[ShiftSchedule], punches: Iterable[RawPunch],
                    bundle: ExceptionBundle, date_from: str, date_to: str, today: Optional[date] = None,
                    data_version: Optional[str] = None) -> List[DayResult]:
    if schedule is None:
        logging.warning(f"No shift schedule assigned for employee_id: {employee.employee_id}")
        raise ShiftScheduleNotAssigned(employee.employee_id)

    today = today or date.today()
    settings = get_engine_settings()
    resolved = resolve_shift(schedule)
    punches_by_date = index_punches(punches)
    aggregator = ExceptionAggregator(bundle, employee, data_version)
    days = date_range(date_from, date_to)

    logging.info(f"Reconciling employee_id: {employee.employee_id} from {date_from} to {date_to} "
                 f"({len(days)} days, today={today.isoformat()})")
    results = [
        reconcile_day(day, resolved, punches_by_date.get(day, []), aggregator.for_date(day), today,
                      settings["travel_day_credit"])
        for day in days
    ]
    logging.info(f"Reconciled {len(results)} days for employee_id: {employee.employee_id}")
    return results


def reconcile_employee(employee_id: str, date_from: str, date_to: str, today: Optional[date] = None,
                       user_id: Optional[str] = None) -> List[DayResult]:
    employee = EmployeeRef(employee_id=employee_id, user_id=user_id)
    bundle = ExceptionBundle(
        locators=get_locators(employee_id, date_from, date_to),
        leaves=get_leaves(employee_id, date_from, date_to),
        travels=get_travels(employee_id, date_from, date_to),
        holidays=get_holidays(date_from, date_to),
        cdo_entries=get_cdo_entries(employee_id, date_from, date_to),
        fix_logs=get_fix_logs(employee_id, date_from, date_to),
    )
    return reconcile_range(
        employee,
        get_shift_schedule(employee_id),
        get_punches(employee_id, date_from, date_to),
        bundle,
        date_from,
        date_to,
        today=today,
    )


def summarize_period(results: List[DayResult], minutes_per_day: Optional[int] = None) -> AttendanceSummary:
    minutes_per_day = minutes_per_day or get_engine_settings()["minutes_per_day"]
    total_late = sum(day.late_minutes for day in results)
    total_days = round(sum(day.day_credit for day in results), 2)
    lates_in_days = total_late / minutes_per_day

    return AttendanceSummary(
        days_processed=len(results),
        total_late_minutes=total_late,
        total_days=total_days,
        lates_in_days=round(lates_in_days, 4),
        net_days=round(max(0.0, total_days - lates_in_days), 4),
        absences=sum(1 for day in results if day.flags.is_absent),
    )
