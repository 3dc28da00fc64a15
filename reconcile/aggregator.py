import logging
from collections import defaultdict
from typing import Dict, List, Optional

from models.schema import (
    DayExceptions,
    EmployeeRef,
    ExceptionBundle,
    FixLogRecord,
    HolidayRecord,
    LeaveRecord,
    LocatorRecord,
    LocatorWindow,
    Status,
    TravelRecord,
)

WORK_SUSPENSION = "Work Suspension"


def locator_window(locator: LocatorRecord) -> Optional[LocatorWindow]:
    endpoints = [m for m in (locator.departure_time, locator.arrival_time) if m is not None]
    if not endpoints:
        return None
    return LocatorWindow(start=min(endpoints), end=max(endpoints), ref_no=locator.ref_no)


def leave_applies(leave: LeaveRecord, employee: EmployeeRef) -> bool:
    # Leave feeds are already scoped to the employee; identity fields only narrow them.
    if leave.employee_id is None and leave.user_id is None:
        return True
    if employee.employee_id and leave.employee_id == employee.employee_id:
        return True
    if employee.user_id and leave.user_id == employee.user_id:
        return True
    return False


def travel_applies(travel: TravelRecord, employee: EmployeeRef) -> bool:
    if employee.employee_id and employee.employee_id in travel.participant_ids:
        return True
    if employee.user_id and employee.user_id in travel.participant_user_ids:
        return True
    return False


def holiday_display(holidays: List[HolidayRecord]) -> Optional[str]:
    if not holidays:
        return None
    names = [h.name.strip() or "Holiday" for h in holidays]
    if any("work suspension" in name.lower() for name in names):
        return WORK_SUSPENSION
    return ", ".join(names)


class ExceptionAggregator:
    def __init__(self, bundle: ExceptionBundle, employee: EmployeeRef, data_version: Optional[str] = None):
        self.employee = employee
        self.data_version = None
        self._bundle = None
        self.refresh(bundle, data_version)

    def refresh(self, bundle: ExceptionBundle, data_version: Optional[str] = None) -> bool:
        if self._bundle is not None and data_version is not None and data_version == self.data_version:
            return False
        self._bundle = bundle
        self.data_version = data_version
        self._build_index(bundle)
        return True

    def _build_index(self, bundle: ExceptionBundle) -> None:
        self._locators: Dict[str, List[LocatorRecord]] = defaultdict(list)
        self._leaves: Dict[str, List[LeaveRecord]] = defaultdict(list)
        self._travels: Dict[str, List[TravelRecord]] = defaultdict(list)
        self._cdo: Dict[str, list] = defaultdict(list)
        self._fix_logs: Dict[str, List[FixLogRecord]] = defaultdict(list)
        self._dated_holidays: Dict[str, List[HolidayRecord]] = defaultdict(list)
        self._recurring_holidays: Dict[str, List[HolidayRecord]] = defaultdict(list)

        for locator in bundle.locators:
            if locator.date:
                self._locators[locator.date].append(locator)

        for leave in bundle.leaves:
            if leave.status != Status.APPROVED or not leave_applies(leave, self.employee):
                continue
            for day in leave.dates:
                self._leaves[day].append(leave)

        for travel in bundle.travels:
            if travel.status != Status.APPROVED or not travel_applies(travel, self.employee):
                continue
            for day in travel.dates:
                self._travels[day].append(travel)

        for entry in bundle.cdo_entries:
            if entry.status == Status.APPROVED and entry.date:
                self._cdo[entry.date].append(entry)
        for entries in self._cdo.values():
            entries.sort(key=lambda e: e.display_ref)

        for fix_log in bundle.fix_logs:
            if fix_log.date:
                self._fix_logs[fix_log.date].append(fix_log)

        for holiday in bundle.holidays:
            if holiday.is_recurring:
                month_day = holiday.month_day or (holiday.date[5:10] if holiday.date else None)
                if month_day:
                    self._recurring_holidays[month_day].append(holiday)
            elif holiday.date:
                self._dated_holidays[holiday.date].append(holiday)
            else:
                logging.warning(f"Skipping holiday without a usable date: {holiday.name}")

    def holidays_for(self, day: str) -> List[HolidayRecord]:
        return list(self._dated_holidays.get(day, [])) + list(self._recurring_holidays.get(day[5:10], []))

    def for_date(self, day: str) -> DayExceptions:
        locators = self._locators.get(day, [])
        approved = [loc for loc in locators if loc.status == Status.APPROVED]
        windows = [w for w in (locator_window(loc) for loc in approved) if w is not None]

        fix_logs = self._fix_logs.get(day, [])
        approved_fix = next((f for f in fix_logs if f.status == Status.APPROVED), None)

        holidays = self.holidays_for(day)
        return DayExceptions(
            date=day,
            locator_windows=windows,
            locators_filed=list(locators),
            leaves=list(self._leaves.get(day, [])),
            travels=list(self._travels.get(day, [])),
            holidays=holidays,
            holiday_display=holiday_display(holidays),
            cdo_entries=list(self._cdo.get(day, [])),
            fix_log=approved_fix,
            fix_logs_filed=list(fix_logs),
        )
