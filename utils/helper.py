import logging
from typing import Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from models.schema import (
    CdoUsageEntry,
    FixLogRecord,
    HolidayRecord,
    LeaveRecord,
    LocatorRecord,
    RawPunch,
    ShiftSchedule,
    TravelRecord,
)
from utils.timeparse import extract_date

T = TypeVar("T", bound=BaseModel)

# In-memory stand-ins for the schedule, punch and exception feeds
mock_schedules: Dict[str, dict] = {
    "1": {
        "shift_name": "Regular 8-5",
        "am_in": {"nominal_time": "08:00", "window_start": "04:00", "window_end": "11:59"},
        "am_out": {"nominal_time": "12:00", "window_start": "11:00", "window_end": "12:30"},
        "pm_in": {"nominal_time": "13:00", "window_start": "12:31", "window_end": "14:00"},
        "pm_out": {"nominal_time": "17:00", "window_start": "14:01", "window_end": "23:59"},
        "assigned_shifts": [
            {"shift_mode": "AM", "credits": 0.5},
            {"shift_mode": "PM", "credits": 0.5},
        ],
    },
    "2": {
        "shift_name": "Straight 8-5",
        "am_in": {"nominal_time": "08:00"},
        "pm_out": {"nominal_time": "17:00"},
        "assigned_shifts": [{"shift_mode": "AMPM", "credits": 1.0}],
    },
}

mock_employees: List[dict] = [
    {"employee_id": "1", "user_id": "123456", "is_active": True},
    {"employee_id": "2", "user_id": "654321", "is_active": True},
    {"employee_id": "3", "user_id": "777777", "is_active": True},
]

mock_punches: List[dict] = []
mock_locators: List[dict] = []
mock_leaves: List[dict] = []
mock_travels: List[dict] = []
mock_holidays: List[dict] = []
mock_cdo_entries: List[dict] = []
mock_fix_logs: List[dict] = []


def reset_feeds() -> None:
    for feed in (mock_punches, mock_locators, mock_leaves, mock_travels, mock_holidays,
                 mock_cdo_entries, mock_fix_logs):
        feed.clear()


def _in_range(value, date_from: str, date_to: str) -> bool:
    day = extract_date(value)
    return day is not None and date_from <= day <= date_to


def _belongs_to(record: dict, employee_id: str) -> bool:
    return str(record.get("employee_id")) == str(employee_id)


def build_records(model: Type[T], rows: Iterable[dict]) -> List[T]:
    records = []
    for row in rows:
        try:
            records.append(model(**row))
        except ValidationError as exc:
            logging.warning(f"Skipping malformed {model.__name__} row: {exc.error_count()} error(s)")
    return records


def get_employee(employee_id: str) -> Optional[dict]:
    for emp in mock_employees:
        if emp["employee_id"] == str(employee_id):
            return emp
    return None


def get_shift_schedule(employee_id: str) -> Optional[ShiftSchedule]:
    schedule = mock_schedules.get(str(employee_id))
    if schedule is None:
        return None
    built = build_records(ShiftSchedule, [schedule])
    return built[0] if built else None


def get_punches(employee_id: str, date_from: str, date_to: str) -> List[RawPunch]:
    return build_records(RawPunch, (
        p for p in mock_punches
        if _belongs_to(p, employee_id) and _in_range(p.get("timestamp"), date_from, date_to)
    ))


def get_locators(employee_id: str, date_from: str, date_to: str) -> List[LocatorRecord]:
    return build_records(LocatorRecord, (
        loc for loc in mock_locators
        if _belongs_to(loc, employee_id) and _in_range(loc.get("date"), date_from, date_to)
    ))


def get_leaves(employee_id: str, date_from: str, date_to: str) -> List[LeaveRecord]:
    leaves = build_records(LeaveRecord, (leave for leave in mock_leaves if _belongs_to(leave, employee_id)))
    return [leave for leave in leaves if any(date_from <= d <= date_to for d in leave.dates)]


def get_travels(employee_id: str, date_from: str, date_to: str) -> List[TravelRecord]:
    return [
        travel for travel in build_records(TravelRecord, mock_travels)
        if str(employee_id) in travel.participant_ids and any(date_from <= d <= date_to for d in travel.dates)
    ]


def get_holidays(date_from: str, date_to: str) -> List[HolidayRecord]:
    holidays = build_records(HolidayRecord, mock_holidays)
    return [h for h in holidays if h.is_recurring or (h.date is not None and date_from <= h.date <= date_to)]


def get_cdo_entries(employee_id: str, date_from: str, date_to: str) -> List[CdoUsageEntry]:
    return build_records(CdoUsageEntry, (
        entry for entry in mock_cdo_entries
        if _belongs_to(entry, employee_id) and _in_range(entry.get("date"), date_from, date_to)
    ))


def get_fix_logs(employee_id: str, date_from: str, date_to: str) -> List[FixLogRecord]:
    return build_records(FixLogRecord, (
        fix for fix in mock_fix_logs
        if _belongs_to(fix, employee_id) and _in_range(fix.get("date"), date_from, date_to)
    ))
