import logging
from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, Field

from utils.timeparse import extract_date, extract_minutes, extract_month_day, minutes_to_hhmm


class Status(str, Enum):
    FOR_APPROVAL = "ForApproval"
    APPROVED = "Approved"
    RETURNED = "Returned"
    CANCELLED = "Cancelled"


class Slot(str, Enum):
    AM_IN = "am_in"
    AM_OUT = "am_out"
    PM_IN = "pm_in"
    PM_OUT = "pm_out"


SLOT_ORDER = (Slot.AM_IN, Slot.AM_OUT, Slot.PM_IN, Slot.PM_OUT)
CHECK_IN_SLOTS = (Slot.AM_IN, Slot.PM_IN)


class Provenance(str, Enum):
    RAW = "raw"
    LOCATOR = "locator"
    FIXLOG = "fixlog"


class ShiftMode(str, Enum):
    STANDARD = "STANDARD"
    AMPM = "AMPM"


class RemarkType(str, Enum):
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    LOCATOR = "locator"
    LEAVE = "leave"
    TRAVEL = "travel"
    CDO = "cdo"
    ABSENT = "absent"
    ACTION = "action"


_STATUS_ALIASES = {
    "pending": Status.FOR_APPROVAL,
    "for approval": Status.FOR_APPROVAL,
    "forapproval": Status.FOR_APPROVAL,
    "for_approval": Status.FOR_APPROVAL,
    "approved": Status.APPROVED,
    "returned": Status.RETURNED,
    "cancelled": Status.CANCELLED,
    "canceled": Status.CANCELLED,
}


def normalize_status(value: Any) -> Status:
    if isinstance(value, Status):
        return value
    if value is None:
        return Status.FOR_APPROVAL
    text = str(value).strip().lower()
    if not text:
        return Status.FOR_APPROVAL
    status = _STATUS_ALIASES.get(text)
    if status is None:
        logging.warning(f"Unknown status '{value}' normalized to {Status.FOR_APPROVAL.value}")
        return Status.FOR_APPROVAL
    return status


def _date_or_none(value: Any) -> Optional[str]:
    parsed = extract_date(value)
    if parsed is None and value not in (None, ""):
        logging.warning(f"Skipping malformed date value: {value!r}")
    return parsed


def _minutes_or_none(value: Any) -> Optional[int]:
    parsed = extract_minutes(value)
    if parsed is None and value not in (None, "", "-"):
        logging.warning(f"Skipping malformed time value: {value!r}")
    return parsed


def _month_day_or_none(value: Any) -> Optional[str]:
    if value in (None, ""):
        return None
    parsed = extract_month_day(value)
    if parsed is None:
        logging.warning(f"Skipping malformed month/day value: {value!r}")
    return parsed


def _date_list(value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple, set)):
        items = value.split(",") if isinstance(value, str) else [value]
    else:
        items = list(value)
    dates = []
    for item in items:
        parsed = _date_or_none(item.strip() if isinstance(item, str) else item)
        if parsed and parsed not in dates:
            dates.append(parsed)
    return dates


def _ident_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def _ident_list(value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple, set)):
        value = [value]
    idents = []
    for item in value:
        ident = _ident_or_none(item)
        if ident and ident not in idents:
            idents.append(ident)
    return idents


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if value is None:
        return False
    return str(value).strip().lower() in ("1", "true", "yes", "y")


def _number_or_none(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logging.warning(f"Skipping malformed number value: {value!r}")
        return None


def _label(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _holiday_name(value: Any) -> str:
    return _label(value) or "Holiday"


def _credit(value: Any) -> float:
    parsed = _number_or_none(value)
    return parsed if parsed is not None else 0.0


DateStr = Annotated[Optional[str], BeforeValidator(_date_or_none)]
Minutes = Annotated[Optional[int], BeforeValidator(_minutes_or_none)]
MonthDay = Annotated[Optional[str], BeforeValidator(_month_day_or_none)]
DateList = Annotated[List[str], BeforeValidator(_date_list)]
Ident = Annotated[Optional[str], BeforeValidator(_ident_or_none)]
IdentList = Annotated[List[str], BeforeValidator(_ident_list)]
Flag = Annotated[bool, BeforeValidator(_flag)]
Number = Annotated[Optional[float], BeforeValidator(_number_or_none)]
StatusField = Annotated[Status, BeforeValidator(normalize_status)]
Text = Annotated[Optional[str], BeforeValidator(_ident_or_none)]
Label = Annotated[str, BeforeValidator(_label)]
HolidayName = Annotated[str, BeforeValidator(_holiday_name)]
Credit = Annotated[float, BeforeValidator(_credit)]


# --- Inputs ---

class EmployeeRef(BaseModel):
    employee_id: Ident = None
    user_id: Ident = None


class SlotDefinition(BaseModel):
    nominal_time: Minutes = None
    window_start: Minutes = None
    window_end: Minutes = None


class AssignedShift(BaseModel):
    shift_mode: Label = ""
    credits: Number = None


class ShiftCredits(BaseModel):
    am: Credit = 0.0
    pm: Credit = 0.0
    ampm: Credit = 0.0


class ShiftSchedule(BaseModel):
    shift_name: Text = None
    am_in: Optional[SlotDefinition] = None
    am_out: Optional[SlotDefinition] = None
    pm_in: Optional[SlotDefinition] = None
    pm_out: Optional[SlotDefinition] = None
    assigned_shifts: List[AssignedShift] = []
    credits: Optional[ShiftCredits] = None

    def slot(self, slot: Slot) -> Optional[SlotDefinition]:
        return getattr(self, slot.value)

    def assigned_modes(self) -> List[str]:
        return [a.shift_mode.strip().upper() for a in self.assigned_shifts if a.shift_mode]

    def credit_table(self) -> ShiftCredits:
        if self.credits is not None:
            return self.credits
        found: Dict[str, float] = {}
        for assigned in self.assigned_shifts:
            mode = assigned.shift_mode.strip().upper()
            if mode in ("AM", "PM", "AMPM") and mode not in found:
                found[mode] = assigned.credits or 0.0
        return ShiftCredits(am=found.get("AM", 0.0), pm=found.get("PM", 0.0), ampm=found.get("AMPM", 0.0))


class RawPunch(BaseModel):
    employee_id: Ident = None
    timestamp: Union[str, datetime, None] = None


class LocatorRecord(BaseModel):
    ref_no: Ident = None
    date: DateStr = None
    departure_time: Minutes = None
    arrival_time: Minutes = None
    status: StatusField = Status.FOR_APPROVAL


class LeaveRecord(BaseModel):
    ref_no: Ident = None
    leave_type: Text = None
    dates: DateList = []
    employee_id: Ident = None
    user_id: Ident = None
    status: StatusField = Status.FOR_APPROVAL


class TravelRecord(BaseModel):
    ref_no: Ident = None
    dates: DateList = []
    participant_ids: IdentList = []
    participant_user_ids: IdentList = []
    status: StatusField = Status.FOR_APPROVAL


class HolidayRecord(BaseModel):
    name: HolidayName = "Holiday"
    category: Text = None
    date: DateStr = None
    month_day: MonthDay = None
    is_recurring: Flag = False


class CdoUsageEntry(BaseModel):
    ref_no: Ident = None
    entry_id: Ident = None
    date: DateStr = None
    status: StatusField = Status.FOR_APPROVAL

    @property
    def display_ref(self) -> str:
        if self.ref_no:
            return self.ref_no
        if self.entry_id:
            return f"CDO-{self.entry_id}"
        return "CDO"


class FixLogRecord(BaseModel):
    ref_no: Ident = None
    date: DateStr = None
    status: StatusField = Status.FOR_APPROVAL
    am_in: Minutes = None
    am_out: Minutes = None
    pm_in: Minutes = None
    pm_out: Minutes = None
    approver_name: Text = None

    def override(self, slot: Slot) -> Optional[int]:
        return getattr(self, slot.value)


class ExceptionBundle(BaseModel):
    locators: List[LocatorRecord] = []
    leaves: List[LeaveRecord] = []
    travels: List[TravelRecord] = []
    holidays: List[HolidayRecord] = []
    cdo_entries: List[CdoUsageEntry] = []
    fix_logs: List[FixLogRecord] = []


# --- Derived ---

class ActiveColumns(BaseModel):
    am_in: bool = False
    am_out: bool = False
    pm_in: bool = False
    pm_out: bool = False

    def is_active(self, slot: Slot) -> bool:
        return getattr(self, slot.value)

    def count(self) -> int:
        return sum(1 for slot in SLOT_ORDER if self.is_active(slot))


class SlotWindow(BaseModel):
    start: Optional[int] = None
    end: Optional[int] = None

    def contains(self, minutes: int) -> bool:
        if self.start is None or self.end is None:
            return False
        return self.start <= minutes <= self.end


class ResolvedShift(BaseModel):
    columns: ActiveColumns
    windows: Dict[Slot, SlotWindow]
    nominal: Dict[Slot, Optional[int]]
    mode: ShiftMode
    credits: ShiftCredits
    shift_name: Text = None


class LocatorWindow(BaseModel):
    start: int
    end: int
    ref_no: Optional[str] = None

    def contains(self, minutes: int) -> bool:
        return self.start <= minutes <= self.end


class DayExceptions(BaseModel):
    date: str
    locator_windows: List[LocatorWindow] = []
    locators_filed: List[LocatorRecord] = []
    leaves: List[LeaveRecord] = []
    travels: List[TravelRecord] = []
    holidays: List[HolidayRecord] = []
    holiday_display: Optional[str] = None
    cdo_entries: List[CdoUsageEntry] = []
    fix_log: Optional[FixLogRecord] = None
    fix_logs_filed: List[FixLogRecord] = []

    @property
    def has_leave(self) -> bool:
        return bool(self.leaves)

    @property
    def has_travel(self) -> bool:
        return bool(self.travels)

    @property
    def is_holiday(self) -> bool:
        return bool(self.holidays)

    @property
    def has_cdo(self) -> bool:
        return bool(self.cdo_entries)

    @property
    def has_locator(self) -> bool:
        return any(loc.status == Status.APPROVED for loc in self.locators_filed)

    @property
    def leave_refs(self) -> List[str]:
        return [leave.ref_no or "N/A" for leave in self.leaves]

    @property
    def travel_refs(self) -> List[str]:
        return [travel.ref_no or "N/A" for travel in self.travels]


# --- Outputs ---

class SlotValue(BaseModel):
    time: str
    minutes: int
    provenance: Provenance

    @classmethod
    def of(cls, minutes: int, provenance: Provenance) -> "SlotValue":
        return cls(time=minutes_to_hhmm(minutes), minutes=minutes, provenance=provenance)


class DaySlots(BaseModel):
    am_in: Optional[SlotValue] = None
    am_out: Optional[SlotValue] = None
    pm_in: Optional[SlotValue] = None
    pm_out: Optional[SlotValue] = None

    def get(self, slot: Slot) -> Optional[SlotValue]:
        return getattr(self, slot.value)

    def filled_count(self) -> int:
        return sum(1 for slot in SLOT_ORDER if self.get(slot) is not None)


class RemarkEntry(BaseModel):
    type: RemarkType
    text: str
    reference: Optional[str] = None


class DayFlags(BaseModel):
    is_weekend: bool = False
    is_holiday: bool = False
    has_leave: bool = False
    has_travel: bool = False
    has_locator: bool = False
    has_cdo: bool = False
    is_absent: bool = False


class DayResult(BaseModel):
    date: str
    slots: DaySlots
    late_minutes: int = 0
    day_credit: float = 0.0
    remarks: List[RemarkEntry] = []
    flags: DayFlags
    holiday_display: Optional[str] = None
    fix_log: Optional[FixLogRecord] = None


class AttendanceSummary(BaseModel):
    days_processed: int
    total_late_minutes: int
    total_days: float
    lates_in_days: float
    net_days: float
    absences: int


# --- Service payloads ---

class ReconcileRequest(ExceptionBundle):
    employee: EmployeeRef
    schedule: Optional[ShiftSchedule] = None
    punches: List[RawPunch] = []
    date_from: str
    date_to: str
    today: Optional[date] = None
    data_version: Optional[str] = None


class ReconcileResponse(BaseModel):
    employee_id: Optional[str] = None
    days: List[DayResult] = Field(default_factory=list)
    summary: AttendanceSummary
