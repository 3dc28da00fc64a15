from datetime import date

from models.schema import DayExceptions, EmployeeRef, Provenance, ShiftSchedule, SlotValue

TODAY = date(2025, 8, 22)
MONDAY = "2025-08-18"
SATURDAY = "2025-08-16"
EMPLOYEE = EmployeeRef(employee_id="1", user_id="123456")


def standard_schedule(**overrides) -> ShiftSchedule:
    data = {
        "shift_name": "Regular 8-5",
        "am_in": {"nominal_time": "08:00"},
        "am_out": {"nominal_time": "12:00"},
        "pm_in": {"nominal_time": "13:00"},
        "pm_out": {"nominal_time": "17:00"},
        "credits": {"am": 0.5, "pm": 0.5, "ampm": 0.0},
    }
    data.update(overrides)
    return ShiftSchedule(**data)


def ampm_schedule(ampm_credit: float = 1.0) -> ShiftSchedule:
    return ShiftSchedule(
        shift_name="Straight 8-5",
        am_in={"nominal_time": "08:00"},
        pm_out={"nominal_time": "17:00"},
        assigned_shifts=[{"shift_mode": "AMPM", "credits": ampm_credit}],
    )


def day_exceptions(day: str = MONDAY, **kwargs) -> DayExceptions:
    return DayExceptions(date=day, **kwargs)


def raw(minutes: int) -> SlotValue:
    return SlotValue.of(minutes, Provenance.RAW)
