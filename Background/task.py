from datetime import date
from typing import Dict, Optional
import logging

from fastapi import BackgroundTasks, FastAPI, HTTPException

from main import reconcile_employee, reconcile_range, summarize_period
from models.schema import ReconcileRequest, ReconcileResponse
from reconcile.errors import ShiftScheduleNotAssigned
from utils.config import configure_logging
from utils.helper import get_employee, mock_employees
from utils.timeparse import extract_date

configure_logging()
app = FastAPI(title="DTR reconciliation")


def _require_date(value: str, name: str) -> str:
    parsed = extract_date(value)
    if parsed is None:
        raise HTTPException(status_code=422, detail=f"Invalid {name}: {value}")
    return parsed


@app.post("/reconcile", response_model=ReconcileResponse)
def reconcile(request: ReconcileRequest):
    date_from = _require_date(request.date_from, "date_from")
    date_to = _require_date(request.date_to, "date_to")
    try:
        days = reconcile_range(
            request.employee,
            request.schedule,
            request.punches,
            request,
            date_from,
            date_to,
            today=request.today,
            data_version=request.data_version,
        )
    except ShiftScheduleNotAssigned:
        raise HTTPException(status_code=404, detail="No shift schedule assigned")
    return ReconcileResponse(employee_id=request.employee.employee_id, days=days, summary=summarize_period(days))


@app.get("/employees/{employee_id}/dtr", response_model=ReconcileResponse)
def employee_dtr(employee_id: str, date_from: str, date_to: str, today: Optional[date] = None):
    employee = get_employee(employee_id)
    if employee is None:
        raise HTTPException(status_code=404, detail="Unknown employee")
    date_from = _require_date(date_from, "date_from")
    date_to = _require_date(date_to, "date_to")
    try:
        days = reconcile_employee(employee_id, date_from, date_to, today=today, user_id=employee.get("user_id"))
    except ShiftScheduleNotAssigned:
        raise HTTPException(status_code=404, detail="No shift schedule assigned")
    return ReconcileResponse(employee_id=employee_id, days=days, summary=summarize_period(days))


@app.post("/summaries")
def queue_period_summary(date_from: str, date_to: str, background_tasks: BackgroundTasks):
    date_from = _require_date(date_from, "date_from")
    date_to = _require_date(date_to, "date_to")
    background_tasks.add_task(run_period_summary, date_from, date_to)
    return {"status": "Period summary queued, processing in background."}


def run_period_summary(date_from: str, date_to: str, today: Optional[date] = None) -> Dict[str, dict]:
    logging.info(f"Running period summary for all employees from {date_from} to {date_to}")
    summaries = {}
    for emp in mock_employees:
        if not emp["is_active"]:
            continue
        try:
            days = reconcile_employee(emp["employee_id"], date_from, date_to, today=today, user_id=emp.get("user_id"))
        except ShiftScheduleNotAssigned:
            logging.warning(f"Skipping employee_id: {emp['employee_id']} without a shift schedule")
            continue
        summary = summarize_period(days)
        summaries[emp["employee_id"]] = summary.model_dump()
        logging.info(f"employee_id: {emp['employee_id']} days={summary.total_days} "
                     f"lates={summary.total_late_minutes} net={summary.net_days}")
    logging.info("Period summary completed.")
    return summaries
