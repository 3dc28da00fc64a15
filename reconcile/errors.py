class ReconcileError(Exception):
    pass


class ShiftScheduleNotAssigned(ReconcileError):
    def __init__(self, employee_id=None):
        self.employee_id = employee_id
        super().__init__(f"No shift schedule assigned for employee_id: {employee_id}")
