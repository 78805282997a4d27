# ============================================================================
# salon_booking/services/appointment/errors.py
# ============================================================================


class AppointmentNotFoundError(LookupError):
    pass


class AppointmentPermissionError(PermissionError):
    pass


class IllegalTransitionError(ValueError):
    """Status change the appointment state machine does not allow"""

    def __init__(self, current_status: str, new_status: str, detail: str = ""):
        self.current_status = current_status
        self.new_status = new_status
        message = f"Cannot change appointment from '{current_status}' to '{new_status}'"
        super().__init__(f"{message}: {detail}" if detail else message)
