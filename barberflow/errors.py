"""
Domain errors raised by the scheduling core.

Each error carries the HTTP status the API answers with; ``main.py``
turns them into ``{"detail": ...}`` responses.
"""


class SchedulingError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class SlotConflict(SchedulingError):
    """The requested interval overlaps an existing booking for that staff/date."""

    status_code = 409


class InvalidTimeFormat(SchedulingError):
    """A wall-clock time is not a well-formed ``HH:MM`` string."""

    status_code = 422

    def __init__(self, value):
        super().__init__(f"Invalid time {value!r}, expected HH:MM")
        self.value = value


class InvalidAppointment(SchedulingError):
    status_code = 422


class NotFound(SchedulingError):
    status_code = 404
    entity = "Record"

    def __init__(self, entity_id):
        super().__init__(f"{self.entity} {entity_id} not found")
        self.entity_id = entity_id


class ServiceNotFound(NotFound):
    entity = "Service"


class StaffNotFound(NotFound):
    entity = "Staff member"


class ClientNotFound(NotFound):
    entity = "Client"


class AppointmentNotFound(NotFound):
    entity = "Appointment"


class TransactionNotFound(NotFound):
    entity = "Transaction"


class InvalidSchedule(SchedulingError):
    """Operating hours or working hours that cannot describe a day."""

    status_code = 422
