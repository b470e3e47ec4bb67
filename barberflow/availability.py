"""
Bookable start times for one staff member, one date and one service.

``compute_slots`` is the pure scan; ``AvailabilityCalculator`` gathers its
inputs (effective window, service duration, existing bookings) from the
database.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional, Tuple

from sqlmodel import Session

from barberflow.config import settings
from barberflow.core import format_time, overlaps, parse_time
from barberflow.directory import get_service
from barberflow.models import Appointment
from barberflow.operating_calendar import OperatingCalendar, StaffWindow
from barberflow.repository import AppointmentRepository

logger = logging.getLogger(__name__)


def compute_slots(
    window: StaffWindow,
    duration: int,
    busy: Iterable[Tuple[int, int]],
    step: int = 15,
) -> List[str]:
    """Scan ``window`` in ``step`` minute increments for free ``duration`` slots.

    A candidate ``[t, t + duration)`` is kept when it ends inside the window,
    misses the lunch break and overlaps none of the ``busy`` intervals.
    Results come out in ascending order.
    """
    busy = list(busy)
    slots = []
    slot_start = window.start
    while slot_start <= window.end - duration:
        slot_end = slot_start + duration

        # an empty lunch (start == end) blocks nothing
        in_lunch = (
            window.lunch_start < window.lunch_end
            and slot_start < window.lunch_end
            and slot_end > window.lunch_start
        )
        if not in_lunch and not any(overlaps(slot_start, slot_end, b_start, b_end) for b_start, b_end in busy):
            slots.append(format_time(slot_start))

        slot_start += step
    return slots


def busy_intervals(appointments: Iterable[Appointment]) -> List[Tuple[int, int]]:
    return [(parse_time(a.start_time), parse_time(a.end_time)) for a in appointments]


class AvailabilityCalculator:
    def __init__(self, session: Session, calendar: Optional[OperatingCalendar] = None, step: Optional[int] = None):
        self.session = session
        self.calendar = calendar or OperatingCalendar(session)
        self.appointments = AppointmentRepository(session)
        self.step = step or settings.SLOT_MINUTES

    def get_available_slots(
        self,
        staff_id: int,
        day: date,
        service_id: int,
        exclude_appointment_id: Optional[int] = None,
    ) -> List[str]:
        service = get_service(self.session, service_id)
        if service.duration <= 0:
            return []

        window = self.calendar.effective_window(staff_id, day)
        if window is None:
            logger.debug("No bookable window for staff %s on %s", staff_id, day)
            return []

        # an appointment being edited must not block its own slot
        existing = [
            a for a in self.appointments.list_for_staff_on_date(staff_id, day)
            if a.id != exclude_appointment_id
        ]
        return compute_slots(window, service.duration, busy_intervals(existing), self.step)
