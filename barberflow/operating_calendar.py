# barberflow/operating_calendar.py

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Mapping, Optional

from sqlmodel import Session, select

from barberflow.core import WEEKDAYS, parse_time, weekday_name
from barberflow.directory import get_staff_profile
from barberflow.errors import InvalidSchedule
from barberflow.models import BarberLeave, OperatingDay, StaffMember

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaffWindow:
    """Bookable interval of one staff member on one date, in minutes."""

    start: int
    end: int
    lunch_start: int = 0
    lunch_end: int = 0


def validate_working_hours(work_start, work_end, lunch_start, lunch_end) -> None:
    """Check a staff profile's "HH:MM" fields; any of them may be None."""
    if (work_start is None) != (work_end is None):
        raise InvalidSchedule("work_start_time and work_end_time must be set together")
    if (lunch_start is None) != (lunch_end is None):
        raise InvalidSchedule("lunch_start_time and lunch_end_time must be set together")

    if work_start is not None and parse_time(work_start) > parse_time(work_end):
        raise InvalidSchedule("work_start_time cannot be after work_end_time")
    if lunch_start is not None and parse_time(lunch_start) > parse_time(lunch_end):
        raise InvalidSchedule("lunch_start_time cannot be after lunch_end_time")

    if work_start is not None and lunch_start is not None:
        if parse_time(lunch_start) < parse_time(work_start) or parse_time(lunch_end) > parse_time(work_end):
            # accepted, but the lunch only matters where it meets the work window
            logger.warning("Lunch %s-%s falls outside work hours %s-%s", lunch_start, lunch_end, work_start, work_end)


def _closed_day(name: str) -> OperatingDay:
    # not configured means not open; never added to the session
    return OperatingDay(weekday=name, is_open=False, open_time="00:00", close_time="00:00")


class OperatingCalendar:
    """When the shop is open and when each staff member works."""

    def __init__(self, session: Session):
        self.session = session

    # --- shop hours ---

    def get_operating_hours(self) -> Dict[str, OperatingDay]:
        days = self.session.exec(select(OperatingDay)).all()
        by_name = {d.weekday: d for d in days}
        return {name: by_name[name] if name in by_name else _closed_day(name) for name in WEEKDAYS}

    def set_operating_hours(self, hours: Mapping[str, Mapping]) -> Dict[str, OperatingDay]:
        missing = [name for name in WEEKDAYS if name not in hours]
        unknown = [name for name in hours if name not in WEEKDAYS]
        if missing or unknown:
            raise InvalidSchedule(f"Operating hours need exactly the seven weekdays (missing {missing}, unknown {unknown})")

        for name in WEEKDAYS:
            day = hours[name]
            open_minutes = parse_time(day["open_time"])
            close_minutes = parse_time(day["close_time"])
            if day["is_open"] and open_minutes >= close_minutes:
                raise InvalidSchedule(f"{name}: open_time must be before close_time")

        for name in WEEKDAYS:
            day = hours[name]
            row = self.session.get(OperatingDay, name)
            if row is None:
                row = OperatingDay(weekday=name, open_time=day["open_time"], close_time=day["close_time"])
            row.is_open = day["is_open"]
            row.open_time = day["open_time"]
            row.close_time = day["close_time"]
            self.session.add(row)

        self.session.commit()
        logger.info("Operating hours updated")
        return self.get_operating_hours()

    def get_operating_day(self, day: date) -> OperatingDay:
        name = weekday_name(day)
        row = self.session.get(OperatingDay, name)
        if row is None:
            return _closed_day(name)
        return row

    # --- staff hours ---

    def get_staff_window(self, staff_id: int, day: date) -> Optional[StaffWindow]:
        """The staff member's own hours on ``day``, or None on leave / no hours set."""
        staff = get_staff_profile(self.session, staff_id)
        if self.is_on_leave(staff_id, day):
            return None
        return self._profile_window(staff)

    def effective_window(self, staff_id: int, day: date) -> Optional[StaffWindow]:
        """Shop hours intersected with the staff member's hours, or None if empty."""
        staff_window = self.get_staff_window(staff_id, day)
        if staff_window is None:
            return None

        staff = get_staff_profile(self.session, staff_id)
        if staff.status != "active":
            return None

        shop = self.get_operating_day(day)
        if not shop.is_open:
            return None

        start = max(parse_time(shop.open_time), staff_window.start)
        end = min(parse_time(shop.close_time), staff_window.end)
        if start >= end:
            return None
        return StaffWindow(start, end, staff_window.lunch_start, staff_window.lunch_end)

    @staticmethod
    def _profile_window(staff: StaffMember) -> Optional[StaffWindow]:
        if not staff.work_start_time or not staff.work_end_time:
            return None
        lunch_start = lunch_end = 0
        if staff.lunch_start_time and staff.lunch_end_time:
            lunch_start = parse_time(staff.lunch_start_time)
            lunch_end = parse_time(staff.lunch_end_time)
        return StaffWindow(
            parse_time(staff.work_start_time),
            parse_time(staff.work_end_time),
            lunch_start,
            lunch_end,
        )

    # --- leaves ---

    def is_on_leave(self, staff_id: int, day: date) -> bool:
        return self._find_leave(staff_id, day) is not None

    def list_leaves(self, staff_id: Optional[int] = None) -> List[BarberLeave]:
        stmt = select(BarberLeave)
        if staff_id is not None:
            stmt = stmt.where(BarberLeave.staff_id == staff_id)
        return self.session.exec(stmt.order_by(BarberLeave.date, BarberLeave.staff_id)).all()

    def add_leave(self, staff_id: int, day: date) -> BarberLeave:
        get_staff_profile(self.session, staff_id)
        leave = self._find_leave(staff_id, day)
        if leave is not None:
            return leave

        leave = BarberLeave(staff_id=staff_id, date=day)
        self.session.add(leave)
        self.session.commit()
        self.session.refresh(leave)
        logger.info("Leave added for staff %s on %s", staff_id, day)
        return leave

    def remove_leave(self, staff_id: int, day: date) -> None:
        leave = self._find_leave(staff_id, day)
        if leave is None:
            return
        self.session.delete(leave)
        self.session.commit()
        logger.info("Leave removed for staff %s on %s", staff_id, day)

    def _find_leave(self, staff_id: int, day: date) -> Optional[BarberLeave]:
        return self.session.exec(
            select(BarberLeave)
            .where(BarberLeave.staff_id == staff_id)
            .where(BarberLeave.date == day)
        ).first()
