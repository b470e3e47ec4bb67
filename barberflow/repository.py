# barberflow/repository.py

import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Dict, Hashable, List, Mapping, Optional, Tuple

from sqlmodel import Session, select

from barberflow.core import add_minutes, format_time, overlaps, parse_time
from barberflow.directory import get_client, get_service, get_staff_profile
from barberflow.errors import AppointmentNotFound, InvalidAppointment, SlotConflict
from barberflow.models import Appointment, Service

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = ("client_id", "staff_id", "service_id", "date", "start_time")


class KeyedLocks:
    """One lock per key, so bookings for different staff/days never wait on each other."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[Hashable, threading.Lock] = {}

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, *keys):
        # sorted so two holders of the same pair cannot deadlock
        ordered = sorted(set(keys), key=repr)
        locks = [self._lock_for(k) for k in ordered]
        for lock in locks:
            lock.acquire()
        try:
            yield
        finally:
            for lock in reversed(locks):
                lock.release()


# shared by every repository instance in the process
booking_locks = KeyedLocks()


class AppointmentRepository:
    """The store of appointments. Writes keep each staff member's day free of overlaps."""

    def __init__(self, session: Session, locks: KeyedLocks = booking_locks):
        self.session = session
        self.locks = locks

    # --- reads ---

    def get(self, appointment_id: int) -> Appointment:
        appt = self.session.get(Appointment, appointment_id)
        if appt is None:
            raise AppointmentNotFound(appointment_id)
        return appt

    def list_for_staff_on_date(self, staff_id: int, day: date) -> List[Appointment]:
        return self.session.exec(
            select(Appointment)
            .where(Appointment.staff_id == staff_id)
            .where(Appointment.date == day)
            .order_by(Appointment.start_time)
            # rows committed by other sessions win over cached instances
            .execution_options(populate_existing=True)
        ).all()

    def list_appointments(
        self,
        staff_id: Optional[int] = None,
        day: Optional[date] = None,
        client_id: Optional[int] = None,
    ) -> List[Appointment]:
        stmt = select(Appointment)
        if staff_id is not None:
            stmt = stmt.where(Appointment.staff_id == staff_id)
        if day is not None:
            stmt = stmt.where(Appointment.date == day)
        if client_id is not None:
            stmt = stmt.where(Appointment.client_id == client_id)
        stmt = stmt.order_by(Appointment.date, Appointment.start_time, Appointment.staff_id)
        return self.session.exec(stmt).all()

    # --- writes ---

    def create(self, client_id: int, staff_id: int, service_id: int, day: date, start_time: str) -> Appointment:
        start = parse_time(start_time)
        service = get_service(self.session, service_id)
        get_staff_profile(self.session, staff_id)
        get_client(self.session, client_id)
        end = self._end_minutes(start, service)

        with self.locks.hold((staff_id, day)):
            self._ensure_free(staff_id, day, start, end)

            appt = Appointment(
                client_id=client_id,
                staff_id=staff_id,
                service_id=service_id,
                date=day,
                start_time=format_time(start),
                end_time=format_time(end),
            )
            self.session.add(appt)
            self.session.commit()
            self.session.refresh(appt)

        logger.info(
            "Appointment %s booked: staff %s on %s %s-%s",
            appt.id, staff_id, day, appt.start_time, appt.end_time,
        )
        return appt

    def update(self, appointment_id: int, patch: Mapping) -> Appointment:
        patch = {k: v for k, v in patch.items() if k in PATCHABLE_FIELDS and v is not None}

        while True:
            appt = self.get(appointment_id)
            old_key = (appt.staff_id, appt.date)
            new_key = (patch.get("staff_id", appt.staff_id), patch.get("date", appt.date))

            with self.locks.hold(old_key, new_key):
                # re-read under the lock; another writer may have moved it meanwhile
                self.session.expire(appt)
                appt = self.get(appointment_id)
                if (appt.staff_id, appt.date) != old_key:
                    continue

                merged = {field: getattr(appt, field) for field in PATCHABLE_FIELDS}
                merged.update(patch)

                start = parse_time(merged["start_time"])
                service = get_service(self.session, merged["service_id"])
                get_staff_profile(self.session, merged["staff_id"])
                get_client(self.session, merged["client_id"])
                end = self._end_minutes(start, service)

                self._ensure_free(merged["staff_id"], merged["date"], start, end, ignore_id=appointment_id)

                # every field is set before the single commit
                appt.client_id = merged["client_id"]
                appt.staff_id = merged["staff_id"]
                appt.service_id = merged["service_id"]
                appt.date = merged["date"]
                appt.start_time = format_time(start)
                appt.end_time = format_time(end)
                self.session.add(appt)
                self.session.commit()
                self.session.refresh(appt)
                break

        logger.info(
            "Appointment %s moved to staff %s on %s %s-%s",
            appt.id, appt.staff_id, appt.date, appt.start_time, appt.end_time,
        )
        return appt

    def cancel(self, appointment_id: int) -> None:
        appt = self.get(appointment_id)
        with self.locks.hold((appt.staff_id, appt.date)):
            self.session.delete(appt)
            self.session.commit()
        logger.info("Appointment %s cancelled", appointment_id)

    # --- helpers ---

    @staticmethod
    def _end_minutes(start: int, service: Service) -> int:
        if service.duration <= 0:
            raise InvalidAppointment(f"Service {service.id} has no duration")
        try:
            return add_minutes(start, service.duration)
        except ValueError:
            raise InvalidAppointment(
                f"A {service.duration} minute service starting at {format_time(start)} runs past midnight"
            )

    def _ensure_free(self, staff_id: int, day: date, start: int, end: int, ignore_id: Optional[int] = None) -> None:
        for other_id, other_start, other_end in self._busy(staff_id, day, ignore_id):
            if overlaps(start, end, other_start, other_end):
                logger.warning(
                    "Slot %s-%s for staff %s on %s collides with appointment %s",
                    format_time(start), format_time(end), staff_id, day, other_id,
                )
                raise SlotConflict(
                    f"{format_time(start)}-{format_time(end)} overlaps appointment {other_id} "
                    f"({format_time(other_start)}-{format_time(other_end)})"
                )

    def _busy(self, staff_id: int, day: date, ignore_id: Optional[int]) -> List[Tuple[int, int, int]]:
        return [
            (a.id, parse_time(a.start_time), parse_time(a.end_time))
            for a in self.list_for_staff_on_date(staff_id, day)
            if a.id != ignore_id
        ]
