"""
Slot calculation for one staff member, date and service.

Covers the shop/staff intersection, lunch exclusion, existing bookings,
the window boundary, and agreement with the repository's own overlap gate.
"""

import pytest

from barberflow.availability import AvailabilityCalculator, compute_slots
from barberflow.core import format_time, overlaps, parse_time
from barberflow.errors import ServiceNotFound, SlotConflict, StaffNotFound
from barberflow.models import Service
from barberflow.operating_calendar import OperatingCalendar, StaffWindow
from barberflow.repository import AppointmentRepository

from tests.conftest import MONDAY, SUNDAY


def _times(start, end, step=15):
    return [format_time(m) for m in range(parse_time(start), parse_time(end) + 1, step)]


@pytest.fixture
def calculator(session):
    return AvailabilityCalculator(session, step=15)


@pytest.fixture
def repo(session):
    return AppointmentRepository(session)


class TestComputeSlots:
    def test_whole_window_without_lunch_or_bookings(self):
        window = StaffWindow(parse_time("09:00"), parse_time("10:00"))
        assert compute_slots(window, 30, []) == ["09:00", "09:15", "09:30"]

    def test_slot_may_end_exactly_at_window_end(self):
        window = StaffWindow(parse_time("09:00"), parse_time("10:00"))
        assert compute_slots(window, 60, []) == ["09:00"]

    def test_slot_one_minute_past_window_end_is_excluded(self):
        window = StaffWindow(parse_time("09:00"), parse_time("10:00"))
        assert compute_slots(window, 61, []) == []

    def test_zero_length_lunch_excludes_nothing(self):
        window = StaffWindow(parse_time("11:00"), parse_time("13:00"), parse_time("12:00"), parse_time("12:00"))
        assert compute_slots(window, 30, []) == _times("11:00", "12:30")

    def test_zero_length_lunch_does_not_block_spanning_slot(self):
        window = StaffWindow(parse_time("11:30"), parse_time("12:30"), parse_time("12:00"), parse_time("12:00"))
        assert compute_slots(window, 60, []) == ["11:30"]

    def test_custom_step(self):
        window = StaffWindow(parse_time("09:00"), parse_time("10:00"))
        assert compute_slots(window, 30, [], step=30) == ["09:00", "09:30"]


class TestScenarios:
    def test_open_day_with_lunch_and_no_bookings(self, calculator, barber, haircut):
        slots = calculator.get_available_slots(barber.id, MONDAY, haircut.id)

        # 11:45 would run into lunch at 12:00
        assert slots == _times("09:00", "11:30") + _times("13:00", "18:30")
        assert slots[-1] == "18:30"
        assert "11:45" not in slots

    def test_existing_booking_blocks_overlapping_starts(self, calculator, repo, barber, client_record, haircut):
        repo.create(client_record.id, barber.id, haircut.id, MONDAY, "10:00")

        slots = calculator.get_available_slots(barber.id, MONDAY, haircut.id)

        for blocked in ("09:45", "10:00", "10:15"):
            assert blocked not in slots
        assert "09:30" in slots
        assert "10:30" in slots

    def test_closed_shop_day_has_no_slots(self, calculator, barber, haircut):
        assert calculator.get_available_slots(barber.id, SUNDAY, haircut.id) == []

    def test_leave_day_has_no_slots(self, session, calculator, barber, haircut):
        OperatingCalendar(session).add_leave(barber.id, MONDAY)
        assert calculator.get_available_slots(barber.id, MONDAY, haircut.id) == []

    def test_editing_does_not_conflict_with_its_own_slot(self, calculator, repo, barber, client_record, haircut):
        appt = repo.create(client_record.id, barber.id, haircut.id, MONDAY, "10:00")

        without = calculator.get_available_slots(barber.id, MONDAY, haircut.id)
        with_exclusion = calculator.get_available_slots(
            barber.id, MONDAY, haircut.id, exclude_appointment_id=appt.id
        )
        assert "10:00" not in without
        assert "10:00" in with_exclusion
        assert "10:15" in with_exclusion


class TestErrors:
    def test_unknown_service(self, calculator, barber):
        with pytest.raises(ServiceNotFound):
            calculator.get_available_slots(barber.id, MONDAY, 999)

    def test_unknown_staff(self, calculator, haircut):
        with pytest.raises(StaffNotFound):
            calculator.get_available_slots(999, MONDAY, haircut.id)

    def test_zero_duration_service_offers_nothing(self, session, calculator, barber):
        service = Service(name="Consultation", price=0, duration=0)
        session.add(service)
        session.commit()
        assert calculator.get_available_slots(barber.id, MONDAY, service.id) == []


class TestCalculatorAgreesWithRepository:
    @pytest.fixture
    def busy_day(self, repo, barber, client_record, haircut, session):
        long_service = Service(name="Haircut and beard", price=80, duration=60)
        session.add(long_service)
        session.commit()
        repo.create(client_record.id, barber.id, haircut.id, MONDAY, "09:30")
        repo.create(client_record.id, barber.id, long_service.id, MONDAY, "14:10")
        repo.create(client_record.id, barber.id, haircut.id, MONDAY, "17:45")
        return long_service

    def test_every_offered_slot_can_be_booked(self, session, calculator, repo, barber, client_record, haircut, busy_day):
        slots = calculator.get_available_slots(barber.id, MONDAY, haircut.id)
        assert slots

        for slot in slots:
            appt = repo.create(client_record.id, barber.id, haircut.id, MONDAY, slot)
            repo.cancel(appt.id)

    def test_every_free_step_is_offered(self, calculator, repo, barber, haircut, busy_day):
        slots = set(calculator.get_available_slots(barber.id, MONDAY, haircut.id))
        busy = [(parse_time(a.start_time), parse_time(a.end_time)) for a in repo.list_for_staff_on_date(barber.id, MONDAY)]

        for start in range(parse_time("09:00"), parse_time("18:30") + 1, 15):
            end = start + haircut.duration
            in_lunch = start < parse_time("13:00") and end > parse_time("12:00")
            taken = any(overlaps(start, end, b_start, b_end) for b_start, b_end in busy)
            assert (format_time(start) in slots) == (not in_lunch and not taken)

    def test_slots_not_offered_conflict_with_a_booking(self, calculator, repo, barber, client_record, haircut, busy_day):
        slots = set(calculator.get_available_slots(barber.id, MONDAY, haircut.id))
        assert "09:30" not in slots
        with pytest.raises(SlotConflict):
            repo.create(client_record.id, barber.id, haircut.id, MONDAY, "09:30")
