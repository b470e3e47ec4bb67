"""Shop hours, staff hours, their intersection, and leaves."""

import pytest
from sqlmodel import Session

from barberflow.core import parse_time
from barberflow.data import DEFAULT_OPERATING_HOURS
from barberflow.errors import InvalidSchedule, InvalidTimeFormat, StaffNotFound
from barberflow.operating_calendar import OperatingCalendar, StaffWindow, validate_working_hours

from tests.conftest import MONDAY, SATURDAY, SUNDAY, TUESDAY


@pytest.fixture
def calendar(session):
    return OperatingCalendar(session)


def _hours(**overrides):
    hours = {name: dict(day) for name, day in DEFAULT_OPERATING_HOURS.items()}
    hours.update(overrides)
    return hours


class TestOperatingHours:
    def test_seeded_defaults(self, calendar):
        hours = calendar.get_operating_hours()
        assert list(hours) == ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
        assert hours["sunday"].is_open is False
        assert (hours["saturday"].open_time, hours["saturday"].close_time) == ("09:00", "17:00")

    def test_operating_day_resolves_weekday(self, calendar):
        assert calendar.get_operating_day(SUNDAY).is_open is False
        monday = calendar.get_operating_day(MONDAY)
        assert monday.is_open and monday.close_time == "19:00"

    def test_set_operating_hours_replaces_days(self, calendar):
        calendar.set_operating_hours(
            _hours(monday={"is_open": False, "open_time": "09:00", "close_time": "19:00"})
        )
        assert calendar.get_operating_day(MONDAY).is_open is False
        assert calendar.get_operating_day(TUESDAY).is_open is True

    def test_set_operating_hours_needs_all_seven_days(self, calendar):
        hours = _hours()
        del hours["friday"]
        with pytest.raises(InvalidSchedule):
            calendar.set_operating_hours(hours)

    def test_open_day_must_open_before_it_closes(self, calendar):
        with pytest.raises(InvalidSchedule):
            calendar.set_operating_hours(
                _hours(monday={"is_open": True, "open_time": "19:00", "close_time": "09:00"})
            )
        # nothing was written
        assert calendar.get_operating_day(MONDAY).open_time == "09:00"

    def test_malformed_time_is_rejected(self, calendar):
        with pytest.raises(InvalidTimeFormat):
            calendar.set_operating_hours(
                _hours(monday={"is_open": True, "open_time": "9:00", "close_time": "19:00"})
            )

    def test_unconfigured_weekdays_read_as_closed(self, engine):
        with Session(engine) as empty:
            hours = OperatingCalendar(empty).get_operating_hours()
        assert list(hours) == ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
        assert not any(day.is_open for day in hours.values())


class TestStaffWindow:
    def test_staff_window_from_profile(self, calendar, barber):
        window = calendar.get_staff_window(barber.id, MONDAY)
        assert window == StaffWindow(parse_time("09:00"), parse_time("19:00"), parse_time("12:00"), parse_time("13:00"))

    def test_unknown_staff(self, calendar):
        with pytest.raises(StaffNotFound):
            calendar.get_staff_window(999, MONDAY)

    def test_no_working_hours_means_no_window(self, calendar, session, barber):
        barber.work_start_time = None
        barber.work_end_time = None
        session.add(barber)
        session.commit()
        assert calendar.get_staff_window(barber.id, MONDAY) is None
        assert calendar.effective_window(barber.id, MONDAY) is None

    def test_missing_lunch_is_zero_length(self, calendar, session, barber):
        barber.lunch_start_time = None
        barber.lunch_end_time = None
        session.add(barber)
        session.commit()
        window = calendar.get_staff_window(barber.id, MONDAY)
        assert window.lunch_start == window.lunch_end == 0


class TestEffectiveWindow:
    def test_intersects_shop_and_staff_hours(self, calendar, session, barber):
        barber.work_start_time = "08:00"
        barber.work_end_time = "18:00"
        session.add(barber)
        session.commit()

        window = calendar.effective_window(barber.id, MONDAY)
        assert (window.start, window.end) == (parse_time("09:00"), parse_time("18:00"))

        # Saturday closes at 17:00
        window = calendar.effective_window(barber.id, SATURDAY)
        assert window.end == parse_time("17:00")

    def test_closed_shop_day(self, calendar, barber):
        assert calendar.effective_window(barber.id, SUNDAY) is None

    def test_empty_intersection(self, calendar, session, barber):
        barber.work_start_time = "19:00"
        barber.work_end_time = "22:00"
        session.add(barber)
        session.commit()
        assert calendar.effective_window(barber.id, MONDAY) is None

    def test_inactive_staff(self, calendar, session, barber):
        barber.status = "inactive"
        session.add(barber)
        session.commit()
        assert calendar.effective_window(barber.id, MONDAY) is None


class TestLeaves:
    def test_leave_closes_the_whole_day(self, calendar, barber):
        calendar.add_leave(barber.id, MONDAY)
        assert calendar.get_staff_window(barber.id, MONDAY) is None
        assert calendar.effective_window(barber.id, MONDAY) is None
        assert calendar.effective_window(barber.id, TUESDAY) is not None

    def test_add_leave_twice_keeps_one(self, calendar, barber):
        first = calendar.add_leave(barber.id, MONDAY)
        second = calendar.add_leave(barber.id, MONDAY)
        assert first.id == second.id
        assert len(calendar.list_leaves(barber.id)) == 1

    def test_remove_leave(self, calendar, barber):
        calendar.add_leave(barber.id, MONDAY)
        calendar.remove_leave(barber.id, MONDAY)
        assert calendar.list_leaves() == []
        assert calendar.effective_window(barber.id, MONDAY) is not None

    def test_removing_missing_leave_is_a_no_op(self, calendar, barber):
        calendar.remove_leave(barber.id, MONDAY)
        assert calendar.list_leaves() == []

    def test_leave_for_unknown_staff(self, calendar):
        with pytest.raises(StaffNotFound):
            calendar.add_leave(999, MONDAY)


class TestValidateWorkingHours:
    def test_accepts_a_normal_day(self):
        validate_working_hours("09:00", "19:00", "12:00", "13:00")

    def test_accepts_no_hours(self):
        validate_working_hours(None, None, None, None)

    def test_work_end_before_start(self):
        with pytest.raises(InvalidSchedule):
            validate_working_hours("19:00", "09:00", None, None)

    def test_lunch_end_before_start(self):
        with pytest.raises(InvalidSchedule):
            validate_working_hours("09:00", "19:00", "13:00", "12:00")

    def test_half_set_pair(self):
        with pytest.raises(InvalidSchedule):
            validate_working_hours("09:00", None, None, None)

    def test_lunch_outside_work_is_only_a_warning(self, caplog):
        validate_working_hours("09:00", "12:00", "13:00", "14:00")
        assert "outside work hours" in caplog.text
