# barberflow/data.py
#
# Shop defaults written on first start.

import logging

from sqlmodel import Session, select

from barberflow.models import OperatingDay, Service

logger = logging.getLogger(__name__)

DEFAULT_OPERATING_HOURS = {
    "sunday": {"is_open": False, "open_time": "09:00", "close_time": "18:00"},
    "monday": {"is_open": True, "open_time": "09:00", "close_time": "19:00"},
    "tuesday": {"is_open": True, "open_time": "09:00", "close_time": "19:00"},
    "wednesday": {"is_open": True, "open_time": "09:00", "close_time": "19:00"},
    "thursday": {"is_open": True, "open_time": "09:00", "close_time": "19:00"},
    "friday": {"is_open": True, "open_time": "09:00", "close_time": "19:00"},
    "saturday": {"is_open": True, "open_time": "09:00", "close_time": "17:00"},
}

# name, price, duration in minutes
DEFAULT_SERVICES = [
    ("Beard", 70, 40),
    ("Haircut", 50, 40),
    ("Haircut and beard", 80, 60),
    ("Buzz cut", 50, 30),
    ("Kids haircut", 70, 40),
    ("Line up", 30, 10),
]


def seed_defaults(session: Session) -> None:
    """Insert operating hours and the service catalog if the tables are empty."""
    if session.exec(select(OperatingDay)).first() is None:
        for weekday, hours in DEFAULT_OPERATING_HOURS.items():
            session.add(OperatingDay(weekday=weekday, **hours))
        logger.info("Seeded default operating hours")

    if session.exec(select(Service)).first() is None:
        for name, price, duration in DEFAULT_SERVICES:
            session.add(Service(name=name, price=price, duration=duration))
        logger.info("Seeded %d default services", len(DEFAULT_SERVICES))

    session.commit()
