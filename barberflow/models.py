# barberflow/models.py

from typing import Optional
from datetime import date as Date

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    role: str  # admin, barber or client


class Client(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True)
    phone: str = ""
    status: str = "active"


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    price: float = 0
    duration: int  # minutes
    status: str = "active"


class StaffMember(SQLModel, table=True):
    __tablename__ = "staff_member"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: Optional[str] = Field(default=None, index=True)
    # "HH:MM"; a member with no working hours has no bookable time
    work_start_time: Optional[str] = None
    work_end_time: Optional[str] = None
    lunch_start_time: Optional[str] = None
    lunch_end_time: Optional[str] = None
    status: str = "active"


class OperatingDay(SQLModel, table=True):
    __tablename__ = "operating_day"

    weekday: str = Field(primary_key=True)  # "monday" ... "sunday"
    is_open: bool = True
    open_time: str
    close_time: str


class BarberLeave(SQLModel, table=True):
    __tablename__ = "barber_leave"
    __table_args__ = (
        UniqueConstraint("staff_id", "date", name="uq_leave_staff_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    staff_id: int = Field(index=True)
    date: Date = Field(index=True)


class Appointment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    client_id: int = Field(index=True)
    staff_id: int = Field(index=True)
    service_id: int
    date: Date = Field(index=True)
    start_time: str  # "HH:MM"
    # frozen at write time from the service duration
    end_time: str


class Transaction(SQLModel, table=True):
    __tablename__ = "ledger_transaction"

    id: str = Field(primary_key=True)  # "#APP001" or "#ORD001"
    date: Date
    name: str
    method: str
    type: str  # income or expense
    value: float
    appointment_id: Optional[int] = Field(default=None, index=True)
    payment_status: str = "pending"
    completed_by: Optional[str] = None
