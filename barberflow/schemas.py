# barberflow/schemas.py

from pydantic import BaseModel, Field
from enum import Enum
from datetime import date as Date
from typing import List, Optional

# zero-padded 24h wall clock, e.g. "09:15"
HHMM = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRole(str, Enum):
    admin = "admin"
    barber = "barber"
    client = "client"


class Status(str, Enum):
    active = "active"
    inactive = "inactive"


class UserPublic(BaseModel):
    id: int
    email: str
    role: UserRole


class UserCreate(BaseModel):
    email: str
    password: str = Field(min_length=8, max_length=72)
    role: UserRole


# --- catalog / team / clients ---

class ServiceCreate(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    duration: int = Field(gt=0)
    status: Status = Status.active


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, gt=0)
    status: Optional[Status] = None


class ServicePublic(BaseModel):
    id: int
    name: str
    price: float
    duration: int
    status: Status


class StaffCreate(BaseModel):
    name: str = Field(min_length=1)
    email: Optional[str] = None
    work_start_time: Optional[str] = Field(default=None, pattern=HHMM)
    work_end_time: Optional[str] = Field(default=None, pattern=HHMM)
    lunch_start_time: Optional[str] = Field(default=None, pattern=HHMM)
    lunch_end_time: Optional[str] = Field(default=None, pattern=HHMM)
    status: Status = Status.active


class StaffUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    work_start_time: Optional[str] = Field(default=None, pattern=HHMM)
    work_end_time: Optional[str] = Field(default=None, pattern=HHMM)
    lunch_start_time: Optional[str] = Field(default=None, pattern=HHMM)
    lunch_end_time: Optional[str] = Field(default=None, pattern=HHMM)
    status: Optional[Status] = None


class StaffPublic(BaseModel):
    id: int
    name: str
    email: Optional[str]
    work_start_time: Optional[str]
    work_end_time: Optional[str]
    lunch_start_time: Optional[str]
    lunch_end_time: Optional[str]
    status: Status


class ClientCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str
    phone: str = ""


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[Status] = None


class ClientPublic(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    status: Status


# --- settings ---

class OperatingDayIn(BaseModel):
    is_open: bool
    open_time: str = Field(pattern=HHMM)
    close_time: str = Field(pattern=HHMM)


class OperatingHours(BaseModel):
    sunday: OperatingDayIn
    monday: OperatingDayIn
    tuesday: OperatingDayIn
    wednesday: OperatingDayIn
    thursday: OperatingDayIn
    friday: OperatingDayIn
    saturday: OperatingDayIn


class LeaveCreate(BaseModel):
    date: Date


class LeavePublic(BaseModel):
    staff_id: int
    date: Date


# --- appointments ---

class AppointmentCreate(BaseModel):
    # clients booking for themselves may leave this out
    client_id: Optional[int] = None
    staff_id: int
    service_id: int
    date: Date
    start_time: str = Field(pattern=HHMM)


class AppointmentUpdate(BaseModel):
    client_id: Optional[int] = None
    staff_id: Optional[int] = None
    service_id: Optional[int] = None
    date: Optional[Date] = None
    start_time: Optional[str] = Field(default=None, pattern=HHMM)


class AppointmentPublic(BaseModel):
    id: int
    client_id: int
    staff_id: int
    service_id: int
    date: Date
    start_time: str
    end_time: str


class AvailabilityResponse(BaseModel):
    staff_id: int
    date: Date
    service_id: int
    available_starts: List[str]


# --- ledger ---

class TransactionType(str, Enum):
    income = "income"
    expense = "expense"


class TransactionCreate(BaseModel):
    name: str = Field(min_length=1)
    method: str
    type: TransactionType
    value: float = Field(gt=0)
    date: Optional[Date] = None


class PaymentConfirm(BaseModel):
    method: str = Field(min_length=1)


class TransactionPublic(BaseModel):
    id: str
    date: Date
    name: str
    method: str
    type: TransactionType
    value: float
    appointment_id: Optional[int]
    payment_status: str
    completed_by: Optional[str]
