# barberflow/routers/settings_routes.py

from fastapi import APIRouter, Depends

from barberflow.deps import get_calendar, require_admin
from barberflow.operating_calendar import OperatingCalendar
from barberflow.schemas import OperatingHours

router = APIRouter(
    prefix="/settings",
    tags=["settings"],
)


def _as_payload(days) -> dict:
    return {
        name: {"is_open": d.is_open, "open_time": d.open_time, "close_time": d.close_time}
        for name, d in days.items()
    }


@router.get("/operating-hours", response_model=OperatingHours)
def get_operating_hours(calendar: OperatingCalendar = Depends(get_calendar)):
    return _as_payload(calendar.get_operating_hours())


@router.put("/operating-hours", response_model=OperatingHours)
def set_operating_hours(
    hours: OperatingHours,
    calendar: OperatingCalendar = Depends(get_calendar),
    admin: dict = Depends(require_admin),
):
    return _as_payload(calendar.set_operating_hours(hours.model_dump()))
