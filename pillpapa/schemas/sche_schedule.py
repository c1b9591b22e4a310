from typing import List, Optional

from pydantic import BaseModel, Field

from pillpapa.helpers.enums import AdherenceStatus, MedicineIcon
from pillpapa.models.model_reminder import TIME_PATTERN, Reminder


class ReminderCreateRequest(BaseModel):
    medicine_id: str
    day: int = Field(..., ge=0, le=6, description="Day of week, 0 = Sunday")
    time: str = Field('08:00', pattern=TIME_PATTERN, description="HH:MM, 24-hour")


class AdherenceRequest(BaseModel):
    status: AdherenceStatus


class ScheduledReminderResponse(BaseModel):
    reminder: Reminder
    display_icon: MedicineIcon
    # Taken/skipped buttons are offered on today's column until a decision is logged
    show_actions: bool
    today_status: Optional[AdherenceStatus] = None


class DayScheduleResponse(BaseModel):
    day: int
    day_name: str
    is_today: bool
    reminders: List[ScheduledReminderResponse]


class WeeklyScheduleResponse(BaseModel):
    today: str
    today_index: int
    days: List[DayScheduleResponse]
