from datetime import date
from typing import Optional

from fastapi import Depends

from pillpapa.db.store import MedicationStore
from pillpapa.helpers.dependencies import get_store
from pillpapa.helpers.enums import AdherenceStatus
from pillpapa.helpers.schedule_views import (
    DAYS_OF_WEEK,
    day_index,
    display_icon,
    todays_adherence,
    weekly_schedule,
)
from pillpapa.models.model_adherence_log import AdherenceLog
from pillpapa.models.model_reminder import Reminder
from pillpapa.schemas.sche_schedule import (
    DayScheduleResponse,
    ReminderCreateRequest,
    ScheduledReminderResponse,
    WeeklyScheduleResponse,
)


class ScheduleService:
    def __init__(self, store: MedicationStore = Depends(get_store)):
        self.store = store

    def get_weekly_schedule(self) -> WeeklyScheduleResponse:
        today = self.store.today()
        today_index = day_index(date.fromisoformat(today))

        days = []
        for index, day_reminders in enumerate(weekly_schedule(self.store.reminders)):
            is_today = index == today_index
            items = []
            for reminder in day_reminders:
                status = None
                if is_today:
                    status = todays_adherence(reminder.id, self.store.adherence_logs, today)
                items.append(ScheduledReminderResponse(
                    reminder=reminder,
                    display_icon=display_icon(self.store.get_medicine(reminder.medicine_id)),
                    show_actions=is_today and status is None,
                    today_status=status,
                ))
            days.append(DayScheduleResponse(
                day=index,
                day_name=DAYS_OF_WEEK[index],
                is_today=is_today,
                reminders=items,
            ))

        return WeeklyScheduleResponse(today=today, today_index=today_index, days=days)

    def add_reminder(self, reminder_data: ReminderCreateRequest) -> Optional[Reminder]:
        return self.store.add_reminder(
            medicine_id=reminder_data.medicine_id,
            day=reminder_data.day,
            time=reminder_data.time,
        )

    def log_adherence(self, reminder_id: str, status: AdherenceStatus) -> AdherenceLog:
        return self.store.log_adherence(reminder_id, status)
