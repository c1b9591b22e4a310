from typing import Any, Optional
import logging

from fastapi import APIRouter, Depends

from pillpapa.models.model_adherence_log import AdherenceLog
from pillpapa.models.model_reminder import Reminder
from pillpapa.schemas.sche_base import DataResponse
from pillpapa.schemas.sche_schedule import AdherenceRequest, ReminderCreateRequest, WeeklyScheduleResponse
from pillpapa.services.srv_schedule import ScheduleService

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get('/weekly', response_model=DataResponse[WeeklyScheduleResponse])
async def get_weekly_schedule(
    schedule_service: ScheduleService = Depends()
) -> Any:
    """
    Weekly reminder grid, Sunday first, each day ordered by time.

    Today's column carries the adherence status logged for each reminder.
    """
    schedule = schedule_service.get_weekly_schedule()
    return DataResponse().success_response(data=schedule)


@router.post('/reminders', response_model=DataResponse[Optional[Reminder]])
async def add_reminder(
    reminder_data: ReminderCreateRequest,
    schedule_service: ScheduleService = Depends()
) -> Any:
    """
    Schedule a weekly reminder for a medicine.

    An unknown medicine id is ignored: the response succeeds with ``data: null``.
    """
    logger.info(f"add_reminder request: medicine_id={reminder_data.medicine_id}, "
                f"day={reminder_data.day}, time={reminder_data.time}")
    reminder = schedule_service.add_reminder(reminder_data)
    return DataResponse().success_response(data=reminder)


@router.post('/reminders/{reminder_id}/adherence', response_model=DataResponse[AdherenceLog])
async def log_adherence(
    reminder_id: str,
    adherence_data: AdherenceRequest,
    schedule_service: ScheduleService = Depends()
) -> Any:
    """
    Mark today's dose of a reminder as taken or skipped.

    Logging again on the same day replaces the earlier decision.
    """
    log = schedule_service.log_adherence(reminder_id, adherence_data.status)
    logger.info(f"log_adherence success: reminder_id={reminder_id}, date={log.date}, "
                f"status={log.status.value}")
    return DataResponse().success_response(data=log)
