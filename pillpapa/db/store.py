"""
In-memory medication store.

Holds the medicines, reminders and adherence logs of one application session.
Nothing is persisted: the store is created when the application starts and
cleared when it shuts down.
"""
import uuid
from datetime import date, datetime, timezone
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo

from pillpapa.helpers.enums import AdherenceStatus
from pillpapa.models.model_adherence_log import AdherenceLog
from pillpapa.models.model_medicine import Medicine
from pillpapa.models.model_reminder import Reminder

Clock = Callable[[], date]


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def make_clock(timezone_name: str) -> Clock:
    """Build a clock returning the current calendar date in the given timezone."""
    if timezone_name.upper() == 'UTC':
        return utc_today
    zone = ZoneInfo(timezone_name)
    return lambda: datetime.now(zone).date()


class MedicationStore:
    """
    Domain store for medicines, reminders and adherence logs.

    All collections keep insertion order. Operations run synchronously to
    completion and are expected to be called from a single thread.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or utc_today
        self.medicines: List[Medicine] = []
        self.reminders: List[Reminder] = []
        self.adherence_logs: List[AdherenceLog] = []
        # Bumped on every medicine/reminder change
        self.revision = 0

    def today(self) -> str:
        return self.clock().isoformat()

    def get_medicine(self, medicine_id: str) -> Optional[Medicine]:
        for medicine in self.medicines:
            if medicine.id == medicine_id:
                return medicine
        return None

    def add_medicine(self, medicine: Medicine) -> Medicine:
        self.medicines.append(medicine)
        self.revision += 1
        return medicine

    def add_reminder(self, medicine_id: str, day: int, time: str) -> Optional[Reminder]:
        """
        Schedule a weekly reminder for an existing medicine.

        Referencing an unknown medicine is a silent no-op and returns None.
        """
        medicine = self.get_medicine(medicine_id)
        if medicine is None:
            return None

        reminder = Reminder(
            id=str(uuid.uuid4()),
            medicine_id=medicine_id,
            medicine_name=medicine.name,
            day=day,
            time=time,
        )
        self.reminders.append(reminder)
        self.revision += 1
        return reminder

    def log_adherence(self, reminder_id: str, status: AdherenceStatus) -> AdherenceLog:
        """
        Record today's decision for a reminder, replacing any earlier one.

        The reminder id is not checked against the stored reminders.
        """
        today = self.today()
        log = AdherenceLog(reminder_id=reminder_id, date=today, status=status)
        self.adherence_logs = [
            existing for existing in self.adherence_logs
            if not (existing.reminder_id == reminder_id and existing.date == today)
        ]
        self.adherence_logs.append(log)
        return log

    def clear(self) -> None:
        self.medicines.clear()
        self.reminders.clear()
        self.adherence_logs.clear()
        self.revision = 0
