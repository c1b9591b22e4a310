"""
Read-only projections of the medication store.

Every function recomputes its result from the collections it is given;
nothing is cached.
"""
from datetime import date
from typing import Iterable, List, Optional, Sequence

from pillpapa.helpers.enums import AdherenceStatus, MedicineIcon
from pillpapa.models.model_adherence_log import AdherenceLog
from pillpapa.models.model_medicine import Medicine
from pillpapa.models.model_reminder import Reminder

DAYS_OF_WEEK = ['Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday']


def day_index(value: date) -> int:
    """Day-of-week index with Sunday as 0."""
    return (value.weekday() + 1) % 7


def display_icon(medicine: Optional[Medicine]) -> MedicineIcon:
    if medicine is None or medicine.icon is None:
        return MedicineIcon.PILL
    return medicine.icon


def weekly_schedule(reminders: Iterable[Reminder]) -> List[List[Reminder]]:
    """
    Partition reminders into seven day buckets (0 = Sunday).

    Each bucket is ordered by its "HH:MM" time string.
    """
    days: List[List[Reminder]] = [[] for _ in DAYS_OF_WEEK]
    for reminder in reminders:
        days[reminder.day].append(reminder)
    return [sorted(bucket, key=lambda r: r.time) for bucket in days]


def todays_adherence(
    reminder_id: str,
    logs: Iterable[AdherenceLog],
    today_date: str
) -> Optional[AdherenceStatus]:
    """Status logged for the reminder today, or None when still undecided."""
    for log in logs:
        if log.reminder_id == reminder_id and log.date == today_date:
            return log.status
    return None


def skipped_count(
    medicine_id: str,
    reminders: Iterable[Reminder],
    logs: Iterable[AdherenceLog]
) -> int:
    """All-time number of skipped logs for the medicine's reminders."""
    reminder_ids = {r.id for r in reminders if r.medicine_id == medicine_id}
    return sum(
        1 for log in logs
        if log.reminder_id in reminder_ids and log.status == AdherenceStatus.SKIPPED
    )


def build_context_snapshot(medicines: Sequence[Medicine], reminders: Sequence[Reminder]) -> str:
    """Render medicines and the weekly schedule as the chat context block."""
    lines = ["CURRENT MEDICATIONS:"]
    if not medicines:
        lines.append("- None")
    for medicine in medicines:
        interactions = ', '.join(medicine.interactions) or 'None specified'
        lines.append(
            f'- {medicine.name}: Dosage is "{medicine.dosage}". '
            f'Key interactions to avoid: {interactions}.'
        )

    lines.append("")
    lines.append("WEEKLY REMINDER SCHEDULE:")
    if not reminders:
        lines.append("- No reminders set.")
    else:
        for day_name, day_reminders in zip(DAYS_OF_WEEK, weekly_schedule(reminders)):
            if not day_reminders:
                continue
            lines.append(f"{day_name}:")
            for reminder in day_reminders:
                lines.append(f"  - {reminder.time}: Take {reminder.medicine_name}")

    return "\n".join(lines) + "\n"
