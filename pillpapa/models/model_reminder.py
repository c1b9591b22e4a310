from pydantic import BaseModel, ConfigDict, Field

# Zero-padded 24-hour clock, so string order is chronological order
TIME_PATTERN = r'^([01]\d|2[0-3]):[0-5]\d$'


class Reminder(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    medicine_id: str
    # Copied from the medicine when the reminder is created, never re-synced
    medicine_name: str
    day: int = Field(..., ge=0, le=6, description="Day of week, 0 = Sunday")
    time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM, 24-hour")
