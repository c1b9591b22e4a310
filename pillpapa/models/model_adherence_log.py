from pydantic import BaseModel, ConfigDict, Field

from pillpapa.helpers.enums import AdherenceStatus

DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}$'


class AdherenceLog(BaseModel):
    model_config = ConfigDict(frozen=True)

    reminder_id: str
    date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    status: AdherenceStatus
