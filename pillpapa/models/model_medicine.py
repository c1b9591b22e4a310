from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from pillpapa.helpers.enums import MedicineIcon


class MedicineFields(BaseModel):
    """Structured medicine data returned by the AI lookup."""
    name: str = ''
    description: str = ''
    active_ingredients: List[str] = Field(default_factory=list)
    interactions: List[str] = Field(default_factory=list)
    dosage: str = ''


class Medicine(MedicineFields):
    """
    A tracked medicine.

    The icon is stored exactly as chosen; a missing icon is resolved to
    ``MedicineIcon.PILL`` only when the medicine is displayed.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    image_url: Optional[str] = None
    icon: Optional[MedicineIcon] = None
