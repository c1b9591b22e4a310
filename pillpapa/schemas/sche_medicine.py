from typing import Optional

from pydantic import BaseModel

from pillpapa.helpers.enums import MedicineIcon
from pillpapa.models.model_medicine import Medicine, MedicineFields


class MedicineLookupRequest(BaseModel):
    drug_name: str = ''


class MedicineCreateRequest(MedicineFields):
    id: Optional[str] = None
    image_url: Optional[str] = None
    icon: Optional[MedicineIcon] = None


class MedicineCardResponse(BaseModel):
    medicine: Medicine
    display_icon: MedicineIcon
    skipped_count: int
