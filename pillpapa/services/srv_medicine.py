import logging
import uuid
from typing import List

from fastapi import Depends

from pillpapa.ai_agent.errors import GatewayError
from pillpapa.ai_agent.medicine_lookup_agent import MedicineLookupAgent
from pillpapa.db.store import MedicationStore
from pillpapa.helpers.dependencies import get_lookup_agent, get_store
from pillpapa.helpers.exception_handler import CustomException
from pillpapa.helpers.schedule_views import display_icon, skipped_count
from pillpapa.models.model_medicine import Medicine, MedicineFields
from pillpapa.schemas.sche_medicine import MedicineCardResponse, MedicineCreateRequest

logger = logging.getLogger(__name__)

MISSING_LOOKUP_INPUT_MESSAGE = 'Please enter a drug name or upload a picture.'
LOOKUP_FAILED_MESSAGE = 'Could not retrieve medicine information. Please try again.'


class MedicineService:
    def __init__(self, store: MedicationStore = Depends(get_store)):
        self.store = store

    def get_all_medicines(self) -> List[MedicineCardResponse]:
        return [
            MedicineCardResponse(
                medicine=medicine,
                display_icon=display_icon(medicine),
                skipped_count=skipped_count(medicine.id, self.store.reminders, self.store.adherence_logs),
            )
            for medicine in self.store.medicines
        ]

    def create_medicine(self, medicine_data: MedicineCreateRequest) -> Medicine:
        """
        Store a looked-up medicine together with the icon the user picked.
        An id is generated when the caller does not supply one.
        """
        medicine = Medicine(
            **medicine_data.model_dump(exclude={'id'}),
            id=medicine_data.id or str(uuid.uuid4()),
        )
        return self.store.add_medicine(medicine)


class MedicineLookupService:
    def __init__(self, lookup_agent: MedicineLookupAgent = Depends(get_lookup_agent)):
        self.lookup_agent = lookup_agent

    async def lookup_by_name(self, drug_name: str) -> MedicineFields:
        drug_name = (drug_name or '').strip()
        if not drug_name:
            raise CustomException(http_code=400, code='400', message=MISSING_LOOKUP_INPUT_MESSAGE)
        try:
            return await self.lookup_agent.lookup_by_name(drug_name)
        except GatewayError as e:
            logger.error(f"Medicine lookup by name failed: {str(e)}")
            raise CustomException(http_code=502, code='502', message=LOOKUP_FAILED_MESSAGE)

    async def lookup_by_image(self, image_bytes: bytes, mime_type: str) -> MedicineFields:
        if not image_bytes:
            raise CustomException(http_code=400, code='400', message=MISSING_LOOKUP_INPUT_MESSAGE)
        try:
            return await self.lookup_agent.lookup_by_image(image_bytes, mime_type)
        except GatewayError as e:
            logger.error(f"Medicine lookup by image failed: {str(e)}")
            raise CustomException(http_code=502, code='502', message=LOOKUP_FAILED_MESSAGE)
