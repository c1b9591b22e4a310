"""
Medicine Lookup AI Agent for identifying medicines from a name or an image.
Uses Gemini API structured output to return medicine details.
"""
import logging
from typing import Any, Dict, List, Optional

from typing_extensions import TypedDict

from pillpapa.ai_agent.errors import GatewayError
from pillpapa.ai_agent.gemini_client import GeminiClient
from pillpapa.models.model_medicine import MedicineFields

logger = logging.getLogger(__name__)

MEDICINE_INFO_PROMPT = (
    "Analyze the provided information and identify the medicine. Provide its name, "
    "a brief description, its active chemical ingredients, drugs it should not be mixed with, "
    "and a typical dosage frequency. Respond in the requested JSON format."
)

FIELD_GUIDE = """
Fields:
- name: The common brand or generic name of the medicine.
- description: A brief, one-paragraph summary of what the medicine is used for.
- active_ingredients: A list of the primary active chemical ingredients.
- interactions: A list of substances or other drugs this medicine should not be mixed with.
- dosage: A typical dosage recommendation, e.g., "One tablet twice a day".
"""


class MedicineSchema(TypedDict):
    name: str
    description: str
    active_ingredients: List[str]
    interactions: List[str]
    dosage: str


class MedicineLookupAgent:
    """
    AI Agent for looking up medicine details.
    Produces MedicineFields ready to be confirmed into a stored Medicine.
    """

    def __init__(self, gemini_client: Optional[GeminiClient] = None):
        self.gemini_client = gemini_client or GeminiClient()
        logger.info("MedicineLookupAgent initialized")

    async def lookup_by_name(self, drug_name: str) -> MedicineFields:
        """
        Look up a medicine by its name.

        Raises:
            GatewayError: If the AI call fails.
        """
        logger.info(f"Looking up medicine by name: {drug_name}")
        prompt = f"{MEDICINE_INFO_PROMPT}{FIELD_GUIDE}\nThe medicine name is: {drug_name}"
        data = await self.gemini_client.generate_json_content(
            contents=prompt,
            response_schema=MedicineSchema,
            temperature=0.1
        )
        return self._to_fields(data)

    async def lookup_by_image(self, image_bytes: bytes, mime_type: str) -> MedicineFields:
        """
        Identify a medicine from a photo of the pill or its packaging.

        Args:
            image_bytes: Raw image content.
            mime_type: Image MIME type, e.g. "image/png".

        Raises:
            GatewayError: If the AI call fails.
        """
        logger.info(f"Looking up medicine by image ({mime_type}, {len(image_bytes)} bytes)")
        image_part = {"mime_type": mime_type, "data": image_bytes}
        data = await self.gemini_client.generate_json_content(
            contents=[image_part, f"{MEDICINE_INFO_PROMPT}{FIELD_GUIDE}"],
            response_schema=MedicineSchema,
            temperature=0.1
        )
        return self._to_fields(data)

    @staticmethod
    def _to_fields(data: Dict[str, Any]) -> MedicineFields:
        # Missing fields come through blank rather than failing the lookup
        try:
            return MedicineFields(
                name=data.get("name") or "",
                description=data.get("description") or "",
                active_ingredients=data.get("active_ingredients") or [],
                interactions=data.get("interactions") or [],
                dosage=data.get("dosage") or "",
            )
        except ValueError as e:
            logger.error(f"Unexpected medicine data from AI: {data}")
            raise GatewayError(f"Unexpected medicine data: {str(e)}") from e
