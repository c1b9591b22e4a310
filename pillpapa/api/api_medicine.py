from typing import Any, List
import logging

from fastapi import APIRouter, Depends, File, UploadFile

from pillpapa.helpers.exception_handler import CustomException
from pillpapa.models.model_medicine import Medicine, MedicineFields
from pillpapa.schemas.sche_base import DataResponse
from pillpapa.schemas.sche_medicine import MedicineCardResponse, MedicineCreateRequest, MedicineLookupRequest
from pillpapa.services.srv_medicine import MedicineLookupService, MedicineService

router = APIRouter()

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}


@router.get('', response_model=DataResponse[List[MedicineCardResponse]])
async def get_all_medicines(
    medicine_service: MedicineService = Depends()
) -> Any:
    """
    Retrieve all tracked medicines in the order they were added.

    Each card carries the icon to display (``pill`` when none was chosen)
    and the all-time number of skipped doses.
    """
    medicines = medicine_service.get_all_medicines()
    logger.info(f"get_all_medicines success: {len(medicines)} medicines retrieved")
    return DataResponse().success_response(data=medicines)


@router.post('', response_model=DataResponse[Medicine])
async def create_medicine(
    medicine_data: MedicineCreateRequest,
    medicine_service: MedicineService = Depends()
) -> Any:
    """
    Add a medicine to the tracker.

    Called after a lookup, with the looked-up fields and the icon the user picked.
    """
    logger.info(f"create_medicine request: {medicine_data.name}")
    medicine = medicine_service.create_medicine(medicine_data)
    logger.info(f"create_medicine success: medicine_id={medicine.id}")
    return DataResponse().success_response(data=medicine)


@router.post('/lookup', response_model=DataResponse[MedicineFields])
async def lookup_medicine(
    lookup_data: MedicineLookupRequest,
    lookup_service: MedicineLookupService = Depends()
) -> Any:
    """
    Look up medicine details by name with the AI assistant.

    Nothing is stored; the result is confirmed with ``POST /medicines``.
    """
    logger.info(f"lookup_medicine request: {lookup_data.drug_name}")
    fields = await lookup_service.lookup_by_name(lookup_data.drug_name)
    logger.info(f"lookup_medicine success: {fields.name}")
    return DataResponse().success_response(data=fields)


@router.post('/lookup-image', response_model=DataResponse[MedicineFields])
async def lookup_medicine_image(
    file: UploadFile = File(...),
    lookup_service: MedicineLookupService = Depends()
) -> Any:
    """
    Identify a medicine from a photo of the pill or its packaging.

    Any ``image/*`` upload is accepted. Without an image content type the
    file extension decides.

    **Supported file extensions**: PNG, JPG, JPEG, GIF, WebP
    """
    logger.info(f"lookup_medicine_image request: filename={file.filename}, content_type={file.content_type}")

    mime_type = file.content_type
    if not mime_type or not mime_type.startswith('image/'):
        file_extension = (file.filename or '').rsplit('.', 1)[-1].lower()
        if file_extension not in ALLOWED_IMAGE_EXTENSIONS:
            raise CustomException(http_code=400, code='400', message="Invalid file type. Only image files are allowed.")
        mime_type = f"image/{'jpeg' if file_extension == 'jpg' else file_extension}"

    content = await file.read()
    fields = await lookup_service.lookup_by_image(content, mime_type)
    logger.info(f"lookup_medicine_image success: {fields.name}")
    return DataResponse().success_response(data=fields)
