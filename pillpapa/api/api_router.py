from fastapi import APIRouter

from pillpapa.api import api_chat, api_healthcheck, api_medicine, api_schedule

router = APIRouter()

router.include_router(api_healthcheck.router, tags=["health-check"], prefix="/healthcheck")
router.include_router(api_medicine.router, tags=["medicine"], prefix="/medicines")
router.include_router(api_schedule.router, tags=["schedule"], prefix="/schedule")
router.include_router(api_chat.router, tags=["chat"], prefix="/chat")
