import logging
import logging.config
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware

from pillpapa.api.api_router import router
from pillpapa.core.config import settings
from pillpapa.db.conversation import ChatConversation
from pillpapa.db.store import MedicationStore, make_clock
from pillpapa.helpers.exception_handler import (
    CustomException,
    http_exception_handler,
    validation_exception_handler,
)

logging.config.fileConfig(settings.LOGGING_CONFIG_FILE, disable_existing_loggers=False)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    # One store and one conversation per application session
    application.state.store = MedicationStore(clock=make_clock(settings.TIMEZONE))
    application.state.conversation = ChatConversation()
    logger.info(f"Medication store initialized (timezone={settings.TIMEZONE})")
    yield
    application.state.conversation.clear()
    application.state.store.clear()
    logger.info("Medication store cleared")


def get_application() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME, docs_url="/docs", redoc_url='/re-docs',
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        description='''
        Personal medication tracker
            - Medicine lookup by name or photo with Gemini
            - Weekly reminder schedule
            - Daily taken/skipped adherence log
            - Chat assistant grounded on your medicines and schedule
        ''',
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(router, prefix=settings.API_PREFIX)
    application.add_exception_handler(CustomException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)

    return application


app = get_application()
if __name__ == '__main__':
    uvicorn.run(app, host="0.0.0.0", port=8000)
