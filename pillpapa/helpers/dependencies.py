import logging
from functools import lru_cache

from fastapi import Request

from pillpapa.ai_agent.chat_agent import ChatAgent
from pillpapa.ai_agent.gemini_client import GeminiClient
from pillpapa.ai_agent.medicine_lookup_agent import MedicineLookupAgent
from pillpapa.db.conversation import ChatConversation
from pillpapa.db.store import MedicationStore
from pillpapa.helpers.exception_handler import CustomException

logger = logging.getLogger(__name__)


def get_store(request: Request) -> MedicationStore:
    return request.app.state.store


def get_conversation(request: Request) -> ChatConversation:
    return request.app.state.conversation


@lru_cache()
def get_gemini_client() -> GeminiClient:
    return GeminiClient()


def _gemini_client_or_503() -> GeminiClient:
    try:
        return get_gemini_client()
    except ValueError as e:
        logger.error(f"Gemini client unavailable: {str(e)}")
        raise CustomException(http_code=503, code='503', message=str(e))


def get_lookup_agent() -> MedicineLookupAgent:
    return MedicineLookupAgent(_gemini_client_or_503())


def get_chat_agent() -> ChatAgent:
    return ChatAgent(_gemini_client_or_503())
