from typing import Any, List
import logging

from fastapi import APIRouter, Depends

from pillpapa.models.model_chat_message import ChatMessage
from pillpapa.schemas.sche_base import DataResponse
from pillpapa.schemas.sche_chat import ChatMessageRequest
from pillpapa.services.srv_chat import ChatService, ChatTranscriptService

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post('/start', response_model=DataResponse[List[ChatMessage]])
async def start_chat(
    chat_service: ChatService = Depends()
) -> Any:
    """
    Start a new conversation with the assistant.

    The assistant receives the current medicines and weekly schedule as
    context. The transcript is reset to the greeting.
    """
    messages = chat_service.start_chat()
    return DataResponse().success_response(data=messages)


@router.get('/messages', response_model=DataResponse[List[ChatMessage]])
async def get_messages(
    transcript_service: ChatTranscriptService = Depends()
) -> Any:
    """
    Current transcript. A change to medicines or reminders since the
    conversation started resets it to the greeting.
    """
    return DataResponse().success_response(data=transcript_service.get_messages())


@router.post('/messages', response_model=DataResponse[List[ChatMessage]])
async def send_message(
    message_data: ChatMessageRequest,
    chat_service: ChatService = Depends()
) -> Any:
    """
    Send a message to the assistant and return the updated transcript.

    A conversation must have been started with ``POST /chat/start``.
    """
    messages = await chat_service.send_message(message_data.text)
    logger.info(f"send_message success: transcript has {len(messages)} messages")
    return DataResponse().success_response(data=messages)
