import logging
from typing import List

from fastapi import Depends

from pillpapa.ai_agent.chat_agent import ChatAgent
from pillpapa.ai_agent.errors import ChatNotInitializedError, GatewayError
from pillpapa.db.conversation import ChatConversation
from pillpapa.db.store import MedicationStore
from pillpapa.helpers.dependencies import get_chat_agent, get_conversation, get_store
from pillpapa.helpers.enums import ChatSender
from pillpapa.helpers.exception_handler import CustomException
from pillpapa.helpers.schedule_views import build_context_snapshot
from pillpapa.models.model_chat_message import ChatMessage

logger = logging.getLogger(__name__)

GREETING = (
    "Hello! I'm your Pill Papa AI assistant. I can see your dashboard and weekly view. "
    "Ask me anything about your medications or schedule. Please remember to consult "
    "a healthcare professional for medical advice."
)
REPLY_FAILED_MESSAGE = 'Sorry, I encountered an error. Please try again.'


class ChatService:
    def __init__(
        self,
        store: MedicationStore = Depends(get_store),
        conversation: ChatConversation = Depends(get_conversation),
        chat_agent: ChatAgent = Depends(get_chat_agent)
    ):
        self.store = store
        self.conversation = conversation
        self.chat_agent = chat_agent

    def start_chat(self) -> List[ChatMessage]:
        """Seed a fresh conversation with the current medicines and schedule."""
        snapshot = build_context_snapshot(self.store.medicines, self.store.reminders)
        session = self.chat_agent.start_conversation(snapshot)
        self.conversation.reset(
            session=session,
            revision=self.store.revision,
            greeting=ChatMessage(sender=ChatSender.AI, text=GREETING),
        )
        logger.info(f"Chat started at store revision {self.store.revision}")
        return list(self.conversation.messages)

    async def send_message(self, text: str) -> List[ChatMessage]:
        """
        Send a user message and append both it and the reply to the transcript.

        A conversation seeded before the latest medicine or reminder change
        is restarted first. Gateway failures become an AI error message.
        """
        if not text or not text.strip():
            raise CustomException(http_code=400, code='400', message='Message must not be empty.')

        if self.conversation.is_stale(self.store.revision):
            logger.info("Medicines or reminders changed, restarting chat")
            self.start_chat()

        try:
            reply_text = await self.chat_agent.send_message(self.conversation.session, text)
        except ChatNotInitializedError as e:
            raise CustomException(http_code=409, code='409', message=str(e))
        except GatewayError as e:
            logger.error(f"Chat reply failed: {str(e)}")
            reply_text = REPLY_FAILED_MESSAGE

        self.conversation.messages.extend([
            ChatMessage(sender=ChatSender.USER, text=text),
            ChatMessage(sender=ChatSender.AI, text=reply_text),
        ])
        return list(self.conversation.messages)


class ChatTranscriptService:
    """Reads the transcript without needing the AI service."""

    def __init__(
        self,
        store: MedicationStore = Depends(get_store),
        conversation: ChatConversation = Depends(get_conversation)
    ):
        self.store = store
        self.conversation = conversation

    def get_messages(self) -> List[ChatMessage]:
        # A medicine or reminder change clears the chat right away; the
        # session itself is re-seeded on the next send
        if self.conversation.is_stale(self.store.revision):
            logger.info("Medicines or reminders changed, resetting chat transcript")
            self.conversation.messages = [ChatMessage(sender=ChatSender.AI, text=GREETING)]
        return list(self.conversation.messages)
