"""
Chat AI Agent answering questions about the user's medicines and schedule.
"""
import logging
from typing import Any, Optional

from pillpapa.ai_agent.errors import ChatNotInitializedError
from pillpapa.ai_agent.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a helpful AI assistant specializing in pharmacology named Pill Papa AI. "
    "You have been provided with the user's current list of medications and their weekly "
    "reminder schedule in the chat history. Refer to this information to answer questions "
    "about their regimen. For instance, if they ask about their schedule for a specific day, "
    "use the provided reminder data. Be conversational and helpful. Always advise users to "
    "consult their doctor or pharmacist for definitive medical advice."
)

CONTEXT_PREAMBLE = (
    "Here is my current medication and reminder schedule. "
    "Use this as context for our conversation:\n\n"
)

CONTEXT_ACKNOWLEDGEMENT = (
    "Understood. I have your medication and reminder schedule. How can I help you today?"
)


class ChatAgent:
    """Runs the assistant conversation on top of a Gemini chat session."""

    def __init__(self, gemini_client: Optional[GeminiClient] = None):
        self.gemini_client = gemini_client or GeminiClient()

    def start_conversation(self, context_snapshot: str) -> Any:
        """
        Start a conversation grounded on the given context snapshot.

        Returns:
            Session handle to pass to send_message.
        """
        history = [
            {"role": "user", "parts": [f"{CONTEXT_PREAMBLE}{context_snapshot}"]},
            {"role": "model", "parts": [CONTEXT_ACKNOWLEDGEMENT]},
        ]
        return self.gemini_client.start_chat(history=history, system_instruction=SYSTEM_INSTRUCTION)

    async def send_message(self, session: Any, message: str) -> str:
        """
        Send a user message and return the assistant reply.

        Raises:
            ChatNotInitializedError: If no conversation was started.
            GatewayError: If the AI call fails.
        """
        if session is None:
            raise ChatNotInitializedError("Chat not initialized. Call start_conversation first.")
        logger.info(f"Sending chat message ({len(message)} chars)")
        return await self.gemini_client.send_chat_message(session, message)
