"""
Gemini API Client wrapper for Pill Papa AI.
Handles connection to Google Gemini API, structured generation and chat sessions.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

import google.generativeai as genai

from pillpapa.ai_agent.errors import GatewayError
from pillpapa.core.config import settings

logger = logging.getLogger(__name__)

# finish_reason 1 = STOP (normal), 2 = MAX_TOKENS
ACCEPTED_FINISH_REASONS = (1, 2)


class GeminiClient:
    """
    Wrapper for Google Gemini API.
    Handles API key configuration, model initialization, and content generation.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        """
        Initialize Gemini client.

        Args:
            api_key: Google Gemini API key. If None, reads GEMINI_API_KEY from settings.
            model_name: Gemini model to use. If None, reads GEMINI_MODEL from settings.
        """
        self.api_key = api_key or settings.GEMINI_API_KEY
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY not found in environment variables")

        self.model_name = model_name or settings.GEMINI_MODEL
        self._configure_api()
        self.model = genai.GenerativeModel(self.model_name)
        logger.info(f"GeminiClient initialized with model: {self.model_name}")

    def _configure_api(self):
        """Configure Gemini API with API key."""
        genai.configure(api_key=self.api_key)
        logger.debug("Gemini API configured successfully")

    async def generate_json_content(
        self,
        contents: Any,
        response_schema: Any,
        temperature: float = 0.3
    ) -> Dict[str, Any]:
        """
        Generate structured JSON content using Gemini API.

        Args:
            contents: Prompt text, or a list of parts (text and inline image data).
            response_schema: Schema the JSON response must follow.
            temperature: Sampling temperature (default: 0.3 for structured output).

        Returns:
            Parsed JSON dictionary.

        Raises:
            GatewayError: If the API call fails or the response is not valid JSON.
        """
        generation_config = genai.types.GenerationConfig(
            temperature=temperature,
            response_mime_type="application/json",
            response_schema=response_schema,
        )

        logger.info(f"Generating JSON content with Gemini (temp={temperature}, model={self.model_name})")
        try:
            response = await self.model.generate_content_async(
                contents,
                generation_config=generation_config
            )
        except Exception as e:
            logger.error(f"Gemini API error: {str(e)}", exc_info=True)
            raise GatewayError(f"Failed to generate content: {str(e)}") from e

        return self._parse_json(self._response_text(response))

    def start_chat(self, history: List[Dict[str, Any]], system_instruction: str) -> "genai.ChatSession":
        """
        Create a multi-turn chat session seeded with the given history.

        Args:
            history: Prior turns as dicts with 'role' ('user' or 'model') and 'parts'.
            system_instruction: System prompt for the chat model.

        Returns:
            Gemini chat session.
        """
        model = genai.GenerativeModel(self.model_name, system_instruction=system_instruction)
        logger.info(f"Starting Gemini chat session with {len(history)} seeded turns")
        return model.start_chat(history=history)

    async def send_chat_message(self, chat_session: "genai.ChatSession", message: str) -> str:
        """
        Send one message on a chat session and return the reply text.

        Raises:
            GatewayError: If the API call fails or the reply is empty.
        """
        try:
            response = await chat_session.send_message_async(message)
        except Exception as e:
            logger.error(f"Chat error: {str(e)}", exc_info=True)
            raise GatewayError(f"Failed to chat with Gemini: {str(e)}") from e

        return self._response_text(response)

    def _response_text(self, response: Any) -> str:
        """Extract the text of the first candidate, checking it was not blocked."""
        if not response.candidates:
            logger.error("Gemini returned no candidates")
            raise GatewayError("Gemini API returned no candidates")

        candidate = response.candidates[0]
        finish_reason = getattr(candidate, 'finish_reason', None)
        if finish_reason and finish_reason not in ACCEPTED_FINISH_REASONS:
            logger.error(f"Gemini content blocked. finish_reason: {finish_reason}")
            raise GatewayError(f"Content was blocked by Gemini (finish_reason={finish_reason})")

        if not candidate.content or not candidate.content.parts:
            logger.error("Gemini candidate has no content parts")
            raise GatewayError("Gemini API returned empty content")

        response_text = "".join(getattr(part, 'text', '') or '' for part in candidate.content.parts)
        if not response_text:
            logger.error("Gemini returned empty response text")
            raise GatewayError("Empty response from Gemini API")

        logger.info(f"Successfully generated content ({len(response_text)} chars)")
        return response_text

    def _parse_json(self, response_text: str) -> Dict[str, Any]:
        """
        Parse a JSON object from response text, tolerating code fences
        and trailing commas.
        """
        extracted_json = response_text.strip()
        if "```json" in extracted_json:
            json_start = extracted_json.find("```json") + 7
            json_end = extracted_json.find("```", json_start)
            extracted_json = extracted_json[json_start:json_end].strip()
        elif "```" in extracted_json:
            json_start = extracted_json.find("```") + 3
            json_end = extracted_json.find("```", json_start)
            extracted_json = extracted_json[json_start:json_end].strip()

        try:
            parsed_json = json.loads(extracted_json)
        except json.JSONDecodeError as e1:
            logger.warning(f"Failed to parse extracted JSON: {str(e1)}")
            fixed_json = re.sub(r',\s*(\]|\})', r'\1', extracted_json)
            try:
                parsed_json = json.loads(fixed_json)
            except json.JSONDecodeError as e2:
                logger.error(f"Failed to parse JSON from Gemini response: {str(e2)}")
                logger.error(f"Full response text: {response_text}")
                raise GatewayError(f"Invalid JSON response from Gemini: {str(e2)}") from e2

        if not isinstance(parsed_json, dict):
            raise GatewayError("Gemini response is not a JSON object")
        return parsed_json
