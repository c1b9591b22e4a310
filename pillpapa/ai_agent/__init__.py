"""
AI Agent package for medicine lookup and chat using Gemini API.
"""
from pillpapa.ai_agent.gemini_client import GeminiClient
from pillpapa.ai_agent.medicine_lookup_agent import MedicineLookupAgent
from pillpapa.ai_agent.chat_agent import ChatAgent

__all__ = ['GeminiClient', 'MedicineLookupAgent', 'ChatAgent']
