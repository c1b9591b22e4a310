class GatewayError(Exception):
    """Raised when the AI service call fails or returns an unusable response."""


class ChatNotInitializedError(RuntimeError):
    """Raised when a chat message is sent before a conversation was started."""
