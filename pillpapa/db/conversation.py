from dataclasses import dataclass, field
from typing import Any, List, Optional

from pillpapa.models.model_chat_message import ChatMessage


@dataclass
class ChatConversation:
    """
    The single active chat conversation of the application session.

    Attributes:
        session: Chat session handle returned by the chat agent, None until started.
        seeded_revision: Store revision the session context was rendered from.
        messages: Transcript shown to the user.
    """
    session: Optional[Any] = None
    seeded_revision: Optional[int] = None
    messages: List[ChatMessage] = field(default_factory=list)

    @property
    def is_started(self) -> bool:
        return self.session is not None

    def is_stale(self, revision: int) -> bool:
        return self.is_started and self.seeded_revision != revision

    def reset(self, session: Any, revision: int, greeting: ChatMessage) -> None:
        self.session = session
        self.seeded_revision = revision
        self.messages = [greeting]

    def clear(self) -> None:
        self.session = None
        self.seeded_revision = None
        self.messages = []
