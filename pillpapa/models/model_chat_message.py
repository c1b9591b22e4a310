from pydantic import BaseModel, ConfigDict

from pillpapa.helpers.enums import ChatSender


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    sender: ChatSender
    text: str
