from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class MessageDTO:
    id: int
    user_id: int
    username: str
    text: str
    created_at: Optional[datetime] = None


def message_to_dto(message) -> MessageDTO:
    return MessageDTO(
        id=message.id,
        user_id=message.user_id,
        username=message.username,
        text=message.text,
        created_at=getattr(message, "created_at", None),
    )
