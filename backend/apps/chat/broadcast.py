from typing import Any, Dict

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from apps.common import get_logger
from .dtos import MessageDTO

logger = get_logger(__name__).bind(component="chat", layer="broadcast")

CHAT_GROUP = "chat"
MESSAGE_EVENT = "chat:message"


def message_event(dto: MessageDTO) -> Dict[str, Any]:
    return {
        "event": MESSAGE_EVENT,
        "id": str(dto.id),
        "username": dto.username,
        "text": dto.text,
        "createdAt": dto.created_at.isoformat() if dto.created_at else None,
    }


def broadcast_message(dto: MessageDTO, channel_layer=None) -> None:
    """Fan a stored message out to every connected chat session. No delivery tracking."""
    layer = channel_layer or get_channel_layer()
    if layer is None:
        logger.warning("No channel layer configured; message not broadcast", message_id=dto.id)
        return
    async_to_sync(layer.group_send)(
        CHAT_GROUP, {"type": "chat.message", "payload": message_event(dto)}
    )
