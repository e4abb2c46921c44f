from __future__ import annotations

from django.conf import settings

from .repositories import MessageRepository
from .services import DEFAULT_HISTORY_LIMIT, ChatService


def build_chat_service() -> ChatService:
    return ChatService(
        messages=MessageRepository(),
        history_limit=getattr(settings, "CHAT_HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT),
    )
