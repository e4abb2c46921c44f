from __future__ import annotations

from typing import Any, List, Optional

from apps.auth.identity import Identity, require_authenticated
from apps.common import get_logger
from .dtos import MessageDTO, message_to_dto
from .protocols import MessageRepositoryProtocol

logger = get_logger(__name__).bind(component="chat", layer="service")

DEFAULT_HISTORY_LIMIT = 50


class ChatService:
    def __init__(
        self,
        messages: MessageRepositoryProtocol,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self.messages = messages
        self.history_limit = history_limit
        self.logger = logger.bind(service="ChatService")

    def post_message(self, actor: Optional[Identity], text: Any) -> Optional[MessageDTO]:
        """
        Persist a chat message from ``actor``.

        Non-string or blank text is dropped silently and None is returned; the
        caller broadcasts only what comes back.
        """
        actor = require_authenticated(actor)
        if not isinstance(text, str) or not text.strip():
            self.logger.debug("Ignoring empty chat message", user_id=actor.id)
            return None
        message = self.messages.create(
            user_id=actor.id, username=actor.username, text=text.strip()
        )
        self.logger.info("Chat message stored", message_id=message.id, user_id=actor.id)
        return message_to_dto(message)

    def list_messages(
        self, actor: Optional[Identity], limit: Optional[int] = None
    ) -> List[MessageDTO]:
        require_authenticated(actor)
        limit = self.history_limit if limit is None else max(1, min(int(limit), self.history_limit))
        return [message_to_dto(m) for m in self.messages.recent(limit)]
