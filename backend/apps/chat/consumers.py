from asgiref.sync import async_to_sync
from channels.generic.websocket import JsonWebsocketConsumer
from django.db import DatabaseError

from apps.common import get_logger
from .broadcast import CHAT_GROUP, MESSAGE_EVENT, broadcast_message
from .container import build_chat_service

logger = get_logger(__name__).bind(component="chat", layer="consumer")

UNAUTHENTICATED_CLOSE_CODE = 4401


class ChatConsumer(JsonWebsocketConsumer):
    service = build_chat_service()
    log = logger.bind(consumer="ChatConsumer")

    @property
    def identity(self):
        return self.scope.get("identity")

    def connect(self):
        # Accept first so the client sees the application close code.
        self.accept()
        if self.identity is None:
            self.log.info("Rejecting anonymous chat connection")
            self.close(code=UNAUTHENTICATED_CLOSE_CODE)
            return
        async_to_sync(self.channel_layer.group_add)(CHAT_GROUP, self.channel_name)
        self.log.info("Chat user connected", user_id=self.identity.id, username=self.identity.username)

    def disconnect(self, code):
        if self.identity is None:
            return
        async_to_sync(self.channel_layer.group_discard)(CHAT_GROUP, self.channel_name)
        self.log.info("Chat user disconnected", user_id=self.identity.id, code=code)

    @classmethod
    def decode_json(cls, text_data):
        try:
            return super().decode_json(text_data)
        except ValueError:
            return None

    def receive_json(self, content, **kwargs):
        if not isinstance(content, dict) or content.get("event") != MESSAGE_EVENT:
            self.log.debug("Ignoring unknown chat frame")
            return
        try:
            dto = self.service.post_message(self.identity, content.get("text"))
        except DatabaseError:
            self.log.exception("Failed to store chat message", user_id=self.identity.id)
            self.send_json({"event": "error", "message": "Error sending message"})
            return
        if dto is not None:
            broadcast_message(dto, self.channel_layer)

    def chat_message(self, event):
        self.send_json(event["payload"])
