from datetime import datetime, timezone
from unittest import TestCase

from apps.api.exceptions import ApplicationError
from apps.auth.identity import Identity
from apps.chat.services import ChatService


class StubMessage:
    def __init__(self, message_id, user_id, username, text):
        self.id = message_id
        self.user_id = user_id
        self.username = username
        self.text = text
        self.created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeMessageRepository:
    def __init__(self):
        self.storage = []

    def create(self, **data):
        message = StubMessage(len(self.storage) + 1, **data)
        self.storage.append(message)
        return message

    def recent(self, limit):
        return self.storage[-limit:]


class ChatServiceTests(TestCase):
    def setUp(self):
        self.repo = FakeMessageRepository()
        self.service = ChatService(messages=self.repo, history_limit=3)
        self.actor = Identity(id=7, username='ana', role='usuario')

    def test_post_message_stores_trimmed_text(self):
        dto = self.service.post_message(self.actor, '  hola  ')
        self.assertEqual(dto.text, 'hola')
        self.assertEqual(dto.username, 'ana')
        self.assertEqual(dto.user_id, 7)
        self.assertEqual(len(self.repo.storage), 1)

    def test_blank_or_non_string_text_is_dropped(self):
        self.assertIsNone(self.service.post_message(self.actor, '   '))
        self.assertIsNone(self.service.post_message(self.actor, 42))
        self.assertIsNone(self.service.post_message(self.actor, None))
        self.assertEqual(self.repo.storage, [])

    def test_post_requires_identity(self):
        with self.assertRaises(ApplicationError) as ctx:
            self.service.post_message(None, 'hola')
        self.assertEqual(ctx.exception.code, 'UNAUTHENTICATED')

    def test_list_messages_caps_limit(self):
        for i in range(5):
            self.service.post_message(self.actor, f'm{i}')
        self.assertEqual([m.text for m in self.service.list_messages(self.actor)], ['m2', 'm3', 'm4'])
        self.assertEqual([m.text for m in self.service.list_messages(self.actor, limit=100)], ['m2', 'm3', 'm4'])
        self.assertEqual([m.text for m in self.service.list_messages(self.actor, limit=1)], ['m4'])

    def test_list_requires_identity(self):
        with self.assertRaises(ApplicationError):
            self.service.list_messages(None)
