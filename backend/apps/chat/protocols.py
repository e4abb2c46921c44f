from __future__ import annotations

from typing import Iterable, Protocol

from .models import Message


class MessageRepositoryProtocol(Protocol):
    def create(self, **data) -> Message:
        ...

    def recent(self, limit: int) -> Iterable[Message]:
        ...
