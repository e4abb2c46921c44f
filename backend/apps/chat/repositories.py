from apps.common.repository import GenericRepository
from .models import Message


class MessageRepository(GenericRepository[Message]):
    def __init__(self):
        super().__init__(Message)

    def recent(self, limit: int):
        """The ``limit`` newest messages, returned oldest first."""
        newest = self.model.objects.order_by("-created_at", "-id")[:limit]
        return list(reversed(list(newest)))
