from apps.common.repository import GenericRepository
from .models import User


class UserRepository(GenericRepository[User]):
    ordering = ("-date_joined", "-id")

    def __init__(self):
        super().__init__(User)

    def create_user(self, **data) -> User:
        return User.objects.create_user(**data)
