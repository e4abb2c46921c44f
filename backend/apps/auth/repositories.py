from __future__ import annotations

from typing import Any, Optional

from django.contrib.auth import get_user_model

from .protocols import UserRegistrationRepositoryProtocol


class DjangoUserRegistrationRepository(UserRegistrationRepositoryProtocol):
    def __init__(self) -> None:
        self.model = get_user_model()

    def username_exists(self, username: str) -> bool:
        return self.model.objects.filter(username__iexact=username).exists()

    def create_user(self, *, username: str, password: str, **extra: Any):
        return self.model.objects.create_user(username=username, password=password, **extra)

    def get_by_id(self, user_id: int) -> Optional[Any]:
        return self.model.objects.filter(id=user_id).first()
