from __future__ import annotations

from typing import Any, Optional, Protocol


class UserRegistrationRepositoryProtocol(Protocol):
    def username_exists(self, username: str) -> bool:
        ...

    def create_user(self, *, username: str, password: str, **extra: Any):
        ...

    def get_by_id(self, user_id: int) -> Optional[Any]:
        ...
