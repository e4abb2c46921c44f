from __future__ import annotations

from typing import List, Optional

from django.db import transaction

from apps.api.exceptions import BAD_REQUEST, NOT_FOUND, ApplicationError
from apps.auth.identity import Identity, require_admin
from apps.common import get_logger
from .dtos import UserDTO, user_to_dto
from .protocols import OwnedCartRepositoryProtocol, UserRepositoryProtocol
from .roles import Role

logger = get_logger(__name__).bind(component="users", layer="service")


class UserService:
    def __init__(
        self, users: UserRepositoryProtocol, carts: OwnedCartRepositoryProtocol
    ):
        self.users = users
        self.carts = carts
        self.logger = logger.bind(service="UserService")

    def _require_user(self, user_id: int):
        user = self.users.get(id=user_id)
        if not user:
            self.logger.info("User not found", user_id=user_id)
            raise ApplicationError(
                NOT_FOUND, "User not found", details={"id": str(user_id)}
            )
        return user

    def list_users(self, actor: Optional[Identity]) -> List[UserDTO]:
        require_admin(actor)
        self.logger.debug("Listing users", actor_id=actor.id)
        return [user_to_dto(u) for u in self.users.list()]

    def find_user(self, actor: Optional[Identity], user_id: int) -> Optional[UserDTO]:
        require_admin(actor)
        user = self.users.get(id=user_id)
        return user_to_dto(user) if user else None

    def get_user(self, actor: Optional[Identity], user_id: int) -> UserDTO:
        require_admin(actor)
        self.logger.debug("Fetching user", user_id=user_id)
        return user_to_dto(self._require_user(user_id))

    def update_role(self, actor: Optional[Identity], user_id: int, role: str) -> UserDTO:
        actor = require_admin(actor)
        if role not in Role.values:
            self.logger.info("Rejected unknown role", user_id=user_id, role=role)
            raise ApplicationError(
                BAD_REQUEST,
                "Invalid role",
                details={"role": role, "allowed": list(Role.values)},
            )
        user = self._require_user(user_id)
        user = self.users.update(user, role=role)
        self.logger.info(
            "User role updated", user_id=user_id, role=role, actor_id=actor.id
        )
        return user_to_dto(user)

    def delete_user(self, actor: Optional[Identity], user_id: int) -> None:
        """Delete an account and its cart. Orders keep their owner id and username."""
        actor = require_admin(actor)
        if actor.id == user_id:
            self.logger.warning("Admin attempted self-deletion", actor_id=actor.id)
            raise ApplicationError(BAD_REQUEST, "You cannot delete your own account")
        user = self._require_user(user_id)
        with transaction.atomic():
            self.carts.delete_for_user(user_id)
            self.users.delete(user)
        self.logger.info("User deleted", user_id=user_id, actor_id=actor.id)
