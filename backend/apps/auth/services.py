from __future__ import annotations

from typing import Any, Dict, Optional

from django.db import IntegrityError

from apps.api.exceptions import BAD_REQUEST, NOT_FOUND, ApplicationError
from apps.common import get_logger
from apps.users.roles import Role
from .identity import Identity, require_authenticated
from .protocols import UserRegistrationRepositoryProtocol

logger = get_logger(__name__).bind(component="auth", service="RegistrationService")


def _profile(user) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "role": user.role,
        "createdAt": user.date_joined,
    }


class RegistrationService:
    def __init__(self, users: UserRegistrationRepositoryProtocol):
        self.users = users
        self.logger = logger

    def _username_taken(self, username: str) -> ApplicationError:
        self.logger.info("Registration rejected: username already exists", username=username)
        return ApplicationError(
            BAD_REQUEST, "Username already exists", details={"username": username}
        )

    def register(self, data: Dict[str, Any]) -> Dict[str, Any]:
        username = data["username"].strip()
        self.logger.debug("Received registration request", username=username)
        if self.users.username_exists(username):
            raise self._username_taken(username)
        try:
            user = self.users.create_user(
                username=username, password=data["password"], role=Role.USER
            )
        except IntegrityError as exc:
            # Lost a race against a concurrent registration of the same name.
            raise self._username_taken(username) from exc
        self.logger.info(
            "User registered successfully", user_id=user.id, username=user.username
        )
        return _profile(user)

    def profile(self, actor: Optional[Identity]) -> Dict[str, Any]:
        actor = require_authenticated(actor)
        user = self.users.get_by_id(actor.id)
        if not user:
            self.logger.info("Profile requested for deleted account", user_id=actor.id)
            raise ApplicationError(NOT_FOUND, "User not found", details={"id": str(actor.id)})
        return _profile(user)
