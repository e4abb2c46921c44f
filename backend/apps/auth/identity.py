"""Caller identity and the two authorization gates shared by every transport.

REST views, GraphQL resolvers and the chat websocket all resolve the bearer
token into an :class:`Identity` once, at the edge, and hand it to services
explicitly. Services only ever call :func:`require_authenticated` or
:func:`require_admin`; they never look at tokens or requests.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import AccessToken

from apps.api.exceptions import FORBIDDEN, UNAUTHENTICATED, ApplicationError
from apps.common import get_logger
from apps.users.roles import Role

logger = get_logger(__name__).bind(component="auth", layer="identity")


@dataclass(frozen=True)
class Identity:
    id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> "Identity":
        raw_id = claims.get(jwt_settings.USER_ID_CLAIM)
        if raw_id is None:
            raise InvalidToken("Token contained no recognizable user identification")
        return cls(
            id=int(raw_id),
            username=str(claims.get("username", "")),
            role=str(claims.get("role") or Role.USER),
        )

    @classmethod
    def from_user(cls, user) -> "Identity":
        return cls(id=int(user.id), username=user.username, role=user.role)


def identity_from_token(raw_token: str) -> Identity:
    """Verify an access token and build the caller identity from its claims.

    Raises ``InvalidToken`` when the token is malformed, expired or not an
    access token.
    """
    try:
        token = AccessToken(raw_token)
    except TokenError as exc:
        raise InvalidToken(str(exc)) from exc
    return Identity.from_claims(token.payload)


def bearer_token(header: Optional[str]) -> Optional[str]:
    if not header:
        return None
    parts = header.split()
    if len(parts) != 2 or parts[0] not in jwt_settings.AUTH_HEADER_TYPES:
        return None
    return parts[1]


def require_authenticated(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise ApplicationError(UNAUTHENTICATED, "Authentication required")
    return identity


def require_admin(identity: Optional[Identity]) -> Identity:
    identity = require_authenticated(identity)
    if not identity.is_admin:
        logger.warning("Admin role required", actor_id=identity.id, role=identity.role)
        raise ApplicationError(FORBIDDEN, "Admin role required")
    return identity


def add_identity_claims(token, identity: Identity):
    """Stamp the claims :meth:`Identity.from_claims` reads back onto ``token``."""
    token[jwt_settings.USER_ID_CLAIM] = identity.id
    token["username"] = identity.username
    token["role"] = identity.role
    return token


def issue_access_token(identity: Identity) -> str:
    return str(add_identity_claims(AccessToken(), identity))
