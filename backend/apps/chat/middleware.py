from typing import Optional
from urllib.parse import parse_qs

from channels.middleware import BaseMiddleware
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.auth.identity import Identity, bearer_token, identity_from_token
from apps.common import get_logger

logger = get_logger(__name__).bind(component="chat", layer="middleware")


def _raw_token(scope) -> Optional[str]:
    query = parse_qs((scope.get("query_string") or b"").decode("latin-1"))
    tokens = query.get("token")
    if tokens and tokens[0]:
        return tokens[0]
    headers = dict(scope.get("headers") or [])
    header = headers.get(b"authorization")
    return bearer_token(header.decode("latin-1")) if header else None


def resolve_scope_identity(scope) -> Optional[Identity]:
    """Identity for a websocket handshake, from ``?token=`` or an Authorization header."""
    raw = _raw_token(scope)
    if raw is None:
        return None
    try:
        return identity_from_token(raw)
    except InvalidToken as exc:
        logger.warning("Websocket token rejected", detail=str(exc))
        return None


class TokenAuthMiddleware(BaseMiddleware):
    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        scope["identity"] = resolve_scope_identity(scope)
        return await super().__call__(scope, receive, send)
