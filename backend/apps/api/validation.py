from typing import Any, Mapping, Optional

from django.http import HttpRequest
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.utils import error_response
from apps.auth.identity import Identity, bearer_token, identity_from_token
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="validation")

PUBLIC = "public"
AUTHENTICATED = "authenticated"
ADMIN = "admin"


def _authorization_header(request: HttpRequest) -> Optional[str]:
    meta = getattr(request, "META", None) or {}
    return meta.get("HTTP_AUTHORIZATION")


def resolve_identity(request: HttpRequest) -> Optional[Identity]:
    """
    Resolve the bearer token on ``request`` into an Identity.

    Returns None when no bearer token was sent; raises ``InvalidToken`` when
    one was sent but does not verify.
    """
    raw = bearer_token(_authorization_header(request))
    if raw is None:
        return None
    return identity_from_token(raw)


def policy_for(view_class, method: str) -> str:
    policies: Mapping[str, str] = getattr(view_class, "access_policy", None) or {}
    return policies.get(method.upper(), policies.get("*", PUBLIC))


def validate_request_context(request: HttpRequest, view_class, view_kwargs) -> Any:
    """
    Attach ``request.identity`` and enforce the view's ``access_policy``.

    Returns a DRF Response when the request must be rejected; otherwise None.
    Views without an ``access_policy`` are public. A token that fails
    verification is rejected on protected views and ignored on public ones.
    """
    view_name = getattr(view_class, "__name__", "")
    method = getattr(request, "method", "") or ""
    policy = policy_for(view_class, method)

    try:
        identity = resolve_identity(request)
    except InvalidToken as exc:
        logger.warning("Bearer token rejected", view=view_name, detail=str(exc))
        identity = None
        if policy != PUBLIC:
            return error_response("UNAUTHENTICATED", "Invalid or expired token")
    request.identity = identity

    if policy == PUBLIC:
        return None
    if identity is None:
        logger.warning(
            "Authentication required", view=view_name, method=method
        )
        return error_response("UNAUTHENTICATED", "Authentication required")
    if policy == ADMIN and not identity.is_admin:
        logger.warning(
            "Admin role required",
            view=view_name,
            method=method,
            actor_id=identity.id,
        )
        return error_response("FORBIDDEN", "Admin role required")
    logger.debug(
        "Validated request context",
        view=view_name,
        method=method,
        actor_id=identity.id,
        policy=policy,
    )
    return None
