from graphene_django.views import GraphQLView
from graphql import GraphQLError
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.exceptions import BAD_REQUEST, GENERIC_SERVER_MESSAGE, INTERNAL_ERROR
from apps.api.validation import resolve_identity
from apps.common import get_logger

logger = get_logger(__name__).bind(component="gql", layer="view")


class StoreGraphQLView(GraphQLView):
    """
    GraphQL endpoint. The caller identity is resolved from the bearer token
    once per request; a token that fails verification leaves the caller
    anonymous instead of failing the whole request.
    """

    def get_context(self, request):
        if not hasattr(request, "identity"):
            try:
                request.identity = resolve_identity(request)
            except InvalidToken as exc:
                logger.warning("GraphQL bearer token rejected", detail=str(exc))
                request.identity = None
        return request

    @staticmethod
    def format_error(error):
        if not isinstance(error, GraphQLError):
            logger.error("Unexpected GraphQL error", error=repr(error))
            return {"message": GENERIC_SERVER_MESSAGE, "extensions": {"code": INTERNAL_ERROR}}

        formatted = error.formatted
        extensions = dict(formatted.get("extensions") or {})
        if "code" not in extensions:
            original = getattr(error, "original_error", None)
            if original is not None and not isinstance(original, GraphQLError):
                logger.error(
                    "Unhandled exception in resolver",
                    path=formatted.get("path"),
                    error=repr(original),
                )
                formatted["message"] = GENERIC_SERVER_MESSAGE
                extensions["code"] = INTERNAL_ERROR
            else:
                # Syntax and validation errors raised by graphql-core itself.
                extensions["code"] = BAD_REQUEST
        formatted["extensions"] = extensions
        return formatted
