"""Translation of service errors into GraphQL errors carrying ``extensions.code``."""
from functools import wraps

from graphql import GraphQLError

from apps.api.exceptions import BAD_REQUEST, ApplicationError
from apps.common import get_logger

logger = get_logger(__name__).bind(component="gql", layer="errors")


def to_graphql_error(exc: ApplicationError) -> GraphQLError:
    extensions = {"code": exc.code}
    if exc.details is not None:
        extensions["details"] = exc.details
    return GraphQLError(exc.message, extensions=extensions)


def translate_errors(resolver):
    @wraps(resolver)
    def wrapper(*args, **kwargs):
        try:
            return resolver(*args, **kwargs)
        except ApplicationError as exc:
            logger.info("Handled application error", code=exc.code, resolver=resolver.__name__)
            raise to_graphql_error(exc) from exc

    return wrapper


def parse_id(value, field: str = "id") -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ApplicationError(
            BAD_REQUEST, f"Invalid {field}", details={field: value}
        ) from None
