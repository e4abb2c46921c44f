from django.utils.deprecation import MiddlewareMixin
from rest_framework.renderers import JSONRenderer
from apps.api.validation import validate_request_context
from apps.common import get_logger

logger = get_logger(__name__).bind(component='api', layer='middleware')


class RequestValidationMiddleware(MiddlewareMixin):
    """
    Resolves the caller identity and applies the view's access policy before
    the view runs, so REST views and the GraphQL endpoint see the same
    ``request.identity``.
    """

    def process_view(self, request, view_func, view_args, view_kwargs):
        view_class = getattr(view_func, 'view_class', None)
        if not view_class:
            return None
        response = validate_request_context(request, view_class, view_kwargs)
        if response is not None:
            logger.info(
                'Request blocked by validation',
                view=getattr(view_class, '__name__', str(view_class)),
                method=getattr(request, 'method', None),
                status=getattr(response, 'status_code', None),
            )
            # process_view responses skip DRF's finalize step, so render here.
            response.accepted_renderer = JSONRenderer()
            response.accepted_media_type = 'application/json'
            response.renderer_context = {}
            response.render()
        return response
