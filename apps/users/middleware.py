import logging

from django.conf import settings

from .context import RequestContext
from .identity import sync_identity

logger = logging.getLogger(__name__)


def build_request_context(request):
    """
    Resolve the member behind a request.

    The identity proxy's headers win; a Django session (admin site) is used
    otherwise. The proxy must strip these headers from client requests.
    """
    external_id = request.META.get(settings.IDENTITY_USER_ID_HEADER)
    if external_id:
        user = sync_identity(
            external_id,
            email=request.META.get(settings.IDENTITY_EMAIL_HEADER),
            name=request.META.get(settings.IDENTITY_NAME_HEADER),
        )
        return RequestContext.for_user(user)

    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        return RequestContext.for_user(user)

    return RequestContext.anonymous()


class RequestContextMiddleware:
    """Attaches request.ctx (RequestContext) to every request"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.ctx = build_request_context(request)
        return self.get_response(request)
