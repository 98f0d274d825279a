"""
View guards built on request.ctx

Pages redirect anonymous visitors to the sign-in page and answer 403 to
members without the required role. JSON endpoints answer 401/403 with an
{"error": ...} body instead.
"""
from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.core.exceptions import PermissionDenied
from django.http import JsonResponse

from apps.core.errors import AuthorizationError, Forbidden, Unauthorized


def context_required(view_func=None, *, admin=False):
    """Page guard: @context_required or @context_required(admin=True)."""

    def decorator(func):
        @wraps(func)
        def wrapper(request, *args, **kwargs):
            try:
                if admin:
                    request.ctx.require_admin()
                else:
                    request.ctx.require_user()
                return func(request, *args, **kwargs)
            except Unauthorized:
                return redirect_to_login(request.get_full_path())
            except Forbidden as e:
                raise PermissionDenied(e.message)
        return wrapper

    if view_func is not None:
        return decorator(view_func)
    return decorator


def api_context_required(view_func=None, *, admin=False):
    """JSON guard: maps authorization errors to 401/403 JSON responses."""

    def decorator(func):
        @wraps(func)
        def wrapper(request, *args, **kwargs):
            try:
                if admin:
                    request.ctx.require_admin()
                else:
                    request.ctx.require_user()
                return func(request, *args, **kwargs)
            except AuthorizationError as e:
                return JsonResponse({'error': e.message}, status=e.status_code)
        return wrapper

    if view_func is not None:
        return decorator(view_func)
    return decorator
