"""
Decorators for API request handling.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any

from django.http import HttpRequest, JsonResponse

from apps.web.core.exceptions import Unauthorized


def api_login_required(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator that rejects anonymous API requests with a JSON 401.

    Unlike django's login_required this never redirects to a login page,
    so fetch() callers get a payload they can render.

    Usage:
        @api_login_required
        def checkout(request):
            ...
    """

    @wraps(view_func)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> Any:
        if not request.user.is_authenticated:
            error = Unauthorized()
            return JsonResponse(error.to_payload(), status=error.status_code)

        return view_func(request, *args, **kwargs)

    return wrapper
