"""Edge-level route guard for page routes.

Only the presence of the auth-token cookie is checked here. Token
validity is enforced by the API decorators, not by the guard.
"""

from urllib.parse import quote
from flask import request, redirect

from askverba.utils.cookies import TOKEN_COOKIE

PROTECTED_ROUTES = ('/dashboard',)
AUTH_ROUTES = ('/login', '/register')

# Paths the guard never touches
SKIPPED_PREFIXES = ('/api', '/static', '/health', '/favicon.ico')


def classify_route(pathname):
    """Return 'protected', 'auth' or 'public' for a path."""
    if any(pathname.startswith(route) for route in PROTECTED_ROUTES):
        return 'protected'
    if any(pathname.startswith(route) for route in AUTH_ROUTES):
        return 'auth'
    return 'public'


def resolve_redirect(pathname, has_token):
    """Where to send the request, or None to let it through."""
    route_class = classify_route(pathname)

    if route_class == 'protected' and not has_token:
        return f"/login?redirect={quote(pathname, safe='/')}"

    if route_class == 'auth' and has_token:
        return '/dashboard'

    return None


def guard_request():
    """before_request hook applying resolve_redirect to page routes."""
    pathname = request.path
    if pathname.startswith(SKIPPED_PREFIXES):
        return None

    target = resolve_redirect(pathname, bool(request.cookies.get(TOKEN_COOKIE)))
    if target:
        return redirect(target)
    return None
