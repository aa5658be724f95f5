"""Auth cookie bridge.

Two cookies carry the session: the JWT in `auth-token` and a small JSON
customer record in `auth-customer`. Both live for 7 days.
"""

import json
import logging
from urllib.parse import quote, unquote

from flask import request, current_app

logger = logging.getLogger(__name__)

TOKEN_COOKIE = 'auth-token'
CUSTOMER_COOKIE = 'auth-customer'
COOKIE_MAX_AGE = 7 * 24 * 60 * 60  # 7 days


def get_auth_token():
    """Token from the request cookies, or None."""
    return request.cookies.get(TOKEN_COOKIE) or None


def get_customer():
    """Customer record from the request cookies, or None if missing/unparsable."""
    raw = request.cookies.get(CUSTOMER_COOKIE)
    if not raw:
        return None
    try:
        return json.loads(unquote(raw))
    except (ValueError, TypeError) as e:
        logger.warning(f"Could not parse {CUSTOMER_COOKIE} cookie: {e}")
        return None


def _cookie_options():
    return {
        'max_age': COOKIE_MAX_AGE,
        'path': '/',
        'samesite': 'Strict',
        'secure': current_app.config.get('COOKIE_SECURE', False),
        'httponly': False,
    }


def set_auth_cookies(response, token, customer):
    """Attach both auth cookies to a response."""
    options = _cookie_options()
    response.set_cookie(TOKEN_COOKIE, token, **options)
    response.set_cookie(CUSTOMER_COOKIE, quote(json.dumps(customer, separators=(',', ':'))), **options)
    return response


def clear_auth_cookies(response):
    """Expire both auth cookies."""
    response.delete_cookie(TOKEN_COOKIE, path='/', samesite='Strict')
    response.delete_cookie(CUSTOMER_COOKIE, path='/', samesite='Strict')
    return response
