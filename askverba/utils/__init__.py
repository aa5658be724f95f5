"""Shared utilities for the AskVerba backend.

This package contains reusable utilities that are shared across
multiple route files to reduce code duplication.
"""

from askverba.utils.auth import (
    token_required,
    token_optional,
    create_token,
    decode_token,
)
from askverba.utils.cookies import (
    get_auth_token,
    get_customer,
    set_auth_cookies,
    clear_auth_cookies,
)

__all__ = [
    'token_required',
    'token_optional',
    'create_token',
    'decode_token',
    'get_auth_token',
    'get_customer',
    'set_auth_cookies',
    'clear_auth_cookies',
]
