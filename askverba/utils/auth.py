"""Shared authentication utilities.

This module issues JWTs and provides the decorators used across all
route files. The token is read from the `auth-token` cookie first and
from an `Authorization: Bearer` header second.
"""

from datetime import datetime, timedelta
from functools import wraps
import time
from uuid import uuid4
from flask import request, jsonify, current_app
import jwt

from askverba.services.redis_client import is_token_revoked, revoke_token
from askverba.utils.cookies import get_auth_token


def _get_secret_key():
    """Get JWT secret from Flask app config (single source of truth)."""
    return current_app.config['JWT_SECRET_KEY']


def create_token(user):
    """Issue a signed token for the user."""
    payload = {
        'user_id': user.id,
        'email': user.email,
        'jti': uuid4().hex,
        'exp': datetime.utcnow() + timedelta(seconds=current_app.config['AUTH_TOKEN_EXPIRES'])
    }
    return jwt.encode(payload, _get_secret_key(), algorithm='HS256')


def decode_token(token):
    """Decode and verify a token. Raises jwt.InvalidTokenError subclasses."""
    payload = jwt.decode(token, _get_secret_key(), algorithms=['HS256'])
    if is_token_revoked(payload.get('jti')):
        raise jwt.InvalidTokenError('Token has been revoked')
    return payload


def get_request_token():
    """Token from the auth cookie, falling back to the Authorization header."""
    token = get_auth_token()
    if token:
        return token

    auth_header = request.headers.get('Authorization')
    if not auth_header:
        return None
    # Support both "Bearer <token>" and raw token formats
    return auth_header.split(' ')[1] if ' ' in auth_header else auth_header


def token_required(f):
    """
    Decorator to require a valid token.

    Extracts user_id from the token and passes it as the first argument
    to the decorated function.

    Usage:
        @bp.route('/protected')
        @token_required
        def protected_route(current_user_id):
            return jsonify({'user_id': current_user_id})
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_request_token()

        if not token:
            return jsonify({'error': 'Unauthorized'}), 401

        try:
            payload = decode_token(token)
            current_user_id = payload['user_id']
        except jwt.ExpiredSignatureError:
            return jsonify({'error': 'Token has expired'}), 401
        except (jwt.InvalidTokenError, KeyError):
            return jsonify({'error': 'Token is invalid'}), 401

        return f(current_user_id, *args, **kwargs)
    return decorated


def token_optional(f):
    """
    Decorator that optionally validates a token.

    Passes the user_id when a valid token is present, otherwise None.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_request_token()
        current_user_id = None

        if token:
            try:
                current_user_id = decode_token(token)['user_id']
            except (jwt.InvalidTokenError, KeyError):
                current_user_id = None

        return f(current_user_id, *args, **kwargs)
    return decorated


def invalidate_session(token):
    """Revoke a token server-side until its natural expiry.

    Errors from the revocation store propagate to the caller.
    """
    if not token:
        return False
    try:
        payload = jwt.decode(
            token, _get_secret_key(), algorithms=['HS256'],
            options={'verify_exp': False}
        )
    except jwt.InvalidTokenError:
        return False

    remaining = int(payload.get('exp', 0) - time.time())
    if remaining <= 0 or not payload.get('jti'):
        return False
    return revoke_token(payload['jti'], remaining)
