"""Redis client for shared cache and token revocation across workers."""

import json
import redis
import logging
import time
from flask import current_app

logger = logging.getLogger(__name__)

# Redis connection (lazy initialization)
_redis_client = None
_redis_url = None
_redis_failed_at = None

# Seconds to wait before reconnecting after a failed connection
RECONNECT_BACKOFF = 30


def get_redis():
    """Get or create Redis connection. Returns None when Redis is not configured."""
    global _redis_client, _redis_url, _redis_failed_at

    redis_url = current_app.config.get('REDIS_URL')

    if not redis_url:
        return None

    if _redis_client is not None and _redis_url == redis_url:
        return _redis_client

    if _redis_failed_at is not None and time.monotonic() - _redis_failed_at < RECONNECT_BACKOFF:
        return None

    try:
        client = redis.from_url(redis_url, decode_responses=True)
        # Test connection
        client.ping()
        _redis_client = client
        _redis_url = redis_url
        _redis_failed_at = None
        logger.info("Redis connected successfully")
        return _redis_client
    except Exception as e:
        _redis_failed_at = time.monotonic()
        logger.error(f"Redis connection failed, retrying in {RECONNECT_BACKOFF}s: {e}")
        return None


# Key prefixes
REVOKED_PREFIX = "auth:revoked:"


def get_json(key: str):
    """Read a JSON value. Returns None on miss, missing Redis or error."""
    r = get_redis()
    if not r:
        return None

    try:
        raw = r.get(key)
        return json.loads(raw) if raw else None
    except Exception as e:
        logger.warning(f"Redis get_json error for {key}: {e}")
        return None


def set_json(key: str, value, ttl: int = None) -> bool:
    """Store a JSON value, with TTL in seconds when given."""
    r = get_redis()
    if not r:
        return False

    try:
        payload = json.dumps(value)
        if ttl:
            r.setex(key, ttl, payload)
        else:
            r.set(key, payload)
        return True
    except Exception as e:
        logger.warning(f"Redis set_json error for {key}: {e}")
        return False


def revoke_token(jti: str, ttl: int) -> bool:
    """Mark a token id as revoked until it would have expired anyway.

    Errors propagate so the caller decides whether logout fails open.
    """
    r = get_redis()
    if not r:
        return False

    r.setex(f"{REVOKED_PREFIX}{jti}", max(int(ttl), 1), "1")
    return True


def is_token_revoked(jti: str) -> bool:
    """Check if a token id was revoked."""
    r = get_redis()
    if not r or not jti:
        return False

    try:
        return r.exists(f"{REVOKED_PREFIX}{jti}") > 0
    except Exception as e:
        logger.error(f"Redis is_token_revoked error: {e}")
        return False
