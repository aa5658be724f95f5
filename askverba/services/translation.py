"""Translation service: cache, AI generation and history saving."""
import hashlib
import logging
import re
import time

from flask import current_app
from sqlalchemy.exc import IntegrityError

from askverba import db
from askverba.constants import SIMPLE_TRANSLATE_SYSTEM_PROMPT, DETAILED_TRANSLATE_SYSTEM_PROMPT
from askverba.errors import AIGenerationError, TranslationError
from askverba.schemas import SimpleTranslation, detailed_translation_adapter
from askverba.services import ai_client, redis_client

logger = logging.getLogger(__name__)

MODES = ('simple', 'detailed')

_WHITESPACE = re.compile(r'\s+')


def normalize_text(text: str) -> str:
    """Trim, collapse inner whitespace and lower-case."""
    return _WHITESPACE.sub(' ', text.strip()).lower()


def get_cache_key(text: str, mode: str) -> str:
    """Exact-match cache key for normalized text and mode."""
    text_hash = hashlib.sha256(normalize_text(text).encode('utf-8')).hexdigest()[:32]
    return f"translation:{mode}:{text_hash}"


# ---------------------------------------------------------------------------
# Result validation
# ---------------------------------------------------------------------------

def validate_simple_result(obj) -> dict:
    """Validate a simple-mode result. Raises pydantic.ValidationError."""
    return SimpleTranslation.model_validate(obj).model_dump()


def validate_detailed_result(obj) -> dict:
    """Validate a detailed result against the single_term/paragraph union."""
    return detailed_translation_adapter.validate_python(obj).model_dump()


def extract_translated_text(result: dict) -> str:
    """Plain translated text of a simple or detailed result."""
    if 'translation' in result:
        return result['translation']
    if result.get('type') == 'single_term':
        return result['data']['main_translation']
    return result['data']['full_translation']


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

def get_cached_translation(cache_key: str):
    """Return a cached result or None. Lookup errors count as a miss."""
    if redis_client.get_redis():
        return redis_client.get_json(cache_key)

    try:
        from askverba.models import TranslationCache
        cached = TranslationCache.query.filter_by(cache_key=cache_key).first()
        return cached.result if cached else None
    except Exception as e:
        logger.warning(f"Cache lookup error: {e}")
        return None


def cache_translation(cache_key: str, mode: str, text: str, result: dict):
    """Store a translation result. Failures are logged and ignored."""
    if redis_client.get_redis():
        redis_client.set_json(cache_key, result, current_app.config.get('TRANSLATION_CACHE_TTL'))
        return

    from askverba.models import TranslationCache
    try:
        db.session.add(TranslationCache(
            cache_key=cache_key,
            mode=mode,
            original_text=text[:500],
            result=result
        ))
        db.session.commit()
    except IntegrityError:
        # Same key written by a concurrent request
        db.session.rollback()
    except Exception as e:
        logger.warning(f"Cache storage error: {e}")
        db.session.rollback()


# ---------------------------------------------------------------------------
# AI generation
# ---------------------------------------------------------------------------

def get_model_for_mode(mode: str) -> str:
    if mode == 'simple':
        return current_app.config.get('AI_SIMPLE_MODEL')
    return current_app.config.get('AI_DETAILED_MODEL')


def generate_translation(text: str, mode: str) -> dict:
    """Call the AI with the schema for the mode."""
    if mode == 'simple':
        return ai_client.generate_object(
            SIMPLE_TRANSLATE_SYSTEM_PROMPT, text, validate_simple_result,
            model=get_model_for_mode(mode)
        )
    return ai_client.generate_object(
        DETAILED_TRANSLATE_SYSTEM_PROMPT, text, validate_detailed_result,
        model=get_model_for_mode(mode)
    )


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------

def _create_history_entry(user_id, text, mode, result, processing_time):
    from askverba.models import TranslationHistory
    entry = TranslationHistory(
        user_id=user_id,
        original_text=text,
        translated_text=extract_translated_text(result),
        mode=mode,
        result=result,
        processing_time=processing_time,
        ai_model=get_model_for_mode(mode)
    )
    db.session.add(entry)
    db.session.commit()
    return entry


def save_translation_to_history(user_id, text, mode, result, processing_time):
    """Best-effort history write. Never raises."""
    try:
        entry = _create_history_entry(user_id, text, mode, result, processing_time)
        logger.debug(f"Translation saved to history for user {user_id} (mode={mode})")
        return entry
    except Exception as e:
        logger.error(f"Failed to save translation history for user {user_id}: {e}")
        db.session.rollback()
        return None


# ---------------------------------------------------------------------------
# Request handler
# ---------------------------------------------------------------------------

def translate_with_cache(text: str, mode: str, user_id=None, save_to_history: bool = False) -> dict:
    """
    Translate text with caching and optional history saving.

    Args:
        text: English text to translate
        mode: 'simple' or 'detailed'
        user_id: Owner for the history entry
        save_to_history: Persist the result when user_id is given

    Returns:
        {'result': ..., 'fromCache': bool, 'processingTime': ms}

    Raises:
        TranslationError: for any AI generation failure
    """
    start = time.perf_counter()
    cache_key = get_cache_key(text, mode)

    result = get_cached_translation(cache_key)
    from_cache = result is not None

    if from_cache:
        logger.debug(f"Translation cache hit: {cache_key}")
    else:
        logger.debug(f"Translation cache miss: {cache_key}")
        try:
            result = generate_translation(text, mode)
        except AIGenerationError as e:
            logger.error(f"Translation failed (mode={mode}, length={len(text)}): {e}")
            raise TranslationError() from e
        except Exception as e:
            logger.exception(f"Unexpected translation error (mode={mode}): {e}")
            raise TranslationError() from e

        cache_translation(cache_key, mode, text, result)
        logger.info(f"Translation completed (mode={mode}, length={len(text)})")

    processing_time = int((time.perf_counter() - start) * 1000)

    if save_to_history and user_id:
        save_translation_to_history(user_id, text, mode, result, processing_time)

    return {
        'result': result,
        'fromCache': from_cache,
        'processingTime': processing_time
    }
