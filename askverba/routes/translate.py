"""Translation route: simple and detailed AI translation with caching."""

import logging
import time
from datetime import datetime
from uuid import uuid4
from flask import Blueprint, request, jsonify, current_app

from askverba.errors import TranslationError
from askverba.services.translation import MODES, translate_with_cache
from askverba.utils.auth import token_optional

logger = logging.getLogger(__name__)

translate_bp = Blueprint('translate', __name__)


def _validate_translation_request(data):
    """Return error message or None."""
    if not isinstance(data, dict) or not data:
        return 'Request body is required'

    text = data.get('text')
    if not isinstance(text, str) or not text.strip():
        return 'Text is required for translation'

    max_length = current_app.config['MAX_TEXT_LENGTH']
    if len(text) > max_length:
        return f'Text exceeds maximum length of {max_length} characters'

    if data.get('mode') not in MODES:
        return 'Translation mode must be either "simple" or "detailed"'

    if 'saveToHistory' in data and not isinstance(data['saveToHistory'], bool):
        return 'saveToHistory must be a boolean'

    return None


@translate_bp.route('', methods=['POST'])
@token_optional
def translate(current_user_id):
    """Translate text.

    Body:
        - text: English text
        - mode: 'simple' | 'detailed'
        - saveToHistory: optional, requires authentication
    """
    request_id = str(uuid4())
    start = time.perf_counter()

    data = request.get_json(silent=True)
    error = _validate_translation_request(data)
    if error:
        return jsonify({'error': error}), 400

    save_to_history = data.get('saveToHistory', False)
    if save_to_history and not current_user_id:
        return jsonify({'error': 'Authentication required to save translation history'}), 401

    try:
        response = translate_with_cache(
            text=data['text'],
            mode=data['mode'],
            user_id=current_user_id,
            save_to_history=save_to_history
        )
    except TranslationError as e:
        return jsonify({'error': e.message}), 500

    return jsonify({
        'success': True,
        'data': response,
        'meta': {
            'requestId': request_id,
            'timestamp': datetime.utcnow().isoformat() + 'Z',
            'totalProcessingTime': int((time.perf_counter() - start) * 1000),
            'mode': data['mode'],
            'cached': response['fromCache']
        }
    }), 200
