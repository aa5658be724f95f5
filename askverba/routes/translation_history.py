"""Translation history routes. Every entry is visible to its owner only."""

import logging
from datetime import datetime, timedelta
from flask import Blueprint, request, jsonify
from sqlalchemy import func, or_

from askverba import db
from askverba.errors import ValidationError
from askverba.models import TranslationHistory
from askverba.services.translation import MODES
from askverba.utils import token_required
from askverba.utils.validation import (
    get_pagination, parse_bool, parse_date, check_allowed_fields, get_json_object, paginated
)

logger = logging.getLogger(__name__)

history_bp = Blueprint('translation_history', __name__)

# Fields a user may change on a saved translation
UPDATABLE_FIELDS = {'isFavorite', 'translatedText'}


def _get_owned_entry(entry_id, user_id):
    return TranslationHistory.query.filter_by(id=entry_id, user_id=user_id).first()


@history_bp.route('', methods=['GET'])
@token_required
def get_history(current_user_id):
    """List the user's translations, newest first.
    
    Query params:
        - page, limit: pagination (limit max 100)
        - mode: 'simple' | 'detailed'
        - isFavorite: 'true' to only show favorites
        - search: substring of original or translated text
        - dateFrom, dateTo: ISO dates (inclusive)
    """
    try:
        page, limit = get_pagination()
        mode = request.args.get('mode')
        is_favorite = parse_bool(request.args.get('isFavorite'))
        search = request.args.get('search', '').strip()
        date_from = parse_date(request.args.get('dateFrom'), 'dateFrom')
        date_to = parse_date(request.args.get('dateTo'), 'dateTo')
        
        if mode and mode not in MODES:
            return jsonify({'error': 'mode must be simple or detailed'}), 400
        
        query = TranslationHistory.query.filter_by(user_id=current_user_id)
        
        if mode:
            query = query.filter_by(mode=mode)
        if is_favorite is not None:
            query = query.filter_by(is_favorite=is_favorite)
        if search:
            pattern = f'%{search}%'
            query = query.filter(or_(
                TranslationHistory.original_text.ilike(pattern),
                TranslationHistory.translated_text.ilike(pattern)
            ))
        if date_from:
            query = query.filter(TranslationHistory.created_at >= date_from)
        if date_to:
            # Date-only upper bound covers the whole day
            if len(request.args['dateTo']) <= 10:
                date_to = date_to + timedelta(days=1)
                query = query.filter(TranslationHistory.created_at < date_to)
            else:
                query = query.filter(TranslationHistory.created_at <= date_to)
        
        query = query.order_by(TranslationHistory.created_at.desc(), TranslationHistory.id.desc())
        return jsonify(paginated(query, page, limit)), 200
    except ValidationError as e:
        return jsonify({'error': e.message}), 400
    except Exception as e:
        logger.error(f"Error fetching translation history: {e}")
        return jsonify({'error': 'Failed to fetch translation history'}), 500


@history_bp.route('/stats', methods=['GET'])
@token_required
def get_history_stats(current_user_id):
    """Aggregate counts over the user's translation history."""
    try:
        base = TranslationHistory.query.filter_by(user_id=current_user_id)
        now = datetime.utcnow()
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        week_ago = now - timedelta(days=7)
        
        total, avg_chars, longest = db.session.query(
            func.count(TranslationHistory.id),
            func.avg(TranslationHistory.character_count),
            func.max(TranslationHistory.character_count)
        ).filter(TranslationHistory.user_id == current_user_id).one()
        
        # Per-day counts for the last 7 days, oldest first
        since = today - timedelta(days=6)
        recent = base.filter(TranslationHistory.created_at >= since).with_entities(
            TranslationHistory.created_at
        ).all()
        counts = {}
        for (created_at,) in recent:
            key = created_at.date().isoformat()
            counts[key] = counts.get(key, 0) + 1
        recent_activity = []
        for i in range(6, -1, -1):
            day = (today - timedelta(days=i)).date().isoformat()
            recent_activity.append({'date': day, 'count': counts.get(day, 0)})
        
        return jsonify({
            'totalTranslations': total,
            'todayTranslations': base.filter(TranslationHistory.created_at >= today).count(),
            'thisWeekTranslations': base.filter(TranslationHistory.created_at >= week_ago).count(),
            'favoriteTranslations': base.filter_by(is_favorite=True).count(),
            'averageCharacterCount': round(avg_chars) if avg_chars else 0,
            'longestTranslation': longest or 0,
            'recentActivity': recent_activity
        }), 200
    except Exception as e:
        logger.error(f"Error computing translation history stats: {e}")
        return jsonify({'error': 'Failed to fetch translation history stats'}), 500


@history_bp.route('/<int:entry_id>', methods=['GET'])
@token_required
def get_history_entry(current_user_id, entry_id):
    entry = _get_owned_entry(entry_id, current_user_id)
    if not entry:
        return jsonify({'error': 'Translation not found'}), 404
    return jsonify(entry.to_dict()), 200


@history_bp.route('/<int:entry_id>', methods=['PATCH'])
@token_required
def update_history_entry(current_user_id, entry_id):
    """Update favorite flag or corrected translation."""
    try:
        data = get_json_object()
        check_allowed_fields(data, UPDATABLE_FIELDS)
        
        entry = _get_owned_entry(entry_id, current_user_id)
        if not entry:
            return jsonify({'error': 'Translation not found'}), 404
        
        if 'isFavorite' in data:
            if not isinstance(data['isFavorite'], bool):
                return jsonify({'error': 'isFavorite must be a boolean'}), 400
            entry.is_favorite = data['isFavorite']
        
        if 'translatedText' in data:
            if not isinstance(data['translatedText'], str) or not data['translatedText'].strip():
                return jsonify({'error': 'translatedText must be a non-empty string'}), 400
            entry.translated_text = data['translatedText'].strip()
        
        db.session.commit()
        return jsonify(entry.to_dict()), 200
    except ValidationError as e:
        return jsonify({'error': e.message}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating translation history {entry_id}: {e}")
        return jsonify({'error': 'Failed to update translation history'}), 500


@history_bp.route('/<int:entry_id>', methods=['DELETE'])
@token_required
def delete_history_entry(current_user_id, entry_id):
    try:
        entry = _get_owned_entry(entry_id, current_user_id)
        if not entry:
            return jsonify({'error': 'Translation not found'}), 404
        
        db.session.delete(entry)
        db.session.commit()
        logger.info(f"Translation {entry_id} deleted by user {current_user_id}")
        return jsonify({'success': True, 'message': 'Translation deleted successfully'}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting translation history {entry_id}: {e}")
        return jsonify({'error': 'Failed to delete translation history'}), 500
