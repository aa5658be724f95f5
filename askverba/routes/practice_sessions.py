"""Practice routes: picking words for a session and recording completed sessions."""

import logging
import random
from datetime import datetime
from flask import Blueprint, jsonify
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import func

from askverba import db
from askverba.errors import ValidationError
from askverba.models import PracticeSession, Vocabulary
from askverba.models.practice_session import SESSION_TYPES
from askverba.schemas import PracticeStartRequest, error_details
from askverba.utils import token_required
from askverba.utils.validation import check_allowed_fields, get_json_object, get_pagination, paginated

logger = logging.getLogger(__name__)

practice_bp = Blueprint('practice', __name__)
practice_sessions_bp = Blueprint('practice_sessions', __name__)

# Fields a user may change on a recorded session
UPDATABLE_FIELDS = {'sessionType', 'totalWords', 'correctAnswers', 'timeSpent'}


def _is_count(value):
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _validate_session_data(data):
    """Validate a completed session. Returns error message or None."""
    if data.get('sessionType', 'flashcard') not in SESSION_TYPES:
        return f"sessionType must be one of: {', '.join(SESSION_TYPES)}"

    for field in ('totalWords', 'correctAnswers'):
        if not _is_count(data.get(field)):
            return f"{field} must be a non-negative integer"

    if data['correctAnswers'] > data['totalWords']:
        return "correctAnswers cannot exceed totalWords"

    if 'timeSpent' in data and not _is_count(data['timeSpent']):
        return "timeSpent must be a non-negative integer"

    return None


def _get_owned_session(session_id, user_id):
    return PracticeSession.query.filter_by(id=session_id, user_id=user_id).first()


def get_words_for_practice(user_id, limit, difficulty=None, status=None):
    """Words that most need practice first.

    Never-practiced words come first, then the least recently practiced,
    then the lowest accuracy, newest words breaking ties.
    """
    query = Vocabulary.query.filter_by(user_id=user_id)
    if difficulty:
        query = query.filter_by(difficulty=difficulty)
    if status:
        query = query.filter_by(status=status)

    return query.order_by(
        Vocabulary.last_practiced.is_(None).desc(),
        Vocabulary.last_practiced.asc(),
        Vocabulary.accuracy.asc(),
        Vocabulary.created_at.desc(),
        Vocabulary.id.desc()
    ).limit(limit).all()


@practice_bp.route('/start', methods=['POST'])
@token_required
def start_practice(current_user_id):
    """Pick the words for a new practice session.

    Body params:
        - sessionType: flashcard | typing | multiple_choice | mixed
        - wordCount: 1-100
        - difficulty, status: optional filters
        - includeDefinitions, includeExamples, shuffleWords: bools
        - timeLimit: optional seconds
    """
    try:
        config = PracticeStartRequest.model_validate(get_json_object())
    except ValidationError as e:
        return jsonify({'error': e.message}), 400
    except SchemaValidationError as e:
        return jsonify({'error': 'Invalid request data', 'details': error_details(e)}), 400

    try:
        words = get_words_for_practice(
            current_user_id,
            limit=config.word_count,
            difficulty=config.difficulty,
            status=config.status
        )

        if not words:
            return jsonify({'error': 'No vocabulary words found for practice. Please add some words first.'}), 404

        if config.shuffle_words:
            random.shuffle(words)

        return jsonify({
            'success': True,
            'words': [word.to_dict() for word in words],
            'config': {
                'sessionType': config.session_type,
                'includeDefinitions': config.include_definitions,
                'includeExamples': config.include_examples,
                'timeLimit': config.time_limit,
                'shuffleWords': config.shuffle_words
            },
            'message': f"Found {len(words)} words for practice"
        }), 200
    except Exception as e:
        logger.error(f"Error starting practice session: {e}")
        return jsonify({'error': 'Failed to start practice session'}), 500


@practice_sessions_bp.route('', methods=['POST'])
@token_required
def create_session(current_user_id):
    """Record a completed practice session.

    Body params:
        - sessionType: flashcard | typing | multiple_choice | mixed
        - totalWords, correctAnswers: counts
        - timeSpent: seconds
    """
    try:
        data = get_json_object()
        error = _validate_session_data(data)
        if error:
            return jsonify({'error': error}), 400

        session = PracticeSession(
            user_id=current_user_id,
            session_type=data.get('sessionType', 'flashcard'),
            total_words=data['totalWords'],
            correct_answers=data['correctAnswers'],
            time_spent=data.get('timeSpent', 0),
            completed_at=datetime.utcnow()
        )
        session.calculate_score()

        db.session.add(session)
        db.session.commit()

        return jsonify(session.to_dict()), 201
    except ValidationError as e:
        return jsonify({'error': e.message}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating practice session: {e}")
        return jsonify({'error': 'Failed to create practice session'}), 500


@practice_sessions_bp.route('', methods=['GET'])
@token_required
def get_sessions(current_user_id):
    try:
        page, limit = get_pagination()
        query = PracticeSession.query.filter_by(user_id=current_user_id).order_by(
            PracticeSession.created_at.desc(), PracticeSession.id.desc()
        )
        return jsonify(paginated(query, page, limit)), 200
    except Exception as e:
        logger.error(f"Error fetching practice sessions: {e}")
        return jsonify({'error': 'Failed to fetch practice sessions'}), 500


@practice_sessions_bp.route('/stats', methods=['GET'])
@token_required
def get_session_stats(current_user_id):
    try:
        total, words, avg_score, time_spent, best = db.session.query(
            func.count(PracticeSession.id),
            func.sum(PracticeSession.total_words),
            func.avg(PracticeSession.score),
            func.sum(PracticeSession.time_spent),
            func.max(PracticeSession.score)
        ).filter(PracticeSession.user_id == current_user_id).one()

        return jsonify({
            'totalSessions': total,
            'totalWordsPracticed': words or 0,
            'averageScore': round(avg_score) if avg_score else 0,
            'totalTimeSpent': time_spent or 0,
            'bestScore': best or 0
        }), 200
    except Exception as e:
        logger.error(f"Error computing practice stats: {e}")
        return jsonify({'error': 'Failed to fetch practice stats'}), 500


@practice_sessions_bp.route('/<int:session_id>', methods=['GET'])
@token_required
def get_session(current_user_id, session_id):
    session = _get_owned_session(session_id, current_user_id)
    if not session:
        return jsonify({'error': 'Practice session not found'}), 404
    return jsonify(session.to_dict()), 200


@practice_sessions_bp.route('/<int:session_id>', methods=['PATCH'])
@token_required
def update_session(current_user_id, session_id):
    """Correct a recorded session. The score is recalculated."""
    try:
        data = get_json_object()
        check_allowed_fields(data, UPDATABLE_FIELDS)

        session = _get_owned_session(session_id, current_user_id)
        if not session:
            return jsonify({'error': 'Practice session not found'}), 404

        merged = {
            'sessionType': session.session_type,
            'totalWords': session.total_words,
            'correctAnswers': session.correct_answers,
            'timeSpent': session.time_spent,
        }
        merged.update(data)
        error = _validate_session_data(merged)
        if error:
            return jsonify({'error': error}), 400

        session.session_type = merged['sessionType']
        session.total_words = merged['totalWords']
        session.correct_answers = merged['correctAnswers']
        session.time_spent = merged['timeSpent']
        session.calculate_score()

        db.session.commit()
        return jsonify(session.to_dict()), 200
    except ValidationError as e:
        return jsonify({'error': e.message}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating practice session {session_id}: {e}")
        return jsonify({'error': 'Failed to update practice session'}), 500


@practice_sessions_bp.route('/<int:session_id>', methods=['DELETE'])
@token_required
def delete_session(current_user_id, session_id):
    try:
        session = _get_owned_session(session_id, current_user_id)
        if not session:
            return jsonify({'error': 'Practice session not found'}), 404

        db.session.delete(session)
        db.session.commit()
        return jsonify({'success': True}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting practice session {session_id}: {e}")
        return jsonify({'error': 'Failed to delete practice session'}), 500
