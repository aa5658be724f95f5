"""Vocabulary routes: CRUD, practice progress, AI extraction and Anki export."""

import logging
from flask import Blueprint, request, jsonify, Response
from sqlalchemy import func, or_

from askverba import db
from askverba.errors import AIGenerationError, ValidationError
from askverba.models import Vocabulary
from askverba.models.vocabulary import WORD_TYPES, DIFFICULTIES, STATUSES
from askverba.services.anki_export import (
    AnkiExportOptions, CARD_TYPES, FORMATS, clean_deck_name, export_vocabulary
)
from askverba.services.vocabulary import extract_vocabulary, save_extracted_vocabulary
from askverba.utils import token_required
from askverba.utils.validation import (
    get_pagination, parse_bool, check_allowed_fields, check_choice, get_json_object, paginated
)

logger = logging.getLogger(__name__)

vocabulary_bp = Blueprint('vocabulary', __name__)

# Request key -> model attribute
FIELD_MAP = {
    'word': 'word',
    'translation': 'translation',
    'type': 'word_type',
    'difficulty': 'difficulty',
    'context': 'context',
    'definition': 'definition',
    'pronunciation': 'pronunciation',
    'tags': 'tags',
    'status': 'status',
    'sourceLanguage': 'source_language',
    'targetLanguage': 'target_language',
}

# String length limits
LENGTH_LIMITS = {
    'word': 200,
    'translation': 500,
    'pronunciation': 200,
    'context': 2000,
    'definition': 2000,
    'sourceLanguage': 40,
    'targetLanguage': 40,
}

# Columns without a null state
NOT_NULL_FIELDS = ('difficulty', 'status', 'sourceLanguage', 'targetLanguage')

MAX_EXTRACT_LENGTH = 2000


def _validate_vocabulary_data(data, partial=False):
    """Validate create/update fields. Raises ValidationError."""
    check_allowed_fields(data, FIELD_MAP.keys())
    
    for field in ('word', 'translation'):
        if (not partial or field in data) and (
                not isinstance(data.get(field), str) or not data[field].strip()):
            raise ValidationError(f"{field} is required")
    
    for field in NOT_NULL_FIELDS:
        if field in data and data[field] is None:
            raise ValidationError(f"{field} cannot be null")
    
    for field, max_len in LENGTH_LIMITS.items():
        if field in data and data[field] is not None:
            if not isinstance(data[field], str):
                raise ValidationError(f"{field} must be a string")
            if len(data[field]) > max_len:
                raise ValidationError(f"{field} must be less than {max_len} characters")
    
    check_choice(data, 'type', WORD_TYPES)
    check_choice(data, 'difficulty', DIFFICULTIES)
    check_choice(data, 'status', STATUSES)
    
    if 'tags' in data and data['tags'] is not None:
        tags = data['tags']
        if not isinstance(tags, list) or len(tags) > 20:
            raise ValidationError("tags must be a list of at most 20 items")
        for tag in tags:
            if not isinstance(tag, str) or len(tag) > 50:
                raise ValidationError("Each tag must be a string under 50 characters")


def _apply_fields(vocab, data):
    for key, attr in FIELD_MAP.items():
        if key in data:
            value = data[key]
            if isinstance(value, str):
                value = value.strip()
            setattr(vocab, attr, value)


def _word_exists(user_id, word, exclude_id=None):
    query = Vocabulary.query.filter(
        Vocabulary.user_id == user_id,
        func.lower(Vocabulary.word) == word.strip().lower()
    )
    if exclude_id:
        query = query.filter(Vocabulary.id != exclude_id)
    return query.first() is not None


def _get_owned_item(vocab_id, user_id):
    return Vocabulary.query.filter_by(id=vocab_id, user_id=user_id).first()


@vocabulary_bp.route('', methods=['GET'])
@token_required
def get_vocabulary(current_user_id):
    """List the user's vocabulary.
    
    Query params:
        - page, limit: pagination
        - status, difficulty, type: exact filters
        - search: substring of word or translation
    """
    try:
        page, limit = get_pagination()
        query = Vocabulary.query.filter_by(user_id=current_user_id)
        
        status = request.args.get('status')
        difficulty = request.args.get('difficulty')
        word_type = request.args.get('type')
        search = request.args.get('search', '').strip()
        
        if status:
            query = query.filter_by(status=status)
        if difficulty:
            query = query.filter_by(difficulty=difficulty)
        if word_type:
            query = query.filter_by(word_type=word_type)
        if search:
            pattern = f'%{search}%'
            query = query.filter(or_(
                Vocabulary.word.ilike(pattern),
                Vocabulary.translation.ilike(pattern)
            ))
        
        query = query.order_by(Vocabulary.created_at.desc(), Vocabulary.id.desc())
        return jsonify(paginated(query, page, limit)), 200
    except Exception as e:
        logger.error(f"Error fetching vocabulary: {e}")
        return jsonify({'error': 'Failed to fetch vocabulary'}), 500


@vocabulary_bp.route('', methods=['POST'])
@token_required
def create_vocabulary(current_user_id):
    """Add a word manually."""
    try:
        data = get_json_object()
        _validate_vocabulary_data(data)
        
        if _word_exists(current_user_id, data['word']):
            return jsonify({'error': 'Word already in vocabulary'}), 409
        
        vocab = Vocabulary(user_id=current_user_id)
        _apply_fields(vocab, data)
        db.session.add(vocab)
        db.session.commit()
        
        return jsonify(vocab.to_dict()), 201
    except ValidationError as e:
        return jsonify({'error': e.message}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating vocabulary: {e}")
        return jsonify({'error': 'Failed to create vocabulary'}), 500


@vocabulary_bp.route('/stats', methods=['GET'])
@token_required
def get_vocabulary_stats(current_user_id):
    try:
        rows = db.session.query(
            Vocabulary.status, func.count(Vocabulary.id)
        ).filter(
            Vocabulary.user_id == current_user_id
        ).group_by(Vocabulary.status).all()
        counts = dict(rows)
        
        return jsonify({
            'totalWords': sum(counts.values()),
            'masteredWords': counts.get('mastered', 0),
            'learningWords': counts.get('learning', 0),
            'newWords': counts.get('new', 0)
        }), 200
    except Exception as e:
        logger.error(f"Error computing vocabulary stats: {e}")
        return jsonify({'error': 'Failed to fetch vocabulary stats'}), 500


@vocabulary_bp.route('/<int:vocab_id>', methods=['GET'])
@token_required
def get_vocabulary_item(current_user_id, vocab_id):
    vocab = _get_owned_item(vocab_id, current_user_id)
    if not vocab:
        return jsonify({'error': 'Vocabulary not found'}), 404
    return jsonify(vocab.to_dict()), 200


@vocabulary_bp.route('/<int:vocab_id>', methods=['PATCH'])
@token_required
def update_vocabulary(current_user_id, vocab_id):
    try:
        data = get_json_object()
        _validate_vocabulary_data(data, partial=True)
        
        vocab = _get_owned_item(vocab_id, current_user_id)
        if not vocab:
            return jsonify({'error': 'Vocabulary not found'}), 404
        
        if 'word' in data and _word_exists(current_user_id, data['word'], exclude_id=vocab.id):
            return jsonify({'error': 'Word already in vocabulary'}), 409
        
        _apply_fields(vocab, data)
        db.session.commit()
        return jsonify(vocab.to_dict()), 200
    except ValidationError as e:
        return jsonify({'error': e.message}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating vocabulary {vocab_id}: {e}")
        return jsonify({'error': 'Failed to update vocabulary'}), 500


@vocabulary_bp.route('/<int:vocab_id>', methods=['DELETE'])
@token_required
def delete_vocabulary(current_user_id, vocab_id):
    try:
        vocab = _get_owned_item(vocab_id, current_user_id)
        if not vocab:
            return jsonify({'error': 'Vocabulary not found'}), 404
        
        db.session.delete(vocab)
        db.session.commit()
        return jsonify({'success': True, 'message': 'Vocabulary deleted successfully'}), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting vocabulary {vocab_id}: {e}")
        return jsonify({'error': 'Failed to delete vocabulary'}), 500


@vocabulary_bp.route('/<int:vocab_id>/progress', methods=['PATCH'])
@token_required
def update_vocabulary_progress(current_user_id, vocab_id):
    """Record one practice result.
    
    Body params:
        - isCorrect: bool
        - attempts: int >= 1
    """
    try:
        data = get_json_object()
        is_correct = data.get('isCorrect')
        attempts = data.get('attempts')
        
        if not isinstance(is_correct, bool):
            return jsonify({'error': 'isCorrect must be a boolean'}), 400
        if not isinstance(attempts, int) or isinstance(attempts, bool) or attempts < 1:
            return jsonify({'error': 'attempts must be an integer >= 1'}), 400
        
        vocab = _get_owned_item(vocab_id, current_user_id)
        if not vocab:
            return jsonify({'error': 'Vocabulary not found'}), 404
        
        new_status = vocab.record_practice(is_correct, attempts)
        db.session.commit()
        
        return jsonify({
            'success': True,
            'message': 'Vocabulary progress updated successfully',
            'newStatus': new_status,
            'vocabulary': vocab.to_dict()
        }), 200
    except ValidationError as e:
        return jsonify({'error': e.message}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating vocabulary progress {vocab_id}: {e}")
        return jsonify({'error': 'Failed to update vocabulary progress'}), 500


@vocabulary_bp.route('/extract', methods=['POST'])
@token_required
def extract(current_user_id):
    """Extract learner vocabulary from text with the AI.
    
    Body params:
        - text: 1-2000 characters
        - save: store the extracted words for the user
    """
    try:
        data = get_json_object()
    except ValidationError as e:
        return jsonify({'error': e.message}), 400
    text = data.get('text')
    save = data.get('save', False)
    
    if not isinstance(text, str) or not text.strip():
        return jsonify({'error': 'Text is required'}), 400
    if len(text) > MAX_EXTRACT_LENGTH:
        return jsonify({'error': 'Text too long'}), 400
    if not isinstance(save, bool):
        return jsonify({'error': 'save must be a boolean'}), 400
    
    try:
        items = extract_vocabulary(text)
    except AIGenerationError as e:
        logger.error(f"Vocabulary extraction failed: {e}")
        return jsonify({'error': 'Failed to extract vocabulary'}), 500
    
    response = {
        'success': True,
        'vocabulary': items,
        'count': len(items)
    }
    
    if save:
        try:
            saved = save_extracted_vocabulary(current_user_id, items)
            response['saved'] = [vocab.to_dict() for vocab in saved]
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error saving extracted vocabulary: {e}")
            return jsonify({'error': 'Failed to save vocabulary'}), 500
    
    return jsonify(response), 200


@vocabulary_bp.route('/export/anki', methods=['GET'])
@token_required
def export_anki(current_user_id):
    """Download vocabulary as an Anki import file.
    
    Query params:
        - format: 'csv' | 'txt'
        - cardType: 'basic' | 'basic-reverse' | 'cloze'
        - includeDefinition, includeExample, includePronunciation, includeTags
        - deckName
        - status: only export words with this status
    """
    try:
        options = AnkiExportOptions()
        options.format = request.args.get('format', options.format)
        options.card_type = request.args.get('cardType', options.card_type)
        options.deck_name = clean_deck_name(request.args.get('deckName'))
        for arg, attr in (('includeDefinition', 'include_definition'),
                          ('includeExample', 'include_example'),
                          ('includePronunciation', 'include_pronunciation'),
                          ('includeTags', 'include_tags')):
            value = parse_bool(request.args.get(arg))
            if value is not None:
                setattr(options, attr, value)
        
        if options.format not in FORMATS:
            return jsonify({'error': 'format must be csv or txt'}), 400
        if options.card_type not in CARD_TYPES:
            return jsonify({'error': 'cardType must be basic, basic-reverse or cloze'}), 400
        
        query = Vocabulary.query.filter_by(user_id=current_user_id)
        status = request.args.get('status')
        if status:
            query = query.filter_by(status=status)
        items = query.order_by(Vocabulary.created_at.asc(), Vocabulary.id.asc()).all()
        
        if not items:
            return jsonify({'error': 'No vocabulary to export'}), 404
        
        content, mimetype, filename = export_vocabulary(items, options)
        return Response(
            content,
            mimetype=mimetype,
            headers={'Content-Disposition': f'attachment; filename="{filename}"'}
        )
    except Exception as e:
        logger.error(f"Error exporting vocabulary: {e}")
        return jsonify({'error': 'Failed to export vocabulary'}), 500
