"""Achievement catalog and user achievement progress routes."""

import logging
import math
from flask import Blueprint, jsonify

from askverba import db
from askverba.errors import ValidationError
from askverba.models import Achievement, UserAchievement
from askverba.utils import token_required
from askverba.utils.validation import get_json_object

logger = logging.getLogger(__name__)

achievements_bp = Blueprint('achievements', __name__)
user_achievements_bp = Blueprint('user_achievements', __name__)


@achievements_bp.route('', methods=['GET'])
def get_achievements():
    """Active achievements, in display order. Hidden ones are left out."""
    try:
        achievements = Achievement.query.filter_by(
            is_active=True,
            is_hidden=False
        ).order_by(Achievement.order.asc(), Achievement.id.asc()).all()
        
        return jsonify({
            'docs': [a.to_dict() for a in achievements],
            'totalDocs': len(achievements)
        }), 200
    except Exception as e:
        logger.error(f"Error fetching achievements: {e}")
        return jsonify({'error': 'Failed to fetch achievements'}), 500


@user_achievements_bp.route('', methods=['GET'])
@token_required
def get_user_achievements(current_user_id):
    try:
        records = UserAchievement.query.filter_by(
            user_id=current_user_id
        ).order_by(UserAchievement.updated_at.desc()).all()
        
        return jsonify({
            'docs': [r.to_dict() for r in records],
            'totalDocs': len(records),
            'unlockedCount': sum(1 for r in records if r.is_unlocked)
        }), 200
    except Exception as e:
        logger.error(f"Error fetching user achievements: {e}")
        return jsonify({'error': 'Failed to fetch user achievements'}), 500


@user_achievements_bp.route('', methods=['POST'])
@token_required
def upsert_user_achievement(current_user_id):
    """Create or update the user's progress on an achievement.
    
    Body params:
        - achievementId: catalog id (required)
        - progress: number, clamped to 0-100
        - isUnlocked: bool; unlockedAt is set when this first becomes true
    
    Progress and unlock state are independent. Progress 100 does not
    unlock on its own.
    """
    try:
        data = get_json_object()
        achievement_id = data.get('achievementId')
        progress = data.get('progress')
        is_unlocked = data.get('isUnlocked')
        
        if not isinstance(achievement_id, int) or isinstance(achievement_id, bool):
            return jsonify({'error': 'achievementId is required'}), 400
        if progress is not None and (isinstance(progress, bool) or not isinstance(progress, (int, float))):
            return jsonify({'error': 'progress must be a number'}), 400
        if isinstance(progress, float) and math.isnan(progress):
            return jsonify({'error': 'progress must be a number'}), 400
        if is_unlocked is not None and not isinstance(is_unlocked, bool):
            return jsonify({'error': 'isUnlocked must be a boolean'}), 400
        
        achievement = db.session.get(Achievement, achievement_id)
        if not achievement or not achievement.is_active:
            return jsonify({'error': 'Achievement not found'}), 404
        
        record = UserAchievement.query.filter_by(
            user_id=current_user_id,
            achievement_id=achievement_id
        ).first()
        created = record is None
        if created:
            record = UserAchievement(user_id=current_user_id, achievement_id=achievement_id, progress=0, is_unlocked=False)
            db.session.add(record)
        
        was_unlocked = bool(record.is_unlocked)
        if progress is not None:
            record.set_progress(progress)
        if is_unlocked is not None:
            record.set_unlocked(is_unlocked)
        
        db.session.commit()
        
        if record.is_unlocked and not was_unlocked:
            logger.info(f"User {current_user_id} unlocked achievement {achievement.slug}")
        
        return jsonify(record.to_dict()), 201 if created else 200
    except ValidationError as e:
        return jsonify({'error': e.message}), 400
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating user achievement: {e}")
        return jsonify({'error': 'Failed to update user achievement'}), 500
