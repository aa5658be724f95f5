"""Achievement catalog and per-user achievement progress."""

import math
from datetime import datetime
from askverba import db

CATEGORIES = ('vocabulary', 'translation', 'streak', 'study-time', 'accuracy', 'goals', 'special')
TIERS = ('bronze', 'silver', 'gold', 'platinum', 'diamond')
REQUIREMENT_TYPES = (
    'words_learned', 'translations_count', 'streak_days', 'study_time_hours',
    'accuracy_percentage', 'goals_completed', 'custom',
)


class Achievement(db.Model):
    """An achievement users can work towards."""
    
    __tablename__ = 'achievements'
    
    id = db.Column(db.Integer, primary_key=True)
    slug = db.Column(db.String(80), unique=True, nullable=False)
    title = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(20), nullable=False)
    difficulty = db.Column(db.String(20), default='bronze', nullable=False)  # tier
    icon = db.Column(db.String(20), nullable=True)
    requirement_type = db.Column(db.String(30), nullable=False)
    target = db.Column(db.Integer, nullable=False)
    experience_points = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    is_hidden = db.Column(db.Boolean, default=False, nullable=False)
    order = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    
    def to_dict(self):
        return {
            'id': self.id,
            'slug': self.slug,
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'difficulty': self.difficulty,
            'icon': self.icon,
            'requirements': {
                'type': self.requirement_type,
                'target': self.target,
            },
            'rewards': {
                'experiencePoints': self.experience_points,
            },
            'isActive': self.is_active,
            'isHidden': self.is_hidden,
            'order': self.order,
        }


class UserAchievement(db.Model):
    """A user's progress on one achievement.
    
    Progress and unlock state are independent: reaching 100% does not
    unlock the achievement, the caller sets is_unlocked explicitly.
    """
    
    __tablename__ = 'user_achievements'
    
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    achievement_id = db.Column(db.Integer, db.ForeignKey('achievements.id'), nullable=False)
    progress = db.Column(db.Integer, default=0, nullable=False)  # 0-100
    is_unlocked = db.Column(db.Boolean, default=False, nullable=False)
    unlocked_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    # Relationships
    user = db.relationship('User', backref=db.backref('achievements', lazy='dynamic', cascade='all, delete-orphan'))
    achievement = db.relationship('Achievement')
    
    __table_args__ = (
        db.UniqueConstraint('user_id', 'achievement_id', name='unique_user_achievement'),
    )
    
    def set_progress(self, progress):
        """Set progress, clamped to [0, 100]. Fractions are truncated."""
        if isinstance(progress, float):
            if math.isnan(progress):
                raise ValueError("progress must be a number")
            progress = max(0.0, min(100.0, progress))
        self.progress = max(0, min(100, int(progress)))
    
    def set_unlocked(self, unlocked):
        """Set the unlocked flag. unlocked_at is stamped only on false -> true."""
        if unlocked and not self.is_unlocked:
            self.unlocked_at = datetime.utcnow()
        self.is_unlocked = bool(unlocked)
    
    def to_dict(self):
        return {
            'id': self.id,
            'customer': self.user_id,
            'achievement': self.achievement.to_dict() if self.achievement else self.achievement_id,
            'progress': self.progress,
            'isUnlocked': self.is_unlocked,
            'unlockedAt': self.unlocked_at.isoformat() if self.unlocked_at else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
