"""Practice session model."""

from datetime import datetime
from typing import get_args

from askverba import db
from askverba.schemas import SessionType

SESSION_TYPES = get_args(SessionType)


class PracticeSession(db.Model):
    """One completed practice run over a set of vocabulary words."""
    
    __tablename__ = 'practice_sessions'
    
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    session_type = db.Column(db.String(20), default='flashcard', nullable=False)
    total_words = db.Column(db.Integer, default=0, nullable=False)
    correct_answers = db.Column(db.Integer, default=0, nullable=False)
    score = db.Column(db.Integer, default=0, nullable=False)  # 0-100
    time_spent = db.Column(db.Integer, default=0, nullable=False)  # seconds
    completed_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    
    def calculate_score(self):
        """Derive score from correct answers over total words."""
        if not self.total_words:
            self.score = 0
        else:
            self.score = round(self.correct_answers / self.total_words * 100)
        return self.score
    
    def to_dict(self):
        return {
            'id': self.id,
            'customer': self.user_id,
            'sessionType': self.session_type,
            'totalWords': self.total_words,
            'correctAnswers': self.correct_answers,
            'score': self.score,
            'timeSpent': self.time_spent,
            'completedAt': self.completed_at.isoformat() if self.completed_at else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }
