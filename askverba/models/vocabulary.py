"""Vocabulary model for words collected by learners."""

from datetime import datetime
from typing import get_args

from askverba import db
from askverba.schemas import WordType, Difficulty, VocabularyStatus

WORD_TYPES = get_args(WordType)
DIFFICULTIES = get_args(Difficulty)
STATUSES = get_args(VocabularyStatus)


class Vocabulary(db.Model):
    """A word or phrase in a user's vocabulary list."""
    
    __tablename__ = 'vocabulary'
    
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    
    word = db.Column(db.String(200), nullable=False)
    translation = db.Column(db.String(500), nullable=False)
    word_type = db.Column(db.String(20), nullable=True)  # part of speech, see WORD_TYPES
    difficulty = db.Column(db.String(10), default='medium', nullable=False)
    context = db.Column(db.Text, nullable=True)
    definition = db.Column(db.Text, nullable=True)
    pronunciation = db.Column(db.String(200), nullable=True)
    tags = db.Column(db.JSON, nullable=True)  # list of strings
    source_language = db.Column(db.String(40), default='English', nullable=False)
    target_language = db.Column(db.String(40), default='Indonesian', nullable=False)
    
    # Practice status
    status = db.Column(db.String(10), default='new', nullable=False)
    practice_count = db.Column(db.Integer, default=0, nullable=False)
    correct_count = db.Column(db.Integer, default=0, nullable=False)
    accuracy = db.Column(db.Integer, default=0, nullable=False)  # 0-100
    last_practiced = db.Column(db.DateTime, nullable=True)
    
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    __table_args__ = (
        db.UniqueConstraint('user_id', 'word', name='unique_user_word'),
    )
    
    def record_practice(self, is_correct, attempts):
        """Apply one practice result and return the new status."""
        self.practice_count = (self.practice_count or 0) + 1
        if is_correct:
            self.correct_count = (self.correct_count or 0) + 1
        self.accuracy = round(self.correct_count / self.practice_count * 100)
        self.last_practiced = datetime.utcnow()
        self.status = calculate_status(is_correct, attempts)
        return self.status
    
    def to_dict(self):
        """Convert vocabulary item to dictionary."""
        return {
            'id': self.id,
            'customer': self.user_id,
            'word': self.word,
            'translation': self.translation,
            'type': self.word_type,
            'difficulty': self.difficulty,
            'context': self.context,
            'definition': self.definition,
            'pronunciation': self.pronunciation,
            'tags': self.tags or [],
            'sourceLanguage': self.source_language,
            'targetLanguage': self.target_language,
            'status': self.status,
            'practiceCount': self.practice_count,
            'accuracy': self.accuracy,
            'lastPracticed': self.last_practiced.isoformat() if self.last_practiced else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
    
    def __repr__(self):
        return f'<Vocabulary {self.word!r} for User {self.user_id}>'


def calculate_status(is_correct, attempts):
    """Status after a practice attempt. First-try results only move one step."""
    if attempts == 1:
        return 'learning' if is_correct else 'new'
    if attempts >= 3 and is_correct:
        return 'mastered'
    if is_correct:
        return 'learning'
    return 'new'
