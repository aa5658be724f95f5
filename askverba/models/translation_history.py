"""Translation history model for saved translations."""

from datetime import datetime
from askverba import db


class TranslationHistory(db.Model):
    """A translation saved to a user's history."""
    
    __tablename__ = 'translation_history'
    
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    
    original_text = db.Column(db.Text, nullable=False)
    translated_text = db.Column(db.Text, nullable=False)
    source_language = db.Column(db.String(40), default='English', nullable=False)
    target_language = db.Column(db.String(40), default='Indonesian', nullable=False)
    
    # 'simple' or 'detailed'
    mode = db.Column(db.String(20), nullable=False)
    
    # Full TranslationResult payload
    result = db.Column(db.JSON, nullable=True)
    
    character_count = db.Column(db.Integer, default=0, nullable=False)
    is_favorite = db.Column(db.Boolean, default=False, nullable=False)
    processing_time = db.Column(db.Integer, nullable=True)  # ms
    ai_model = db.Column(db.String(100), nullable=True)
    
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.original_text:
            self.character_count = len(self.original_text)
    
    def to_dict(self):
        """Convert history entry to dictionary."""
        return {
            'id': self.id,
            'customer': self.user_id,
            'originalText': self.original_text,
            'translatedText': self.translated_text,
            'sourceLanguage': self.source_language,
            'targetLanguage': self.target_language,
            'mode': self.mode,
            'result': self.result,
            'characterCount': self.character_count,
            'isFavorite': self.is_favorite,
            'processingTime': self.processing_time,
            'aiModel': self.ai_model,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }
    
    def __repr__(self):
        return f'<TranslationHistory {self.id} ({self.mode}) for User {self.user_id}>'
