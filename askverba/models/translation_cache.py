"""Translation cache model for storing AI translation results."""

from askverba import db


class TranslationCache(db.Model):
    """Cache translations to avoid calling the AI for the same text twice."""
    __tablename__ = 'translation_cache'
    
    id = db.Column(db.Integer, primary_key=True)
    cache_key = db.Column(db.String(128), nullable=False, unique=True, index=True)
    mode = db.Column(db.String(20), nullable=False)
    original_text = db.Column(db.Text, nullable=False)
    result = db.Column(db.JSON, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now())
