"""Database models for the AskVerba application."""

from .user import User
from .translation_history import TranslationHistory
from .translation_cache import TranslationCache
from .vocabulary import Vocabulary
from .achievement import Achievement, UserAchievement
from .practice_session import PracticeSession

__all__ = [
    'User',
    'TranslationHistory',
    'TranslationCache',
    'Vocabulary',
    'Achievement',
    'UserAchievement',
    'PracticeSession',
]
