"""Vocabulary extraction and bulk saving."""
import logging

from flask import current_app
from pydantic import ValidationError

from askverba import db
from askverba.constants import VOCABULARY_EXTRACTION_PROMPT
from askverba.models import Vocabulary
from askverba.schemas import VocabularyExtraction, VocabularyItem
from askverba.services import ai_client

logger = logging.getLogger(__name__)


def validate_extraction(obj) -> dict:
    """Keep only well-formed items. Malformed items are dropped, not fatal.

    Raises pydantic.ValidationError when the response itself is not an
    object with a vocabulary list.
    """
    extraction = VocabularyExtraction.model_validate(obj)

    items = []
    for raw in extraction.vocabulary:
        try:
            items.append(VocabularyItem.model_validate(raw).model_dump())
        except ValidationError as e:
            logger.debug(f"Dropping extracted item {raw!r}: {e.error_count()} errors")
    return {'vocabulary': items}


def extract_vocabulary(text: str) -> list:
    """Ask the AI for learner vocabulary in text. Raises AIGenerationError."""
    result = ai_client.generate_object(
        VOCABULARY_EXTRACTION_PROMPT, text, validate_extraction,
        model=current_app.config.get('AI_SIMPLE_MODEL')
    )
    return result['vocabulary']


def save_extracted_vocabulary(user_id, items: list) -> list:
    """Store extracted items for a user, skipping words already saved."""
    existing = {
        word.lower() for (word,) in
        db.session.query(Vocabulary.word).filter(Vocabulary.user_id == user_id).all()
    }

    saved = []
    for item in items:
        if item['word'].lower() in existing:
            continue
        vocab = Vocabulary(
            user_id=user_id,
            word=item['word'],
            translation=item['translation'],
            word_type=item['type'],
            difficulty=item['difficulty'],
            context=item['context']
        )
        db.session.add(vocab)
        existing.add(item['word'].lower())
        saved.append(vocab)

    db.session.commit()
    logger.info(f"Saved {len(saved)} extracted words for user {user_id}")
    return saved
