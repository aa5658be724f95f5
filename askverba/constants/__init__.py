"""Shared constants for the application."""

from askverba.constants.prompts import (
    SIMPLE_TRANSLATE_SYSTEM_PROMPT,
    DETAILED_TRANSLATE_SYSTEM_PROMPT,
    VOCABULARY_EXTRACTION_PROMPT,
)

__all__ = [
    'SIMPLE_TRANSLATE_SYSTEM_PROMPT',
    'DETAILED_TRANSLATE_SYSTEM_PROMPT',
    'VOCABULARY_EXTRACTION_PROMPT',
]
