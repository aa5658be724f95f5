"""
Pydantic models for AI structured output and request bodies.

The translation and extraction models describe the JSON objects the
system prompts in askverba.constants.prompts ask the model to return.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

WordType = Literal['noun', 'verb', 'adjective', 'adverb', 'phrase', 'idiom', 'preposition']
Difficulty = Literal['easy', 'medium', 'hard']
VocabularyStatus = Literal['new', 'learning', 'mastered']
SessionType = Literal['flashcard', 'typing', 'multiple_choice', 'mixed']


# ---------------------------------------------------------------------------
# Translation results
# ---------------------------------------------------------------------------

class SimpleTranslation(BaseModel):
    """Plain translation for simple mode."""
    model_config = ConfigDict(str_strip_whitespace=True)

    translation: str = Field(min_length=1, description="The Indonesian translation only")


class SingleTermData(BaseModel):
    """Sections of a detailed analysis for 1-3 word inputs."""
    title: str
    main_translation: str
    meanings: str
    linguistic_analysis: str
    examples: str
    collocations: str
    comparisons: str
    usage_tips: str


class ParagraphData(BaseModel):
    """Sections of a detailed analysis for longer inputs."""
    title: str
    full_translation: str
    structure_analysis: str
    key_vocabulary: str
    cultural_context: str
    stylistic_notes: str
    alternative_translations: str
    learning_points: str


class SingleTermTranslation(BaseModel):
    type: Literal['single_term']
    data: SingleTermData


class ParagraphTranslation(BaseModel):
    type: Literal['paragraph']
    data: ParagraphData


DetailedTranslation = Annotated[
    Union[SingleTermTranslation, ParagraphTranslation],
    Field(discriminator='type')
]

detailed_translation_adapter = TypeAdapter(DetailedTranslation)


# ---------------------------------------------------------------------------
# Vocabulary extraction
# ---------------------------------------------------------------------------

class VocabularyItem(BaseModel):
    """One word picked out of a text for the learner."""
    model_config = ConfigDict(str_strip_whitespace=True)

    word: str = Field(min_length=2)
    translation: str = Field(min_length=2)
    type: WordType
    difficulty: Difficulty
    context: str = Field(min_length=1, description="Sentence from the text using the word")


class VocabularyExtraction(BaseModel):
    """Raw extraction response. Items are validated one by one."""
    vocabulary: List[Any] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class PracticeStartRequest(BaseModel):
    """Options for picking the words of a new practice session."""
    model_config = ConfigDict(strict=True, extra='forbid', populate_by_name=True)

    session_type: SessionType = Field(default='flashcard', alias='sessionType')
    word_count: int = Field(default=10, ge=1, le=100, alias='wordCount')
    difficulty: Optional[Difficulty] = None
    status: Optional[VocabularyStatus] = None
    include_definitions: bool = Field(default=True, alias='includeDefinitions')
    include_examples: bool = Field(default=False, alias='includeExamples')
    shuffle_words: bool = Field(default=True, alias='shuffleWords')
    time_limit: Optional[int] = Field(default=None, ge=1, alias='timeLimit')


def error_details(error: ValidationError) -> list:
    """JSON-safe summary of a pydantic ValidationError."""
    return [
        {'field': '.'.join(str(part) for part in err['loc']), 'message': err['msg']}
        for err in error.errors()
    ]
