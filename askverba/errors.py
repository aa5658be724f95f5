"""Exception types shared by services and routes."""


class ValidationError(Exception):
    """Raised when request data fails validation. Routes answer 400."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class AIGenerationError(Exception):
    """Raised by the AI client when generation fails or returns bad output."""


class TranslationError(Exception):
    """Generic translation failure surfaced to API callers."""

    def __init__(self, message='Failed to translate'):
        super().__init__(message)
        self.message = message
