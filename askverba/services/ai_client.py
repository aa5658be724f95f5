"""Client for the AI text-generation API.

Every call asks the model for a single JSON object and validates it
before returning. Callers get either a valid object or AIGenerationError.
"""

import json
import logging
from typing import Callable, Optional

from flask import current_app
from openai import OpenAI
from pydantic import ValidationError

from askverba.errors import AIGenerationError

logger = logging.getLogger(__name__)


def get_openai_client() -> Optional[OpenAI]:
    api_key = current_app.config.get('OPENAI_API_KEY')
    if not api_key:
        logger.warning("OPENAI_API_KEY not set, AI generation will not work")
        return None
    return OpenAI(
        api_key=api_key,
        base_url=current_app.config.get('OPENAI_BASE_URL') or None,
        timeout=current_app.config.get('AI_TIMEOUT_SECONDS', 30),
    )


def generate_object(
    system_prompt: str,
    prompt: str,
    validator: Callable[[dict], dict],
    model: Optional[str] = None,
    temperature: float = 0.3,
) -> dict:
    """Generate a JSON object for the prompt and validate it.

    Args:
        system_prompt: Instructions describing the expected JSON shape
        prompt: User input
        validator: Returns the cleaned object or raises ValidationError/ValueError
        model: Model name, defaults to AI_SIMPLE_MODEL

    Raises:
        AIGenerationError: on missing configuration, API errors,
            non-JSON output or validation failure
    """
    client = get_openai_client()
    if client is None:
        raise AIGenerationError("AI generation is not configured")

    model = model or current_app.config.get('AI_SIMPLE_MODEL')

    try:
        response = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=temperature,
        )
        content = response.choices[0].message.content
    except Exception as e:
        logger.error(f"AI generation error ({model}): {e}")
        raise AIGenerationError(str(e)) from e

    if not content:
        raise AIGenerationError("AI returned an empty response")

    try:
        obj = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning(f"AI returned invalid JSON ({model}): {e}")
        raise AIGenerationError("AI returned invalid JSON") from e

    try:
        return validator(obj)
    except (ValidationError, ValueError, TypeError, KeyError) as e:
        logger.warning(f"AI output failed validation ({model}): {e}")
        raise AIGenerationError(f"AI output failed validation: {e}") from e
