"""Google Gemini API wrapper with error handling.

Callers never see exceptions from here: a missing API key, a transport or
service error, or an unparsable payload all come back as ``None``.
"""

import json
import logging
from typing import Any

from google import genai
from google.genai import types

from config import settings
from models.suggestions import InterviewTurn

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def _strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def to_contents(history: list[InterviewTurn], prompt: str) -> list[types.Content]:
    """Role-tagged history followed by the new user prompt."""
    contents = [
        types.Content(role=turn.role, parts=[types.Part(text=turn.text)])
        for turn in history
    ]
    contents.append(types.Content(role="user", parts=[types.Part(text=prompt)]))
    return contents


async def generate_json(prompt: str, schema: dict[str, Any] | None = None) -> dict | None:
    """Send a prompt to Gemini and parse the JSON object it returns."""
    client = get_client()
    if client is None:
        return None

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=settings.gemini_temperature,
                max_output_tokens=settings.gemini_max_output_tokens,
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )

        data = json.loads(_strip_code_fences(response.text or "{}"))
        if not isinstance(data, dict):
            logger.error("Gemini returned %s instead of a JSON object", type(data).__name__)
            return None
        return data

    except json.JSONDecodeError as e:
        logger.error("Failed to parse Gemini response as JSON: %s", e)
        return None
    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None


async def generate_text(
    contents: str | list[types.Content],
    system_instruction: str | None = None,
) -> str | None:
    """Free-text generation. Returns None on failure, "" on an empty reply."""
    client = get_client()
    if client is None:
        return None

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=contents,
            config=types.GenerateContentConfig(
                temperature=settings.gemini_temperature,
                max_output_tokens=settings.gemini_max_output_tokens,
                system_instruction=system_instruction,
            ),
        )
        return (response.text or "").strip()

    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None
