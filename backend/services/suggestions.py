"""AI critique of a resume and merging of accepted suggestions."""

import logging
from typing import Literal

from pydantic import ValidationError

from models.resume import ResumeData
from models.suggestions import SuggestionResult
from services import gemini_client, prompt_builder

logger = logging.getLogger(__name__)

SuggestionKind = Literal["summary", "experience"]


async def request_suggestions(data: ResumeData) -> SuggestionResult:
    """Ask Gemini to critique the summary and experience descriptions.

    Failures of any kind produce an empty ``SuggestionResult``.
    """
    prompt = prompt_builder.build_suggestions_prompt(data)
    raw = await gemini_client.generate_json(prompt, schema=prompt_builder.SUGGESTIONS_SCHEMA)
    if not raw:
        logger.warning("Gemini suggestions unavailable")
        return SuggestionResult()

    try:
        result = SuggestionResult.model_validate(raw)
    except ValidationError as e:
        logger.error("Malformed suggestion payload: %s", e)
        return SuggestionResult()

    logger.info(
        "Received suggestions: summary=%s experiences=%d",
        result.summary is not None,
        len(result.experiences),
    )
    return result


def apply_suggestion(
    data: ResumeData,
    kind: SuggestionKind,
    improved: str,
    item_id: str | None = None,
) -> ResumeData:
    """Merge one accepted suggestion into the snapshot."""
    if kind == "summary":
        personal = data.personal.model_copy(update={"summary": improved})
        return data.model_copy(update={"personal": personal})

    if kind == "experience":
        experience = tuple(
            exp.model_copy(update={"description": improved}) if exp.id == item_id else exp
            for exp in data.experience
        )
        if all(new is old for new, old in zip(experience, data.experience)):
            return data
        return data.model_copy(update={"experience": experience})

    raise ValueError(f"Unknown suggestion kind: {kind}")
