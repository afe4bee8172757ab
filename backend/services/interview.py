"""Conversational interview that fills in the resume one answer at a time.

Each turn sends the user's answer to Gemini, gets back a partial resume and
merges it with these rules:

    personal    -> shallow merge, only fields present in the update change
    experience  -> appended
    education   -> appended
    skills      -> set union (exact, case-sensitive), existing order kept
"""

import logging

from pydantic import ValidationError

from models.resume import ResumeData, new_id
from models.suggestions import InterviewTurn, InterviewUpdate
from services import gemini_client, prompt_builder

logger = logging.getLogger(__name__)

DEFAULT_QUESTION = "Tell me about your professional background."
FALLBACK_QUESTION = "What is your current or most recent job title?"


async def next_question(data: ResumeData, history: list[InterviewTurn]) -> str:
    """Ask Gemini for the next interview question.

    An empty reply yields ``DEFAULT_QUESTION``; a failed call yields
    ``FALLBACK_QUESTION``.
    """
    prompt = prompt_builder.build_question_prompt(data)
    contents = gemini_client.to_contents(history, prompt) if history else prompt
    text = await gemini_client.generate_text(
        contents, system_instruction=prompt_builder.INTERVIEWER_PERSONA
    )
    if text is None:
        return FALLBACK_QUESTION
    return text or DEFAULT_QUESTION


async def process_answer(answer: str, data: ResumeData) -> InterviewUpdate:
    """Turn one answer into a partial update. Empty on any failure."""
    prompt = prompt_builder.build_answer_prompt(answer, data)
    raw = await gemini_client.generate_json(prompt, schema=prompt_builder.INTERVIEW_UPDATE_SCHEMA)
    if not raw:
        return InterviewUpdate()
    try:
        return InterviewUpdate.model_validate(raw)
    except ValidationError as e:
        logger.error("Malformed interview update: %s", e)
        return InterviewUpdate()


def merge_skills(current: tuple[str, ...], incoming: tuple[str, ...]) -> tuple[str, ...]:
    """Union of two skill lists, first occurrence wins."""
    seen = set(current)
    merged = list(current)
    for skill in incoming:
        if skill not in seen:
            seen.add(skill)
            merged.append(skill)
    return tuple(merged)


def _with_fresh_ids(existing: tuple, incoming: tuple) -> tuple:
    """Re-id incoming items whose id is blank or already taken."""
    taken = {item.id for item in existing}
    result = []
    for item in incoming:
        if not item.id or item.id in taken:
            item = item.model_copy(update={"id": new_id()})
        taken.add(item.id)
        result.append(item)
    return tuple(result)


def assign_ids(data: ResumeData, update: InterviewUpdate) -> InterviewUpdate:
    """Copy of ``update`` whose new items carry ids unused in ``data``."""
    changes = {}
    if update.experience:
        changes["experience"] = _with_fresh_ids(data.experience, update.experience)
    if update.education:
        changes["education"] = _with_fresh_ids(data.education, update.education)
    if not changes:
        return update
    return update.model_copy(update=changes)


def merge_update(data: ResumeData, update: InterviewUpdate) -> ResumeData:
    """Merge a partial interview update into a snapshot.

    Pass the result of ``assign_ids`` when the caller needs to know the ids
    the appended items end up with.
    """
    update = assign_ids(data, update)
    changes = {}

    if update.personal is not None:
        fields = update.personal.model_dump(exclude_none=True)
        if fields:
            changes["personal"] = data.personal.model_copy(update=fields)

    if update.experience:
        changes["experience"] = data.experience + update.experience

    if update.education:
        changes["education"] = data.education + update.education

    if update.skills:
        skills = merge_skills(data.skills, update.skills)
        if skills != data.skills:
            changes["skills"] = skills

    if not changes:
        return data
    return data.model_copy(update=changes)


async def interview_step(
    data: ResumeData, history: list[InterviewTurn], answer: str
) -> tuple[InterviewUpdate, str]:
    """Process one answer and ask the follow-up question.

    The update is returned unmerged; the caller merges it into whatever
    snapshot is current when the step completes.
    """
    update = await process_answer(answer, data)
    merged = merge_update(data, update)
    turns = [*history, InterviewTurn(role="user", text=answer)]
    question = await next_question(merged, turns)
    return update, question
