"""Tests for the interview flow and its union-append merge."""

from unittest.mock import AsyncMock, patch

import pytest

from models.resume import Education, Experience
from models.suggestions import InterviewTurn, InterviewUpdate, PersonalUpdate
from services import interview
from services.interview import (
    DEFAULT_QUESTION,
    FALLBACK_QUESTION,
    assign_ids,
    interview_step,
    merge_skills,
    merge_update,
    next_question,
    process_answer,
)


# --- merge_update ---

def test_skills_union_keeps_existing_order(resume):
    data = resume.model_copy(update={"skills": ("React", "Go")})
    merged = merge_update(data, InterviewUpdate(skills=("Go", "Rust")))
    assert merged.skills == ("React", "Go", "Rust")
    assert set(merged.skills) == {"React", "Go", "Rust"}


def test_skills_union_is_case_sensitive():
    assert merge_skills(("Go",), ("go", "Go")) == ("Go", "go")


def test_skills_union_dedups_within_update():
    assert merge_skills((), ("Rust", "Rust")) == ("Rust",)


def test_personal_shallow_merge(resume):
    update = InterviewUpdate(personal=PersonalUpdate(job_title="Staff Engineer"))
    merged = merge_update(resume, update)
    assert merged.personal.job_title == "Staff Engineer"
    assert merged.personal.full_name == resume.personal.full_name
    assert merged.personal.summary == resume.personal.summary


def test_experience_is_appended(resume):
    new = Experience(id="x1", company="Acme", position="Lead")
    merged = merge_update(resume, InterviewUpdate(experience=(new,)))
    assert [e.company for e in merged.experience] == ["Tech Solutions Inc.", "Acme"]
    assert merged.experience[0] is resume.experience[0]


def test_colliding_ids_are_replaced(resume):
    dup = Experience(id="1", company="Acme")
    merged = merge_update(resume, InterviewUpdate(experience=(dup, dup)))
    ids = [e.id for e in merged.experience]
    assert len(ids) == len(set(ids)) == 3
    assert ids[0] == "1"


def test_assign_ids_matches_merged_items(resume):
    update = InterviewUpdate(
        experience=(Experience(id="1", company="Acme"),),
        education=(Education(id="new-edu", institution="MIT"),),
    )
    assigned = assign_ids(resume, update)
    merged = merge_update(resume, assigned)
    assert assigned.experience[0].id != "1"
    assert merged.experience[-1].id == assigned.experience[0].id
    assert merged.education[-1].id == assigned.education[0].id == "new-edu"


def test_assign_ids_without_items_returns_update(resume):
    update = InterviewUpdate(skills=("Go",))
    assert assign_ids(resume, update) is update


def test_education_is_appended(resume):
    merged = merge_update(
        resume, InterviewUpdate(education=(Education(institution="MIT", degree="M.S."),))
    )
    assert [e.institution for e in merged.education] == ["University of Technology", "MIT"]


def test_absent_groups_are_untouched(resume):
    merged = merge_update(resume, InterviewUpdate(skills=("Kotlin",)))
    assert merged.personal is resume.personal
    assert merged.experience is resume.experience
    assert merged.education is resume.education
    assert merged.projects is resume.projects
    assert merged.section_order is resume.section_order


def test_empty_update_returns_same_snapshot(resume):
    assert merge_update(resume, InterviewUpdate()) is resume
    assert merge_update(resume, InterviewUpdate(personal=PersonalUpdate())) is resume
    assert merge_update(resume, InterviewUpdate(skills=("React",))) is resume


def test_update_parses_camel_case_payload():
    update = InterviewUpdate.model_validate({
        "personal": {"fullName": "Sam Lee", "jobTitle": "Data Engineer"},
        "experience": [{"company": "Initech", "position": "Analyst", "startDate": "2018-04"}],
        "skills": ["SQL"],
    })
    assert update.personal.full_name == "Sam Lee"
    assert update.personal.summary is None
    assert update.experience[0].start_date == "2018-04"
    assert update.experience[0].id
    assert update.education is None


# --- Gemini-backed calls ---

@pytest.mark.asyncio
@patch("services.gemini_client.generate_text", new_callable=AsyncMock)
async def test_next_question_returns_model_text(mock_text, resume):
    mock_text.return_value = "Which project are you proudest of?"
    assert await next_question(resume, []) == "Which project are you proudest of?"
    contents = mock_text.call_args.args[0]
    assert isinstance(contents, str)  # first question: plain prompt, no history


@pytest.mark.asyncio
@patch("services.gemini_client.generate_text", new_callable=AsyncMock)
async def test_next_question_sends_history(mock_text, resume):
    mock_text.return_value = "Tell me more."
    history = [
        InterviewTurn(role="model", text="What do you do?"),
        InterviewTurn(role="user", text="I build APIs."),
    ]
    await next_question(resume, history)
    contents = mock_text.call_args.args[0]
    assert [c.role for c in contents] == ["model", "user", "user"]
    assert "ResuCoach" in mock_text.call_args.kwargs["system_instruction"]


@pytest.mark.asyncio
@patch("services.gemini_client.generate_text", new_callable=AsyncMock)
async def test_next_question_fallbacks(mock_text, resume):
    mock_text.return_value = ""
    assert await next_question(resume, []) == DEFAULT_QUESTION
    mock_text.return_value = None
    assert await next_question(resume, []) == FALLBACK_QUESTION


@pytest.mark.asyncio
@patch("services.gemini_client.generate_json", new_callable=AsyncMock)
async def test_process_answer_malformed_is_empty(mock_json, resume):
    mock_json.return_value = {"skills": "not-a-list", "experience": 7}
    update = await process_answer("I know Go", resume)
    assert update.is_empty


@pytest.mark.asyncio
@patch("services.gemini_client.generate_json", new_callable=AsyncMock)
async def test_process_answer_failure_is_empty(mock_json, resume):
    mock_json.return_value = None
    assert (await process_answer("I know Go", resume)).is_empty


@pytest.mark.asyncio
@patch("services.gemini_client.generate_text", new_callable=AsyncMock)
@patch("services.gemini_client.generate_json", new_callable=AsyncMock)
async def test_interview_step(mock_json, mock_text, resume):
    mock_json.return_value = {"skills": ["Go", "Rust"]}
    mock_text.return_value = "Where did you use Rust?"
    history = [InterviewTurn(role="model", text="What languages do you know?")]

    update, question = await interview_step(resume, history, "Go and Rust")

    assert update.skills == ("Go", "Rust")
    assert question == "Where did you use Rust?"
    # follow-up question is asked against the merged data and includes the answer
    question_prompt = mock_text.call_args.args[0][-1].parts[0].text
    assert "Rust" in question_prompt
    assert mock_text.call_args.args[0][-2].parts[0].text == "Go and Rust"
    assert len(history) == 1


@pytest.mark.asyncio
async def test_interview_step_offline(resume):
    update, question = await interview.interview_step(resume, [], "hello")
    assert update.is_empty
    assert question == FALLBACK_QUESTION
