from unittest.mock import AsyncMock, patch

import pytest

from models.suggestions import SuggestionResult
from services import prompt_builder
from services.suggestions import apply_suggestion, request_suggestions

VALID_PAYLOAD = {
    "summary": {
        "original": "Experienced software engineer...",
        "improved": "Senior engineer who scaled a React dashboard to 2M users.",
        "critique": "Too generic; add impact.",
    },
    "experiences": [
        {
            "id": "1",
            "company": "Tech Solutions Inc.",
            "original": "Developed and maintained...",
            "improved": "Led the rebuild of the customer dashboard, cutting load time by 40%.",
            "critique": "Lead with ownership.",
        }
    ],
}


@pytest.mark.asyncio
@patch("services.gemini_client.generate_json", new_callable=AsyncMock)
async def test_request_suggestions_parses_payload(mock_generate, resume):
    mock_generate.return_value = VALID_PAYLOAD
    result = await request_suggestions(resume)
    assert result.summary.improved.startswith("Senior engineer")
    assert result.experiences[0].id == "1"
    assert not result.is_empty
    assert mock_generate.call_args.kwargs["schema"] is prompt_builder.SUGGESTIONS_SCHEMA


@pytest.mark.asyncio
@patch("services.gemini_client.generate_json", new_callable=AsyncMock)
async def test_request_suggestions_failure_is_empty(mock_generate, resume):
    mock_generate.return_value = None
    result = await request_suggestions(resume)
    assert result == SuggestionResult()
    assert result.is_empty


@pytest.mark.asyncio
@patch("services.gemini_client.generate_json", new_callable=AsyncMock)
async def test_request_suggestions_malformed_payload_is_empty(mock_generate, resume):
    mock_generate.return_value = {"experiences": [{"critique": "missing id and improved"}]}
    result = await request_suggestions(resume)
    assert result.is_empty


@pytest.mark.asyncio
async def test_request_suggestions_without_api_key_is_empty(resume):
    result = await request_suggestions(resume)
    assert result.is_empty


@pytest.mark.asyncio
@patch("services.gemini_client.get_client")
async def test_request_suggestions_never_raises_on_client_error(mock_get, resume):
    mock_get.return_value.aio.models.generate_content = AsyncMock(side_effect=ConnectionError("down"))
    result = await request_suggestions(resume)
    assert result.is_empty


def test_suggestions_prompt_includes_experience_ids(resume):
    prompt = prompt_builder.build_suggestions_prompt(resume)
    assert '"id": "1"' in prompt
    assert "Tech Solutions Inc." in prompt
    assert resume.personal.summary in prompt


def test_apply_summary_suggestion(resume):
    updated = apply_suggestion(resume, "summary", "New summary")
    assert updated.personal.summary == "New summary"
    assert updated.personal.email == resume.personal.email
    assert updated.experience is resume.experience


def test_apply_experience_suggestion(resume):
    updated = apply_suggestion(resume, "experience", "New description", "1")
    assert updated.experience[0].description == "New description"
    assert updated.experience[0].company == resume.experience[0].company
    assert updated.personal is resume.personal


def test_apply_experience_suggestion_unknown_id_is_noop(resume):
    assert apply_suggestion(resume, "experience", "New description", "404") is resume


def test_apply_unknown_kind(resume):
    with pytest.raises(ValueError):
        apply_suggestion(resume, "skills", "Go")
