"""All prompt templates and response schemas for Gemini API calls."""

import json

from models.resume import ResumeData

INTERVIEWER_PERSONA = (
    "You are a professional resume writer named ResuCoach. "
    "You interview users to extract their best achievements."
)

_STRING = {"type": "STRING"}

SUGGESTIONS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {
            "type": "OBJECT",
            "properties": {
                "original": _STRING,
                "improved": _STRING,
                "critique": _STRING,
            },
            "required": ["original", "improved", "critique"],
        },
        "experiences": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "id": _STRING,
                    "company": _STRING,
                    "original": _STRING,
                    "improved": _STRING,
                    "critique": _STRING,
                },
                "required": ["id", "improved", "critique"],
            },
        },
    },
}

INTERVIEW_UPDATE_SCHEMA = {
    "type": "OBJECT",
    "description": "The partial resume data updates",
    "properties": {
        "personal": {
            "type": "OBJECT",
            "properties": {
                "fullName": _STRING,
                "jobTitle": _STRING,
                "summary": _STRING,
                "email": _STRING,
                "phone": _STRING,
                "address": _STRING,
            },
        },
        "experience": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "company": _STRING,
                    "position": _STRING,
                    "startDate": _STRING,
                    "endDate": _STRING,
                    "current": {"type": "BOOLEAN"},
                    "description": _STRING,
                },
            },
        },
        "education": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "institution": _STRING,
                    "degree": _STRING,
                    "startDate": _STRING,
                    "endDate": _STRING,
                },
            },
        },
        "skills": {"type": "ARRAY", "items": _STRING},
    },
}


def _resume_json(data: ResumeData) -> str:
    return data.model_dump_json(by_alias=True)


def build_suggestions_prompt(data: ResumeData) -> str:
    """Call A: critique of the summary and every experience description."""
    payload = {
        "summary": data.personal.summary,
        "experiences": [
            {"id": exp.id, "company": exp.company, "description": exp.description}
            for exp in data.experience
        ],
    }

    return f"""You are an expert resume reviewer.

Analyze this resume data and suggest improvements. For the summary and for each
experience description, give a one-sentence critique and an improved rewrite.
Lead with strong action verbs and quantified results where the facts allow it.
Never invent employers, dates or numbers that are not in the original text.
Keep each experience's "id" and "company" exactly as given, and copy the current
text into "original".

RESUME DATA:
---
{json.dumps(payload, indent=2)}
---

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "summary": {{"original": "<current summary>", "improved": "<rewrite>", "critique": "<why>"}},
  "experiences": [
    {{"id": "<id>", "company": "<company>", "original": "<current text>", "improved": "<rewrite>", "critique": "<why>"}}
  ]
}}"""


def build_question_prompt(data: ResumeData) -> str:
    """Call B: the next interview question."""
    return f"""You are an expert resume interviewer. Your goal is to build a complete resume for the user.
Look at the current resume data: {_resume_json(data)}.
Identify what is missing or could be expanded (e.g., more experience details, skills, projects, or summary).
Ask ONE short, professional question to the user to get more information.
Be encouraging but concise."""


def build_answer_prompt(answer: str, data: ResumeData) -> str:
    """Call C: turn one interview answer into a partial resume update."""
    return f"""A user just answered a question for their resume: "{answer}"
Update the resume data based on this answer.
Current data: {_resume_json(data)}

Return a JSON object that contains the NEW or UPDATED fields only.
Map the answer to personal.summary, experience, education, skills, etc. as appropriate.
If it's experience, structure it as a NEW item in the experience array; do not repeat
entries that already exist. Dates use the YYYY-MM format.
List only skills the answer mentions."""
