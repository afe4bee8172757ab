"""Payloads exchanged with the generative-text service."""

from typing import Literal

from pydantic import BaseModel

from models.resume import Education, Experience, SnapshotModel


class SummarySuggestion(BaseModel):
    original: str = ""
    improved: str
    critique: str = ""


class ExperienceSuggestion(BaseModel):
    id: str
    company: str = ""
    original: str = ""
    improved: str
    critique: str = ""


class SuggestionResult(BaseModel):
    """Critique of a resume. Both fields absent means "no suggestions"."""
    summary: SummarySuggestion | None = None
    experiences: list[ExperienceSuggestion] = []

    @property
    def is_empty(self) -> bool:
        return self.summary is None and not self.experiences


class InterviewTurn(BaseModel):
    role: Literal["user", "model"]
    text: str


class PersonalUpdate(SnapshotModel):
    """Personal fields an interview answer may set. ``None`` means untouched."""
    full_name: str | None = None
    job_title: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    linkedin: str | None = None
    website: str | None = None
    summary: str | None = None


class InterviewUpdate(SnapshotModel):
    """Partial resume produced from one interview answer.

    Each group is optional; a missing group leaves the resume untouched.
    """
    personal: PersonalUpdate | None = None
    experience: tuple[Experience, ...] | None = None
    education: tuple[Education, ...] | None = None
    skills: tuple[str, ...] | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.personal is None
            and not self.experience
            and not self.education
            and not self.skills
        )
