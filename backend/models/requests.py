from typing import Literal

from pydantic import BaseModel, Field

from models.resume import TemplateType


class FieldUpdateRequest(BaseModel):
    field: str = Field(..., description="Field name, snake_case or camelCase")
    value: str = Field(..., max_length=10000)


class ItemFieldUpdateRequest(BaseModel):
    field: str = Field(..., description="Field name, snake_case or camelCase")
    value: str | bool = Field(..., description="Text value, or a flag for 'current'")


class SkillsRequest(BaseModel):
    text: str = Field(..., max_length=5000, description="Comma-separated skills as typed")


class MoveSectionRequest(BaseModel):
    index: int
    direction: Literal["up", "down"]


class TitleRequest(BaseModel):
    title: str = Field(..., max_length=200)


class TemplateRequest(BaseModel):
    template: TemplateType


class ApplySuggestionRequest(BaseModel):
    kind: Literal["summary", "experience"]
    id: str | None = Field(None, description="Experience id, required for kind='experience'")
    improved: str = Field(..., max_length=10000)


class InterviewAnswerRequest(BaseModel):
    answer: str = Field(..., min_length=1, max_length=5000)
