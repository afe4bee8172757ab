from pydantic import BaseModel

from models.resume import TemplateType
from models.suggestions import InterviewTurn, InterviewUpdate


class SectionOrderEntry(BaseModel):
    index: int
    id: str
    label: str
    custom: bool = False


class TemplateListResponse(BaseModel):
    templates: list[TemplateType] = list(TemplateType)
    active: TemplateType = TemplateType.MODERN


class InterviewResponse(BaseModel):
    question: str
    update: InterviewUpdate | None = None
    history: list[InterviewTurn] = []
