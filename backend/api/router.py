from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_session
from config import settings
from models.requests import (
    ApplySuggestionRequest,
    FieldUpdateRequest,
    InterviewAnswerRequest,
    ItemFieldUpdateRequest,
    MoveSectionRequest,
    SkillsRequest,
    TemplateRequest,
    TitleRequest,
)
from models.resume import CUSTOM_SECTION_PREFIX, ItemKind, ResumeData, TemplateType
from models.responses import InterviewResponse, SectionOrderEntry, TemplateListResponse
from models.suggestions import InterviewTurn, SuggestionResult
from services import renderer, resume_editor
from services.sections import section_label
from services.session import EditorSession, OperationInProgress

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def _edit(session: EditorSession, operation, *args) -> ResumeData:
    """Apply a snapshot operation, turning bad field names or values into 400s."""
    try:
        return session.apply(operation, *args)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
    }


# --- Resume data ---

@router.get("/resume", response_model=ResumeData)
async def get_resume(session: EditorSession = Depends(get_session)):
    return session.data


@router.post("/resume/reset", response_model=ResumeData)
async def reset_resume(session: EditorSession = Depends(get_session)):
    return session.reset()


@router.put("/resume/personal", response_model=ResumeData)
async def set_personal_field(body: FieldUpdateRequest, session: EditorSession = Depends(get_session)):
    return _edit(session, resume_editor.set_personal_field, body.field, body.value)


@router.put("/resume/skills", response_model=ResumeData)
async def set_skills(body: SkillsRequest, session: EditorSession = Depends(get_session)):
    return _edit(session, resume_editor.set_skills, body.text)


# --- Section order ---

@router.get("/resume/sections", response_model=list[SectionOrderEntry])
async def list_sections(session: EditorSession = Depends(get_session)):
    data = session.data
    return [
        SectionOrderEntry(
            index=i,
            id=section_id,
            label=section_label(section_id, data),
            custom=section_id.startswith(CUSTOM_SECTION_PREFIX),
        )
        for i, section_id in enumerate(data.section_order)
    ]


@router.post("/resume/sections/move", response_model=ResumeData)
async def move_section(body: MoveSectionRequest, session: EditorSession = Depends(get_session)):
    return _edit(session, resume_editor.move_section, body.index, body.direction)


# --- Custom sections ---

@router.post("/resume/custom-sections", response_model=ResumeData)
async def add_custom_section(session: EditorSession = Depends(get_session)):
    return _edit(session, resume_editor.add_custom_section)


@router.delete("/resume/custom-sections/{section_id}", response_model=ResumeData)
async def remove_custom_section(section_id: str, session: EditorSession = Depends(get_session)):
    return _edit(session, resume_editor.remove_custom_section, section_id)


@router.put("/resume/custom-sections/{section_id}/title", response_model=ResumeData)
async def update_custom_section_title(
    section_id: str, body: TitleRequest, session: EditorSession = Depends(get_session)
):
    return _edit(session, resume_editor.update_custom_section_title, section_id, body.title)


@router.post("/resume/custom-sections/{section_id}/items", response_model=ResumeData)
async def add_custom_item(section_id: str, session: EditorSession = Depends(get_session)):
    return _edit(session, resume_editor.add_custom_item, section_id)


@router.patch("/resume/custom-sections/{section_id}/items/{item_id}", response_model=ResumeData)
async def update_custom_item(
    section_id: str,
    item_id: str,
    body: FieldUpdateRequest,
    session: EditorSession = Depends(get_session),
):
    return _edit(session, resume_editor.update_custom_item, section_id, item_id, body.field, body.value)


@router.delete("/resume/custom-sections/{section_id}/items/{item_id}", response_model=ResumeData)
async def delete_custom_item(section_id: str, item_id: str, session: EditorSession = Depends(get_session)):
    return _edit(session, resume_editor.delete_custom_item, section_id, item_id)


# --- Built-in item lists ---

@router.post("/resume/{kind}", response_model=ResumeData)
async def add_item(kind: ItemKind, session: EditorSession = Depends(get_session)):
    return _edit(session, resume_editor.add_item, kind)


@router.patch("/resume/{kind}/{item_id}", response_model=ResumeData)
async def update_item(
    kind: ItemKind,
    item_id: str,
    body: ItemFieldUpdateRequest,
    session: EditorSession = Depends(get_session),
):
    return _edit(session, resume_editor.update_item, kind, item_id, body.field, body.value)


@router.delete("/resume/{kind}/{item_id}", response_model=ResumeData)
async def delete_item(kind: ItemKind, item_id: str, session: EditorSession = Depends(get_session)):
    return _edit(session, resume_editor.delete_item, kind, item_id)


# --- Templates and preview ---

@router.get("/templates", response_model=TemplateListResponse)
async def list_templates(session: EditorSession = Depends(get_session)):
    return TemplateListResponse(active=session.template)


@router.put("/template", response_model=TemplateListResponse)
async def set_template(body: TemplateRequest, session: EditorSession = Depends(get_session)):
    session.set_template(body.template)
    return TemplateListResponse(active=session.template)


@router.get("/preview", response_class=HTMLResponse)
async def preview(
    template: TemplateType | None = None,
    print_on_load: bool = Query(False, alias="print"),
    session: EditorSession = Depends(get_session),
):
    html = renderer.render(session.data, template or session.template, print_on_load=print_on_load)
    return HTMLResponse(content=html)


# --- AI suggestions ---

@router.get("/suggestions", response_model=SuggestionResult | None)
async def last_suggestions(session: EditorSession = Depends(get_session)):
    """The most recent critique, or null before the first request."""
    return session.suggestions


@router.post("/suggestions", response_model=SuggestionResult)
@limiter.limit(settings.ai_rate_limit)
async def request_suggestions(request: Request, session: EditorSession = Depends(get_session)):
    try:
        return await session.refresh_suggestions()
    except OperationInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/suggestions/apply", response_model=ResumeData)
async def apply_suggestion(body: ApplySuggestionRequest, session: EditorSession = Depends(get_session)):
    if body.kind == "experience" and not body.id:
        raise HTTPException(status_code=400, detail="Experience suggestions need an id")
    return session.accept_suggestion(body.kind, body.improved, body.id)


# --- AI interview ---

@router.get("/interview", response_model=list[InterviewTurn])
async def interview_history(session: EditorSession = Depends(get_session)):
    return session.interview_history


@router.delete("/interview", status_code=204)
async def reset_interview(session: EditorSession = Depends(get_session)):
    session.reset_interview()


@router.post("/interview/start", response_model=InterviewResponse)
@limiter.limit(settings.ai_rate_limit)
async def start_interview(request: Request, session: EditorSession = Depends(get_session)):
    try:
        question = await session.start_interview()
    except OperationInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    return InterviewResponse(question=question, history=session.interview_history)


@router.post("/interview/answer", response_model=InterviewResponse)
@limiter.limit(settings.ai_rate_limit)
async def answer_interview(
    request: Request, body: InterviewAnswerRequest, session: EditorSession = Depends(get_session)
):
    try:
        update, question = await session.answer_interview(body.answer)
    except OperationInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    return InterviewResponse(question=question, update=update, history=session.interview_history)
