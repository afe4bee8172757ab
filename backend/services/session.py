"""In-memory editing session: the one current snapshot plus UI-side state.

All edits replace ``session.data`` with a new snapshot. The two AI
operations are gated so the same one cannot run twice concurrently; their
results are merged into whatever snapshot is current when they complete.
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable

from config import settings
from models.resume import ResumeData, TemplateType, initial_resume
from models.suggestions import InterviewTurn, InterviewUpdate, SuggestionResult
from services import interview, suggestions

logger = logging.getLogger(__name__)

SUGGESTIONS = "suggestions"
INTERVIEW = "interview"


class OperationInProgress(RuntimeError):
    """An AI request of the same kind is already pending."""

    def __init__(self, operation: str):
        super().__init__(f"A '{operation}' request is already in progress")
        self.operation = operation


class EditorSession:
    def __init__(self, data: ResumeData | None = None, template: TemplateType | str | None = None):
        self.data: ResumeData = data if data is not None else initial_resume()
        self.template = TemplateType(template or settings.default_template)
        self.suggestions: SuggestionResult | None = None
        self.interview_history: list[InterviewTurn] = []
        self._in_flight: set[str] = set()

    def apply(self, operation: Callable[..., ResumeData], *args) -> ResumeData:
        """Run a snapshot operation against the current snapshot and keep the result."""
        self.data = operation(self.data, *args)
        return self.data

    def reset(self) -> ResumeData:
        logger.info("Resetting resume to the seed data")
        self.data = initial_resume()
        self.suggestions = None
        self.interview_history = []
        return self.data

    def set_template(self, template: TemplateType) -> None:
        self.template = TemplateType(template)
        logger.info("Active template: %s", self.template.value)

    def is_busy(self, operation: str) -> bool:
        return operation in self._in_flight

    @asynccontextmanager
    async def gate(self, operation: str):
        """Reject a second concurrent request for ``operation``."""
        if operation in self._in_flight:
            raise OperationInProgress(operation)
        self._in_flight.add(operation)
        try:
            yield
        finally:
            self._in_flight.discard(operation)

    # --- Suggestions ---

    async def refresh_suggestions(self) -> SuggestionResult:
        async with self.gate(SUGGESTIONS):
            self.suggestions = None
            self.suggestions = await suggestions.request_suggestions(self.data)
            return self.suggestions

    def accept_suggestion(self, kind: str, improved: str, item_id: str | None = None) -> ResumeData:
        self.data = suggestions.apply_suggestion(self.data, kind, improved, item_id)
        return self.data

    # --- Interview ---

    async def start_interview(self) -> str:
        async with self.gate(INTERVIEW):
            question = await interview.next_question(self.data, [])
            self.interview_history = [InterviewTurn(role="model", text=question)]
            logger.info("Interview started")
            return question

    async def answer_interview(self, answer: str) -> tuple[InterviewUpdate, str]:
        async with self.gate(INTERVIEW):
            update, question = await interview.interview_step(
                self.data, list(self.interview_history), answer
            )
            # Merge into the snapshot current now, which may include edits
            # made while the request was pending. The returned update carries
            # the ids the merged items were stored under.
            update = interview.assign_ids(self.data, update)
            self.data = interview.merge_update(self.data, update)
            self.interview_history = [
                *self.interview_history,
                InterviewTurn(role="user", text=answer),
                InterviewTurn(role="model", text=question),
            ]
            return update, question

    def reset_interview(self) -> None:
        self.interview_history = []
        logger.info("Interview history cleared")
