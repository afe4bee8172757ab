"""Shared dependencies for API routes."""

from services.session import EditorSession

_session: EditorSession | None = None


def get_session() -> EditorSession:
    global _session
    if _session is None:
        _session = EditorSession()
    return _session


def reset_session() -> EditorSession:
    """Start over with a fresh session (seed data, default template)."""
    global _session
    _session = EditorSession()
    return _session
