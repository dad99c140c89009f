"""Helpers for creating, loading and retiring interview sessions."""
from __future__ import annotations

import secrets
import time
from typing import Optional

from storage import SESSIONS, KeyValueStore, get_store

from .models import AnswerRecord, InterviewSession


class SessionNotFoundError(KeyError):
    pass


def _store() -> KeyValueStore:
    return get_store(SESSIONS)


def _new_session_id() -> str:
    return f"{int(time.time() * 1000):x}-{secrets.token_hex(3)}"


def build_session(domain: str, *, user_id: Optional[str] = None, email: Optional[str] = None) -> InterviewSession:
    """Return an unsaved ``active`` session at question index 0."""

    return InterviewSession(id=_new_session_id(), userId=user_id, email=email, domain=domain)


def load_session(session_id: str) -> Optional[InterviewSession]:
    """Load the stored state for ``session_id`` if present."""

    raw = _store().get(session_id)
    if raw is None:
        return None
    return InterviewSession.model_validate(raw)


def require_session(session_id: str) -> InterviewSession:
    """Finished sessions are deleted, so a stored session is always active."""

    state = load_session(session_id)
    if state is None:
        raise SessionNotFoundError(session_id)
    return state


def save_session(state: InterviewSession) -> None:
    _store().set(state.id, state.model_dump(mode="json"))


def delete_session(session_id: str) -> bool:
    return _store().delete(session_id)


def record_answer(state: InterviewSession, question_id: Optional[str], text: str) -> AnswerRecord:
    """Append an answer and advance the question index."""

    qid = question_id or (state.questions[-1].id if state.questions else f"q{state.questionIndex + 1}")
    record = AnswerRecord(questionId=qid, text=text)
    state.answers.append(record)
    state.questionIndex += 1
    return record


__all__ = [
    "SessionNotFoundError",
    "build_session",
    "delete_session",
    "load_session",
    "record_answer",
    "require_session",
    "save_session",
]
