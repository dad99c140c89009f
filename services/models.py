"""Session and proctoring state models."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

SessionStatus = Literal["active", "ended"]
Severity = Literal["info", "low", "medium", "high"]


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


class AskedQuestion(BaseModel):
    id: str
    text: str


class AnswerRecord(BaseModel):
    questionId: str
    text: str
    timestamp: str = Field(default_factory=utc_now)


class InterviewSession(BaseModel):
    """Server-side state for one interview from start to finish."""

    id: str
    userId: Optional[str] = None
    email: Optional[str] = None
    domain: str
    questionIndex: int = 0
    questions: List[AskedQuestion] = Field(default_factory=list)
    answers: List[AnswerRecord] = Field(default_factory=list)
    startedAt: str = Field(default_factory=utc_now)
    status: SessionStatus = "active"

    def question_text(self, question_id: Optional[str]) -> str:
        for question in self.questions:
            if question.id == question_id:
                return question.text
        return self.questions[-1].text if self.questions else ""

    def exchanges(self) -> List[tuple[str, str]]:
        return [(self.question_text(answer.questionId), answer.text) for answer in self.answers]


class ReferenceImage(BaseModel):
    sessionId: str
    imageBase64: str
    createdAt: str = Field(default_factory=utc_now)


class ProctorEvent(BaseModel):
    sessionId: str
    type: str
    severity: Severity = "info"
    payload: Dict[str, Any] = Field(default_factory=dict)
    at: str = Field(default_factory=utc_now)


__all__ = [
    "AnswerRecord",
    "AskedQuestion",
    "InterviewSession",
    "ProctorEvent",
    "ReferenceImage",
    "Severity",
    "SessionStatus",
    "utc_now",
]
