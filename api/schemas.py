"""Pydantic schemas for the HTTP API."""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from services.proctoring import HeadPose
from services.scoring import ScoreReport


class Request(BaseModel):
    model_config = ConfigDict(extra="ignore")


class StartReq(Request):
    domainId: Optional[str] = None
    domain: Optional[str] = None
    domain_id: Optional[str] = None
    candidateEmail: Optional[str] = None

    def resolved_domain(self) -> str:
        for value in (self.domainId, self.domain, self.domain_id):
            if value and value.strip():
                return value.strip()
        return ""


class AnswerReq(Request):
    sessionId: Optional[str] = None
    questionId: Optional[str] = None
    candidateText: Optional[str] = None


class FinishReq(Request):
    sessionId: Optional[str] = None


class QuestionPayload(BaseModel):
    id: str
    text: str
    source: Literal["generated", "fallback"] = "generated"


class Progress(BaseModel):
    current: int
    total: int


class StartResp(BaseModel):
    sessionId: str
    firstQ: QuestionPayload
    progress: Progress


class AnswerResp(BaseModel):
    feedback: str
    feedbackSource: Literal["generated", "fallback"] = "generated"
    nextQuestion: Optional[QuestionPayload] = None
    progress: Progress


class SessionSummary(BaseModel):
    sessionId: str
    domain: str
    startedAt: str
    finishedAt: str
    questionsAsked: int
    answered: int
    text: str
    source: Literal["generated", "fallback"]


class FinishResp(BaseModel):
    summary: SessionSummary


class UploadReq(Request):
    domainId: Optional[str] = None
    text: Optional[str] = None


class UploadResp(BaseModel):
    ok: bool = True
    added: int
    total: int


class ChunkOut(BaseModel):
    id: str
    text: str


class ChunksResp(BaseModel):
    domainId: str
    total: int
    chunks: List[ChunkOut] = Field(default_factory=list)


class DomainsResp(BaseModel):
    domains: List[str] = Field(default_factory=list)


class FinalScoreReq(Request):
    sessionId: Optional[str] = None
    domain: Optional[str] = None
    qa: Optional[List[Dict[str, Any]]] = None
    proctor: Optional[Dict[str, Any]] = None


class FinalScoreResp(BaseModel):
    sessionId: str
    report: ScoreReport


class VisionReq(Request):
    sessionId: Optional[str] = None
    imageBase64: Optional[str] = None


class OkResp(BaseModel):
    ok: bool = True


class VerifyResp(BaseModel):
    ok: bool
    matchScore: float
    multipleFaces: bool
    lookingAway: bool
    facesCount: int
    headPose: HeadPose


class EventReq(Request):
    sessionId: Optional[str] = None
    type: Optional[str] = None
    severity: Optional[Literal["info", "low", "medium", "high"]] = None
    payload: Optional[Dict[str, Any]] = None


class AuthUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    uid: str
    email: Optional[str] = None


class MeResp(BaseModel):
    user: AuthUser
