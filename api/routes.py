"""FastAPI routes for interview session control."""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from agents.generator import generate_feedback, generate_question, generate_summary
from agents.types import Generation
from api.auth import optional_user
from api.errors import bad_request, internal_error, not_found
from api.schemas import (
    AnswerReq,
    AnswerResp,
    AuthUser,
    FinishReq,
    FinishResp,
    Progress,
    QuestionPayload,
    SessionSummary,
    StartReq,
    StartResp,
)
from config.settings import settings
from observability import log_event, span
from rag import DocumentStore
from services.models import AskedQuestion, InterviewSession, utc_now
from services.sessions import (
    SessionNotFoundError,
    build_session,
    delete_session,
    record_answer,
    require_session,
    save_session,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/interview")


def _source(result: Generation) -> str:
    return "fallback" if result.kind == "fallback" else "generated"


def _domain_chunks(domain: str) -> List[str]:
    return [chunk.text for chunk in DocumentStore().load_chunks(domain)]


def _ask(state: InterviewSession, chunks: List[str], last_answer: Optional[str] = None) -> QuestionPayload:
    number = len(state.questions) + 1
    with span("generate_question", state.id):
        result = generate_question(
            state.domain,
            chunks,
            number=number,
            asked=[question.text for question in state.questions],
            last_answer=last_answer,
            session_id=state.id,
        )
    question = AskedQuestion(id=f"q{number}", text=result.text)
    state.questions.append(question)
    return QuestionPayload(id=question.id, text=question.text, source=_source(result))


def _progress(state: InterviewSession) -> Progress:
    return Progress(current=state.questionIndex, total=settings.TOTAL_QUESTIONS)


@router.post("/start", response_model=StartResp)
def start(req: StartReq, user: Optional[AuthUser] = Depends(optional_user)) -> StartResp:
    domain = req.resolved_domain()
    if not domain:
        raise bad_request("domainId (or domain) is required")
    try:
        state = build_session(
            domain,
            user_id=user.uid if user else None,
            email=(user.email if user else None) or req.candidateEmail,
        )
        first = _ask(state, _domain_chunks(domain))
        save_session(state)
    except Exception as exc:  # noqa: BLE001
        raise internal_error("Failed to start interview", exc) from exc
    log_event("session_start", state.id, domain=domain, total=settings.TOTAL_QUESTIONS)
    return StartResp(sessionId=state.id, firstQ=first, progress=_progress(state))


@router.post("/answer", response_model=AnswerResp)
def answer(req: AnswerReq) -> AnswerResp:
    if not req.sessionId or not req.candidateText:
        raise bad_request("sessionId and candidateText are required")
    try:
        state = require_session(req.sessionId)
    except SessionNotFoundError as exc:
        raise not_found() from exc

    try:
        question_text = state.question_text(req.questionId)
        record = record_answer(state, req.questionId, req.candidateText)
        chunks = _domain_chunks(state.domain)
        with span("generate_feedback", state.id):
            feedback = generate_feedback(state.domain, question_text, record.text, chunks, session_id=state.id)
        next_question = None
        if state.questionIndex < settings.TOTAL_QUESTIONS:
            next_question = _ask(state, chunks, last_answer=record.text)
        save_session(state)
    except Exception as exc:  # noqa: BLE001
        raise internal_error("Failed to process answer", exc) from exc
    log_event("session_answer", state.id, question_index=state.questionIndex, total=settings.TOTAL_QUESTIONS)
    return AnswerResp(
        feedback=feedback.text,
        feedbackSource=_source(feedback),
        nextQuestion=next_question,
        progress=_progress(state),
    )


@router.post("/finish", response_model=FinishResp)
def finish(req: FinishReq) -> FinishResp:
    if not req.sessionId:
        raise bad_request("sessionId is required")
    try:
        state = require_session(req.sessionId)
    except SessionNotFoundError as exc:
        raise not_found() from exc

    try:
        with span("generate_summary", state.id):
            result = generate_summary(
                state.domain,
                state.exchanges(),
                total=settings.TOTAL_QUESTIONS,
                session_id=state.id,
            )
        state.status = "ended"
        summary = SessionSummary(
            sessionId=state.id,
            domain=state.domain,
            startedAt=state.startedAt,
            finishedAt=utc_now(),
            questionsAsked=len(state.questions),
            answered=len(state.answers),
            text=result.text,
            source=_source(result),
        )
        delete_session(state.id)
    except Exception as exc:  # noqa: BLE001
        raise internal_error("Failed to finish interview", exc) from exc
    log_event("session_finish", state.id, domain=state.domain, total=len(state.answers))
    return FinishResp(summary=summary)
