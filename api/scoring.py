"""FastAPI routes for final scoring and report retrieval."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Response
from pydantic import ValidationError

from api.errors import bad_request, internal_error, not_found
from api.schemas import FinalScoreReq, FinalScoreResp
from observability import log_event
from services.models import InterviewSession
from services.proctoring import integrity_from_events, session_events
from services.scoring import ProctorSignals, ScoreReport, answer_text, score
from services.sessions import delete_session, load_session
from session_reports import ReportExchange, SessionReport, SessionReportStore, generate_session_report_pdf


router = APIRouter(prefix="/api/scoring")


def _qa_from_session(state: Optional[InterviewSession]) -> List[Dict[str, Any]]:
    if state is None:
        return []
    return [{"question": question, "answer": text} for question, text in state.exchanges()]


def _signals(session_id: str, proctor: Optional[Dict[str, Any]]) -> ProctorSignals:
    events = session_events(session_id)
    if proctor is not None:
        signals = ProctorSignals.model_validate(proctor)
        if not signals.events and events:
            signals.events = [event.model_dump() for event in events]
        return signals
    return ProctorSignals(
        integrity=integrity_from_events(events) if events else None,
        events=[event.model_dump() for event in events],
    )


@router.post("/final", response_model=FinalScoreResp)
def final(req: FinalScoreReq) -> FinalScoreResp:
    if not req.sessionId:
        raise bad_request("sessionId is required")
    try:
        signals = _signals(req.sessionId, req.proctor)
    except ValidationError as exc:
        raise bad_request(f"invalid proctor payload: {exc.error_count()} error(s)") from exc
    try:
        state = load_session(req.sessionId)
        qa = req.qa if req.qa is not None else _qa_from_session(state)
        report: ScoreReport = score(qa, signals)
        SessionReportStore().save(
            SessionReport(
                sessionId=req.sessionId,
                domain=req.domain or (state.domain if state else None),
                report=report,
                qa=[ReportExchange(question=str(entry.get("question") or ""), answer=answer_text(entry)) for entry in qa],
                events=session_events(req.sessionId),
            )
        )
        if state is not None:
            delete_session(state.id)
    except Exception as exc:  # noqa: BLE001
        raise internal_error("Failed to score interview", exc) from exc
    log_event("scoring_final", req.sessionId, overall=report.overall_score_100)
    return FinalScoreResp(sessionId=req.sessionId, report=report)


@router.get("/report/{session_id}", response_model=SessionReport)
def report(session_id: str) -> SessionReport:
    try:
        return SessionReportStore().load(session_id)
    except KeyError as exc:
        raise not_found("report not found") from exc


@router.get("/report/{session_id}/pdf")
def report_pdf(session_id: str) -> Response:
    try:
        stored = SessionReportStore().load(session_id)
    except KeyError as exc:
        raise not_found("report not found") from exc
    try:
        payload = generate_session_report_pdf(stored)
    except Exception as exc:  # noqa: BLE001
        raise internal_error("Unable to render report", exc) from exc
    return Response(
        content=payload,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="interview-report-{session_id}.pdf"'},
    )
