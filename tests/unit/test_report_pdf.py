from services.models import ProctorEvent
from services.scoring import score
from session_reports import ReportExchange, SessionReport, generate_session_report_pdf


def test_pdf_renders_report_with_transcript_and_events():
    qa = [{"question": "Explain caching…", "answer": "Caching stores results • to reuse them. " * 20}]
    report = SessionReport(
        sessionId="s-1",
        domain="web-development",
        report=score(qa),
        qa=[ReportExchange(question=qa[0]["question"], answer=qa[0]["answer"])],
        events=[ProctorEvent(sessionId="s-1", type="looking_away", severity="high")],
    )

    payload = generate_session_report_pdf(report)

    assert isinstance(payload, bytes)
    assert payload.startswith(b"%PDF")


def test_pdf_renders_empty_report():
    report = SessionReport(sessionId="s-2", report=score([]))

    assert generate_session_report_pdf(report).startswith(b"%PDF")
