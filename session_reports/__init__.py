from __future__ import annotations  # Session report package exports

from .models import ReportExchange, SessionReport
from .pdf import generate_session_report_pdf
from .store import SessionReportStore

__all__ = ["ReportExchange", "SessionReport", "SessionReportStore", "generate_session_report_pdf"]
