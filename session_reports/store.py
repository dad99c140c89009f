from __future__ import annotations  # Session report persistence layer

from typing import List, Optional

from storage import REPORTS, KeyValueStore, get_store

from .models import SessionReport


class SessionReportStore:  # Store-backed persistence for scoring reports
    def __init__(self, store: Optional[KeyValueStore] = None) -> None:
        self._store = store or get_store(REPORTS)

    def save(self, report: SessionReport) -> None:  # Insert or replace the report for its session
        self._store.set(report.sessionId, report.model_dump(mode="json"))

    def load(self, session_id: str) -> SessionReport:  # Load a report or raise KeyError
        raw = self._store.get(session_id)
        if raw is None:
            raise KeyError(session_id)
        return SessionReport.model_validate(raw)

    def list_reports(self) -> List[SessionReport]:  # All stored reports, newest first
        reports = [SessionReport.model_validate(self._store.get(key)) for key in self._store.keys()]
        return sorted(reports, key=lambda item: item.createdAt, reverse=True)


__all__ = ["SessionReportStore"]
