from __future__ import annotations  # Session report domain models

from typing import List, Optional

from pydantic import BaseModel, Field

from services.models import ProctorEvent, utc_now
from services.scoring import ScoreReport


class ReportExchange(BaseModel):  # Question/answer pair captured in a report
    question: str = ""
    answer: str = ""


class SessionReport(BaseModel):  # Stored scoring report for one session
    sessionId: str
    domain: Optional[str] = None
    report: ScoreReport
    qa: List[ReportExchange] = Field(default_factory=list)
    events: List[ProctorEvent] = Field(default_factory=list)
    createdAt: str = Field(default_factory=utc_now)


__all__ = ["ReportExchange", "SessionReport"]
