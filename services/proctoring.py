"""Mocked vision checks and proctoring event ingestion."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from storage import EVENTS, REFERENCES, get_store

from .models import ProctorEvent, ReferenceImage, Severity

MATCH_SCORE_WITH_REFERENCE = 0.97


class HeadPose(BaseModel):
    pitch: float = 2
    yaw: float = -1
    roll: float = 0


class VerifyResult(BaseModel):
    ok: bool
    matchScore: float
    multipleFaces: bool
    lookingAway: bool
    facesCount: int
    headPose: HeadPose = Field(default_factory=HeadPose)


def save_reference(session_id: str, image_base64: str) -> ReferenceImage:
    """Store (or overwrite) the reference capture for a session."""

    reference = ReferenceImage(sessionId=session_id, imageBase64=image_base64)
    get_store(REFERENCES).set(session_id, reference.model_dump())
    return reference


def load_reference(session_id: str) -> Optional[ReferenceImage]:
    raw = get_store(REFERENCES).get(session_id)
    return ReferenceImage.model_validate(raw) if raw else None


def verify_frame(session_id: str, image_base64: str) -> VerifyResult:
    """Return stable mock results; only the presence of a reference matters."""

    has_reference = load_reference(session_id) is not None
    faces = 1
    return VerifyResult(
        ok=has_reference,
        matchScore=MATCH_SCORE_WITH_REFERENCE if has_reference else 0.0,
        multipleFaces=faces > 1,
        lookingAway=False,
        facesCount=faces,
    )


def record_event(
    session_id: str,
    event_type: str,
    *,
    severity: Severity = "info",
    payload: Optional[Dict[str, Any]] = None,
) -> ProctorEvent:
    event = ProctorEvent(sessionId=session_id, type=event_type, severity=severity, payload=payload or {})
    store = get_store(EVENTS)
    events = list(store.get(session_id) or [])
    events.append(event.model_dump())
    store.set(session_id, events)
    return event


def session_events(session_id: str) -> List[ProctorEvent]:
    return [ProctorEvent.model_validate(row) for row in get_store(EVENTS).get(session_id) or []]


def integrity_from_events(events: List[ProctorEvent]) -> float:
    """Derive a 0-1 integrity signal: each medium event costs 0.05, each high 0.15."""

    penalty = 0.0
    for event in events:
        if event.severity == "high":
            penalty += 0.15
        elif event.severity == "medium":
            penalty += 0.05
    return max(0.0, round(1.0 - penalty, 2))


__all__ = [
    "HeadPose",
    "VerifyResult",
    "integrity_from_events",
    "load_reference",
    "record_event",
    "save_reference",
    "session_events",
    "verify_frame",
]
