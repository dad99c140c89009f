"""Closed-form interview scoring over answer length and proctoring signals."""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

CONTENT_RANGE = (60.0, 500.0)
DELIVERY_RANGE = (40.0, 300.0)
INTEGRITY_THRESHOLD = 0.8
INTEGRITY_PENALTY = -2
HIGH_SEVERITY_PENALTY = -1
CONTENT_WEIGHT = 0.7
DELIVERY_WEIGHT = 0.3

ANSWER_FIELDS = ("answer", "candidateText", "text")


class ProctorSignals(BaseModel):
    integrity: Optional[float] = None
    events: List[Dict[str, Any]] = Field(default_factory=list)


class ScoreReport(BaseModel):
    avg_answer_length: float
    content_score_10: int
    delivery_score_10: int
    adjustment: int
    overall_score_10: int
    overall_score_100: int
    integrity: float
    high_severity_events: int
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _norm10(value: float, bounds: tuple[float, float]) -> int:
    low, high = bounds
    return _round_half_up(_clamp((value - low) / (high - low), 0.0, 1.0) * 10)


def answer_text(entry: Any) -> str:
    """Pull the answer string out of a Q&A entry, whatever key the client used."""

    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping):
        for key in ANSWER_FIELDS:
            value = entry.get(key)
            if isinstance(value, str):
                return value
    return ""


def average_length(qa: Iterable[Any]) -> float:
    lengths = [len(answer_text(entry).strip()) for entry in qa]
    if not lengths:
        return 0.0
    return sum(lengths) / len(lengths)


def _is_high(event: Mapping[str, Any]) -> bool:
    return str(event.get("severity", "")).strip().lower() == "high"


def _catalogue(avg: float, integrity_flag: bool, high_events: int) -> Dict[str, List[str]]:
    strengths: List[str] = []
    weaknesses: List[str] = []
    improvements: List[str] = []
    if avg >= 300:
        strengths.append("Thorough answers with plenty of supporting detail.")
    elif avg >= 120:
        strengths.append("Clear answers of reasonable depth.")
    else:
        weaknesses.append("Answers were brief and lacked supporting detail.")
        improvements.append("Structure answers with situation, action and result, and give a concrete example.")
    if avg >= 60:
        strengths.append("Stayed engaged across the questions.")
    if avg < 300:
        improvements.append("Quantify impact with metrics where possible.")
    if avg > 800:
        weaknesses.append("Some answers ran long; lead with the key point.")
        improvements.append("Keep answers focused and under two minutes.")
    if integrity_flag:
        weaknesses.append("Proctoring flagged low integrity during the session.")
        improvements.append("Stay centred in the camera frame and avoid looking away.")
    if high_events:
        weaknesses.append("High-severity proctoring events were recorded.")
    if not strengths:
        strengths.append("Completed the interview session.")
    return {"strengths": strengths, "weaknesses": weaknesses, "improvements": improvements}


def score(qa: Sequence[Any], proctor: Optional[ProctorSignals | Mapping[str, Any]] = None) -> ScoreReport:
    """Score a transcript.

    Content and delivery map the average trimmed answer length linearly onto
    0-10 over 60-500 and 40-300 characters. Integrity below 0.8 costs two
    points and any high-severity event one more; the weighted total is clamped
    to 0-10.
    """

    signals = proctor if isinstance(proctor, ProctorSignals) else ProctorSignals.model_validate(proctor or {})
    avg = average_length(qa)
    content = _norm10(avg, CONTENT_RANGE)
    delivery = _norm10(avg, DELIVERY_RANGE)

    integrity = 1.0 if signals.integrity is None else float(signals.integrity)
    integrity_flag = integrity < INTEGRITY_THRESHOLD
    high_events = sum(1 for event in signals.events if _is_high(event))
    adjustment = 0
    if integrity_flag:
        adjustment += INTEGRITY_PENALTY
    if high_events:
        adjustment += HIGH_SEVERITY_PENALTY

    raw = content * CONTENT_WEIGHT + delivery * DELIVERY_WEIGHT + adjustment
    overall = _round_half_up(_clamp(raw, 0.0, 10.0))
    return ScoreReport(
        avg_answer_length=round(avg, 1),
        content_score_10=content,
        delivery_score_10=delivery,
        adjustment=adjustment,
        overall_score_10=overall,
        overall_score_100=overall * 10,
        integrity=integrity,
        high_severity_events=high_events,
        **_catalogue(avg, integrity_flag, high_events),
    )


__all__ = ["ProctorSignals", "ScoreReport", "answer_text", "average_length", "score"]
