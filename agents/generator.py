from __future__ import annotations  # Question, feedback and summary generation with canned fallbacks

import logging
from textwrap import dedent
from typing import Callable, List, Optional, Sequence, Tuple

from langchain_core.prompts import ChatPromptTemplate

from config import GENERATE_KEY, UPSTREAM_KEY, find_model, ollama_route
from config.settings import settings
from llm_gateway import generate as llm_generate
from observability.logger import log_event
from rag import fetch_questions, top_k_chunks

from .types import Fallback, Generated, Generation


logger = logging.getLogger(__name__)

CONTEXT_CHAR_LIMIT = 2400

INTERVIEWER_GUIDANCE = dedent(
    """
    You are a technical interviewer running a mock interview.
    Ask exactly one clear, open-ended question. Do not number it and do not add commentary.
    """
).strip()

FEEDBACK_GUIDANCE = dedent(
    """
    You are an interview coach. Give two or three sentences of constructive feedback on the
    candidate's answer: one thing done well and one concrete improvement.
    """
).strip()

SUMMARY_GUIDANCE = dedent(
    """
    You are an interview coach writing a short end-of-session summary.
    Cover overall performance, the strongest answer and the main area to practise. Keep it under 120 words.
    """
).strip()

QUESTION_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{instructions}"),
        (
            "human",
            (
                "Domain: {domain}\n"
                "Question number: {number}\n\n"
                "Reference material:\n{context}\n\n"
                "Questions already asked:\n{asked}\n\n"
                "Candidate's previous answer:\n{last_answer}\n\n"
                "Ask the next interview question for this domain."
            ),
        ),
    ]
)

FEEDBACK_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{instructions}"),
        (
            "human",
            (
                "Domain: {domain}\n"
                "Reference material:\n{context}\n\n"
                "Question:\n{question}\n\n"
                "Candidate answer:\n{answer}\n\n"
                "Write the feedback."
            ),
        ),
    ]
)

SUMMARY_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{instructions}"),
        ("human", "Domain: {domain}\n\nTranscript:\n{transcript}\n\nWrite the summary."),
    ]
)


def fallback_question(domain: str, number: int) -> str:
    if number <= 1:
        return f"Introduce yourself and explain your experience in {domain}."
    return f"Discuss a project related to {domain} highlighting challenges and impact."


def fallback_feedback(answer: str) -> str:
    words = len(answer.split())
    completeness = min(1.0, words / 120)
    tips = "Add more details and examples." if completeness < 0.5 else "Well elaborated. Consider adding metrics."
    return f"Good answer with {int(completeness * 100 + 0.5)}% completeness. {tips}"


def fallback_summary(domain: str, answered: int, total: int) -> str:
    return (
        f"You answered {answered} of {total} questions on {domain}. "
        "Review the feedback for each answer and practise adding specific examples and measurable outcomes."
    )


def generate_question(
    domain: str,
    chunks: Sequence[str],
    *,
    number: int = 1,
    asked: Sequence[str] = (),
    last_answer: Optional[str] = None,
    session_id: str = "-",
) -> Generation:
    """Produce question ``number`` for ``domain`` from retrieved chunks or upstream questions."""

    query = " ".join(part for part in (domain, last_answer or "") if part)
    context_items = [item.text for item in top_k_chunks(query, chunks, settings.TOP_K)]
    source = "llm+chunks" if context_items else "llm"
    if not context_items:
        upstream = _upstream()(domain, settings.TOP_K)
        if upstream:
            context_items = [f"Sample question: {text}" for text in upstream]
            source = "llm+upstream"
    system, user = _render(
        QUESTION_PROMPT,
        instructions=INTERVIEWER_GUIDANCE,
        domain=domain,
        number=number,
        context=_context_block(context_items),
        asked=_bullets(asked),
        last_answer=_clip(last_answer or "") or "None yet.",
    )
    return _complete(
        system,
        user,
        source=source,
        fallback=fallback_question(domain, number),
        purpose="question",
        session_id=session_id,
    )


def generate_feedback(
    domain: str,
    question: str,
    answer: str,
    chunks: Sequence[str],
    *,
    session_id: str = "-",
) -> Generation:
    context_items = [item.text for item in top_k_chunks(f"{question} {answer}", chunks, settings.TOP_K)]
    system, user = _render(
        FEEDBACK_PROMPT,
        instructions=FEEDBACK_GUIDANCE,
        domain=domain,
        context=_context_block(context_items),
        question=question or "(unknown question)",
        answer=_clip(answer),
    )
    return _complete(
        system,
        user,
        source="llm+chunks" if context_items else "llm",
        fallback=fallback_feedback(answer),
        purpose="feedback",
        session_id=session_id,
    )


def generate_summary(
    domain: str,
    exchanges: Sequence[Tuple[str, str]],
    *,
    total: int,
    session_id: str = "-",
) -> Generation:
    transcript = "\n\n".join(f"Q: {question}\nA: {_clip(answer, 600)}" for question, answer in exchanges)
    system, user = _render(
        SUMMARY_PROMPT,
        instructions=SUMMARY_GUIDANCE,
        domain=domain,
        transcript=transcript or "No answers were given.",
    )
    return _complete(
        system,
        user,
        source="llm",
        fallback=fallback_summary(domain, len(exchanges), total),
        purpose="summary",
        session_id=session_id,
    )


def _complete(system: str, user: str, *, source: str, fallback: str, purpose: str, session_id: str) -> Generation:
    try:
        text = (_backend()(system=system, user=user) or "").strip()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Generation failed purpose=%s: %s", purpose, exc)
        log_event("generation_fallback", session_id, purpose=purpose, reason="error")
        return Fallback(text=fallback, reason=f"error: {exc}")
    if not text:
        log_event("generation_fallback", session_id, purpose=purpose, reason="empty")
        return Fallback(text=fallback, reason="empty")
    return Generated(text=text, source=source)


def _backend() -> Callable[..., str]:
    bound = find_model(GENERATE_KEY)
    if bound is not None:
        return bound
    return lambda *, system, user: llm_generate(system, user, cfg=ollama_route())


def _upstream() -> Callable[[str, int], List[str]]:
    bound = find_model(UPSTREAM_KEY)
    if bound is not None:
        return bound
    return fetch_questions


def _render(prompt: ChatPromptTemplate, **values: object) -> Tuple[str, str]:  # Split formatted messages into system/user text
    system_parts: List[str] = []
    user_parts: List[str] = []
    for message in prompt.format_messages(**values):
        target = system_parts if message.type == "system" else user_parts
        target.append(str(message.content))
    return "\n\n".join(system_parts), "\n\n".join(user_parts)


def _context_block(items: Sequence[str]) -> str:
    if not items:
        return "None available."
    block = "\n---\n".join(item.strip() for item in items if item.strip())
    if len(block) <= CONTEXT_CHAR_LIMIT:
        return block
    return block[: CONTEXT_CHAR_LIMIT - 1].rstrip() + "…"


def _bullets(entries: Sequence[str]) -> str:
    lines = [item.strip() for item in entries if item and item.strip()]
    if not lines:
        return "None."
    return "\n".join(f"- {line}" for line in lines)


def _clip(text: str, limit: int = 1200) -> str:
    compact = " ".join(text.split())
    if len(compact) <= limit:
        return compact
    return compact[: limit - 1].rstrip() + "…"


__all__ = [
    "fallback_feedback",
    "fallback_question",
    "fallback_summary",
    "generate_feedback",
    "generate_question",
    "generate_summary",
]
