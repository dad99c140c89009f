"""Keyword retriever: raw term-frequency scoring over chunks."""
from __future__ import annotations

import re
from typing import List, Sequence

from pydantic import BaseModel

_TERM_SPLIT = re.compile(r"[^a-z0-9]+")


class ScoredChunk(BaseModel):
    id: int
    text: str
    score: int


def query_terms(query: str | None) -> List[str]:
    return [term for term in _TERM_SPLIT.split((query or "").lower()) if term]


def score_chunk(query: str | None, chunk: str | None) -> int:
    """Sum of non-overlapping occurrence counts of each query term."""

    text = (chunk or "").lower()
    if not text:
        return 0
    return sum(text.count(term) for term in query_terms(query))


def top_k_chunks(query: str | None, chunks: Sequence[str], k: int = 3) -> List[ScoredChunk]:
    """Return at most ``k`` chunks ordered by descending score.

    ``sorted`` is stable, so equal scores keep their insertion order.
    """

    if k <= 0:
        return []
    scored = [ScoredChunk(id=idx, text=text, score=score_chunk(query, text)) for idx, text in enumerate(chunks)]
    ranked = sorted(scored, key=lambda item: item.score, reverse=True)
    return ranked[:k]


__all__ = ["ScoredChunk", "query_terms", "score_chunk", "top_k_chunks"]
