"""Fixed-size overlapping text chunker."""
from __future__ import annotations

import re
from typing import List

_LINE_ENDINGS = re.compile(r"\r\n?")


def chunk_text(text: str | None, chunk_size: int = 900, overlap: int = 150) -> List[str]:
    """Split ``text`` into windows of ``chunk_size`` characters.

    Each window starts ``chunk_size - overlap`` characters after the previous
    one and the loop stops once a window reaches the end, so the last chunk
    may be shorter and always ends at ``len(text)``. Boundaries ignore words
    and sentences.
    """

    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if overlap < 0 or overlap >= chunk_size:
        raise ValueError("overlap must be in [0, chunk_size)")
    clean = _LINE_ENDINGS.sub("\n", text or "").strip()
    if not clean:
        return []
    chunks: List[str] = []
    start = 0
    while start < len(clean):
        end = min(len(clean), start + chunk_size)
        chunks.append(clean[start:end])
        if end >= len(clean):
            break
        start = end - overlap
    return chunks


__all__ = ["chunk_text"]
