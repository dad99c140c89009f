"""Client for the external RAG service that serves pre-generated questions."""
from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from config.settings import settings

logger = logging.getLogger(__name__)


def fetch_questions(domain: str, limit: int = 5, *, client: Optional[httpx.Client] = None) -> List[str]:
    """Return upstream questions for ``domain``; any failure yields ``[]``."""

    base = settings.RAG_UPSTREAM_URL.strip().rstrip("/")
    if not base:
        return []
    url = f"{base}/questions"
    params = {"domain": domain, "limit": limit}
    try:
        if client is not None:
            response = client.get(url, params=params)
        else:
            with httpx.Client(timeout=settings.OLLAMA_TIMEOUT_S) as http_client:
                response = http_client.get(url, params=params)
        if response.status_code != 200:
            logger.warning("Upstream RAG returned status %s for domain=%s", response.status_code, domain)
            return []
        return _parse_questions(response.json())[:limit]
    except Exception as exc:  # noqa: BLE001
        logger.warning("Upstream RAG unavailable for domain=%s: %s", domain, exc)
        return []


def _parse_questions(data: Any) -> List[str]:  # Accept {"questions": [...]} or a bare list of str/{text}
    items = data.get("questions") if isinstance(data, dict) else data
    if not isinstance(items, list):
        return []
    questions: List[str] = []
    for item in items:
        if isinstance(item, dict):
            item = item.get("text") or item.get("question")
        if isinstance(item, str) and item.strip():
            questions.append(item.strip())
    return questions


__all__ = ["fetch_questions"]
