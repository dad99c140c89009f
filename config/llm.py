from __future__ import annotations  # Configuration schema for LLM routing

from typing import Dict

from pydantic import BaseModel, Field

from .settings import Settings, settings as default_settings


class LlmRoute(BaseModel):  # LLM endpoint configuration
    name: str
    base_url: str
    endpoint: str
    model: str
    timeout_s: float = Field(ge=0.1)
    extra_headers: Dict[str, str] = Field(default_factory=dict)
    options: Dict[str, float] = Field(default_factory=dict)


def ollama_route(cfg: Settings | None = None) -> LlmRoute:  # Build the generation route from current settings
    cfg = cfg or default_settings
    return LlmRoute(
        name="ollama",
        base_url=cfg.OLLAMA_HOST.rstrip("/"),
        endpoint="/api/chat",
        model=cfg.OLLAMA_MODEL,
        timeout_s=cfg.OLLAMA_TIMEOUT_S,
    )
