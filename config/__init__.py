"""Configuration package for the interview proctor backend."""
from .llm import LlmRoute, ollama_route
from .registry import (
    GENERATE_KEY,
    TOKEN_VERIFIER_KEY,
    UPSTREAM_KEY,
    bind_model,
    find_model,
    get_model,
    unbind_model,
)
from .settings import Settings, settings

__all__ = [
    "LlmRoute",
    "ollama_route",
    "GENERATE_KEY",
    "TOKEN_VERIFIER_KEY",
    "UPSTREAM_KEY",
    "bind_model",
    "find_model",
    "get_model",
    "unbind_model",
    "Settings",
    "settings",
]
