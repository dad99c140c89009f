"""In-memory registry for swappable backends (text generation, token checks)."""
from typing import Any, Callable, Dict, Optional

_REGISTRY: Dict[str, Callable[..., Any]] = {}


def bind_model(key: str, fn: Callable[..., Any]) -> None:
    """Bind a callable implementation to a registry key."""
    _REGISTRY[key] = fn


def unbind_model(key: str) -> None:
    _REGISTRY.pop(key, None)


def get_model(key: str) -> Callable[..., Any]:
    """Retrieve a callable from the registry.

    Raises:
        KeyError: If no callable has been bound for ``key``.
    """

    if key not in _REGISTRY:
        raise KeyError(f"Model not bound in registry: {key}")
    return _REGISTRY[key]


def find_model(key: str) -> Optional[Callable[..., Any]]:
    return _REGISTRY.get(key)


GENERATE_KEY = "models.text_generation"
UPSTREAM_KEY = "models.upstream_questions"
TOKEN_VERIFIER_KEY = "auth.token_verifier"
