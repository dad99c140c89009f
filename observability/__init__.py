"""Observability utilities for the interview proctor backend."""
from .logger import configure_root_logging, log_event
from .tracing import span

__all__ = ["configure_root_logging", "log_event", "span"]
