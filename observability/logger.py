"""Event log for interview sessions, document uploads and proctoring.

Every event is a flat dict. Console and ``*-human.log`` receive a one-line
``key=value`` rendering; ``LOG_FILE`` receives the JSON payload.
"""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from pathlib import Path
from typing import Any, Callable

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ENABLE_FILE_LOGS = os.getenv("ENABLE_FILE_LOGS", "1") in ("1", "true", "True")
LOG_FILE = os.getenv("LOG_FILE", "logs/proctor.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", "5242880"))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "5"))

HUMAN_FORMAT = "[%(asctime)s] %(levelname)s %(name)s :: %(message)s"
HUMAN_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Rendered in this order after session/kind when present on the event.
HUMAN_KEYS = (
    "span",
    "ms",
    "domain",
    "purpose",
    "reason",
    "question_index",
    "total",
    "added",
    "severity",
    "type",
    "overall",
)

_events = logging.getLogger("proctor.events")
_events.setLevel(LOG_LEVEL)
_events.propagate = False


def _is_json(record: logging.LogRecord) -> bool:
    return getattr(record, "is_json", False) is True


def _attach(handler: logging.Handler, fmt: logging.Formatter, accept: Callable[[logging.LogRecord], bool]) -> None:
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(fmt)
    handler.addFilter(accept)
    _events.addHandler(handler)


def _rotating(path: Path) -> logging.Handler:
    return logging.handlers.RotatingFileHandler(path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT)


def human_log_path(log_file: str = LOG_FILE) -> Path:
    path = Path(log_file)
    return path.with_name(f"{path.stem if path.suffix == '.log' else path.name}-human.log")


def _ensure_handlers() -> None:
    if _events.handlers:
        return
    human = logging.Formatter(HUMAN_FORMAT, datefmt=HUMAN_DATEFMT)
    _attach(logging.StreamHandler(stream=sys.stdout), human, lambda record: not _is_json(record))
    if not ENABLE_FILE_LOGS:
        return

    json_path = Path(LOG_FILE)
    json_path.parent.mkdir(parents=True, exist_ok=True)
    _attach(_rotating(json_path), logging.Formatter("%(message)s"), _is_json)
    _attach(_rotating(human_log_path()), human, lambda record: not _is_json(record))


def configure_root_logging() -> None:
    """Give module loggers the same console format as the event log."""

    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=LOG_LEVEL, format=HUMAN_FORMAT, datefmt=HUMAN_DATEFMT)


def format_event(evt: dict[str, Any]) -> str:
    parts = [f"session={evt.get('session_id')}", f"kind={evt.get('kind')}"]
    parts.extend(f"{key}={evt[key]}" for key in HUMAN_KEYS if key in evt)
    return " ".join(parts)


def _emit(message: str, *, is_json: bool) -> None:
    record = _events.makeRecord(_events.name, logging.INFO, "", 0, message, (), None)
    record.is_json = is_json  # type: ignore[attr-defined]
    _events.handle(record)


def log_event(kind: str, session_id: str, **fields: Any) -> None:
    """Record one lifecycle event; ``fields`` must be JSON-friendly or str()-able."""

    _ensure_handlers()
    payload: dict[str, Any] = {
        "ts": time.time(),
        "trace": uuid.uuid4().hex,
        "kind": kind,
        "session_id": session_id,
        **fields,
    }
    _emit(format_event(payload), is_json=False)
    if ENABLE_FILE_LOGS:
        _emit(json.dumps(payload, ensure_ascii=False, default=str), is_json=True)


__all__ = ["configure_root_logging", "format_event", "human_log_path", "log_event"]
