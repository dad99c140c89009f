import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENABLE_FILE_LOGS", "0")

from config.registry import GENERATE_KEY, TOKEN_VERIFIER_KEY, UPSTREAM_KEY, bind_model, unbind_model
from config.settings import settings
from storage import reset_stores


class GenerationRecorder:
    """Fake text-generation backend that remembers every prompt it saw."""

    def __init__(self, reply="Describe how you would design a REST API."):
        self.reply = reply
        self.calls = []

    def __call__(self, *, system, user):
        self.calls.append({"system": system, "user": user})
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply

    def count(self, marker):
        return sum(1 for call in self.calls if marker in call["system"])


def _unreachable(*, system, user):
    raise ConnectionError("generation endpoint unreachable")


@pytest.fixture(autouse=True)
def isolated_backend(monkeypatch, tmp_path):
    storage_root = tmp_path / "rag"
    storage_root.mkdir()
    monkeypatch.setattr(settings, "STORE_BACKEND", "memory", raising=False)
    monkeypatch.setattr(settings, "DB_PATH", str(tmp_path / "test.db"), raising=False)
    monkeypatch.setattr(settings, "STORAGE_ROOT", str(storage_root), raising=False)
    monkeypatch.setattr(settings, "RAG_UPSTREAM_URL", "", raising=False)
    monkeypatch.setattr(settings, "DEV_ALLOW_ANON", False, raising=False)
    monkeypatch.setattr(settings, "ADMIN_TOKEN", "", raising=False)
    monkeypatch.setattr(settings, "TOTAL_QUESTIONS", 6, raising=False)
    reset_stores()
    bind_model(GENERATE_KEY, _unreachable)
    bind_model(UPSTREAM_KEY, lambda domain, limit: [])
    try:
        yield storage_root
    finally:
        for key in (GENERATE_KEY, UPSTREAM_KEY, TOKEN_VERIFIER_KEY):
            unbind_model(key)
        reset_stores()


@pytest.fixture
def fake_llm():
    recorder = GenerationRecorder()
    bind_model(GENERATE_KEY, recorder)
    return recorder


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from api_server import create_app

    return TestClient(create_app())
