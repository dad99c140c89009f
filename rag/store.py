"""Per-domain document chunk storage with a filesystem-backed fallback."""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel

from config.settings import settings
from storage import CHUNKS, KeyValueStore, get_store

from .chunker import chunk_text

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = (".txt", ".md")


class DocumentChunk(BaseModel):
    id: str
    text: str


class DocumentStore:
    """Append-only chunk lists keyed by domain id."""

    def __init__(self, store: Optional[KeyValueStore] = None, storage_root: Optional[str] = None) -> None:
        self._store = store or get_store(CHUNKS)
        self._root = Path(storage_root or settings.STORAGE_ROOT)

    def append_text(self, domain_id: str, text: str) -> Tuple[int, int]:
        """Chunk ``text`` onto the end of ``domain_id`` and return (added, total)."""

        pieces = chunk_text(text, chunk_size=settings.CHUNK_SIZE, overlap=settings.CHUNK_OVERLAP)
        existing = self._store.get(domain_id) or []
        stamp = int(time.time() * 1000)
        added = [DocumentChunk(id=f"{stamp}-{idx}", text=piece).model_dump() for idx, piece in enumerate(pieces)]
        combined = list(existing) + added
        self._store.set(domain_id, combined)
        return len(added), len(combined)

    def stored_chunks(self, domain_id: str) -> List[DocumentChunk]:
        return [DocumentChunk(**row) for row in self._store.get(domain_id) or []]

    def load_chunks(self, domain_id: str) -> List[DocumentChunk]:
        """Uploaded chunks for the domain, else chunks read from ``STORAGE_ROOT/<domain>``."""

        chunks = self.stored_chunks(domain_id)
        if chunks:
            return chunks
        return self._chunks_from_disk(domain_id)

    def domains(self) -> List[str]:
        return sorted(key for key in self._store.keys() if self._store.get(key))

    def filesystem_domains(self) -> List[str]:
        try:
            return sorted(entry.name for entry in self._root.iterdir() if entry.is_dir() and not entry.name.startswith("."))
        except OSError as exc:
            logger.warning("Unable to list storage root %s: %s", self._root, exc)
            return []

    def _chunks_from_disk(self, domain_id: str) -> List[DocumentChunk]:
        folder = self._root / domain_id
        chunks: List[DocumentChunk] = []
        try:
            if not folder.is_dir() or folder.resolve().parent != self._root.resolve():
                return []
            files = sorted(path for path in folder.iterdir() if path.suffix.lower() in TEXT_SUFFIXES)
            for path in files:
                text = path.read_text(encoding="utf-8", errors="ignore")
                for idx, piece in enumerate(
                    chunk_text(text, chunk_size=settings.CHUNK_SIZE, overlap=settings.CHUNK_OVERLAP)
                ):
                    chunks.append(DocumentChunk(id=f"{path.stem}-{idx}", text=piece))
        except (OSError, ValueError) as exc:
            logger.warning("Unable to read chunks for domain=%s: %s", domain_id, exc)
            return []
        return chunks


__all__ = ["DocumentChunk", "DocumentStore", "TEXT_SUFFIXES"]
