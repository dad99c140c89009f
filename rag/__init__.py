"""Chunking, keyword retrieval and document storage."""
from .chunker import chunk_text
from .retriever import ScoredChunk, score_chunk, top_k_chunks
from .store import DocumentChunk, DocumentStore
from .upstream import fetch_questions

__all__ = [
    "DocumentChunk",
    "DocumentStore",
    "ScoredChunk",
    "chunk_text",
    "fetch_questions",
    "score_chunk",
    "top_k_chunks",
]
