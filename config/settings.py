"""Application settings and configuration management."""
from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    RAG_UPSTREAM_URL: str = ""
    OLLAMA_HOST: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3"
    OLLAMA_TIMEOUT_S: float = Field(default=60.0, ge=0.1)
    STORAGE_ROOT: str = "data/rag"

    STORE_BACKEND: str = "memory"
    DB_PATH: str = Field(default="data/proctor.db")

    TOTAL_QUESTIONS: int = Field(default=6, ge=1)
    CHUNK_SIZE: int = Field(default=900, ge=1)
    CHUNK_OVERLAP: int = Field(default=150, ge=0)
    TOP_K: int = Field(default=3, ge=1)

    DEV_ALLOW_ANON: bool = False
    ADMIN_TOKEN: str = ""
    CORS_ORIGIN: str = ""

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")

    def cors_origins(self) -> List[str]:
        origins = [item.strip() for item in self.CORS_ORIGIN.split(",") if item.strip()]
        return origins or ["*"]


settings = Settings()
