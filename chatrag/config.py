from functools import lru_cache
from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment or defaults."""

    # Embeddings (Ollama)
    ollama_base_url: str = "http://localhost:11434"
    embedding_model: str = "nomic-embed-text"

    # Vector DB (Supabase)
    supabase_url: Optional[str] = None
    supabase_api_key: Optional[SecretStr] = None
    documents_table: str = "documents"
    match_query_name: str = "match_documents"
    retriever_k: int = 4

    # Application
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_api_key)


@lru_cache
def get_settings() -> "Settings":
    """Late-bind settings so tests can override env vars."""
    return Settings()


settings = get_settings()
