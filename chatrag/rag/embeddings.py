from __future__ import annotations

import structlog
from langchain_ollama import OllamaEmbeddings

from chatrag.models import RetrieverConfig

logger = structlog.get_logger()


def build_embeddings(config: RetrieverConfig) -> OllamaEmbeddings:
    """Embedding client for the local Ollama server. No request is made here."""
    embeddings = OllamaEmbeddings(
        model=config.embedding_model,
        base_url=config.ollama_base_url,
    )
    logger.info(
        "embedder_configured",
        model=config.embedding_model,
        base_url=config.ollama_base_url,
    )
    return embeddings
