from __future__ import annotations

from functools import lru_cache
from typing import Iterable, List, Optional

import structlog
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.vectorstores import VectorStoreRetriever
from supabase import Client

from chatrag.config import settings
from chatrag.database import get_supabase_client
from chatrag.models import RetrieverConfig
from chatrag.rag.embeddings import build_embeddings
from chatrag.rag.vectorstore import build_vector_store

logger = structlog.get_logger()


def build_retriever(
    config: Optional[RetrieverConfig] = None,
    *,
    client: Optional[Client] = None,
    embeddings: Optional[Embeddings] = None,
) -> VectorStoreRetriever:
    """Compose embedding client, vector store and a top-k retriever view.

    Pass ``client`` and ``embeddings`` to reuse existing collaborators; any
    left out are built from ``config`` (or the application settings).
    Errors from the collaborators are not caught here.
    """
    if config is None:
        config = RetrieverConfig.from_settings(settings)
    if embeddings is None:
        embeddings = build_embeddings(config)
    if client is None:
        client = get_supabase_client()

    vector_store = build_vector_store(embeddings, client, config)
    retriever = vector_store.as_retriever(search_kwargs={"k": config.k})
    logger.info("retriever_built", table=config.table_name, k=config.k)
    return retriever


@lru_cache(maxsize=None)
def get_retriever() -> VectorStoreRetriever:
    """Process-wide retriever built from the application settings on first call."""
    return build_retriever()


def retrieve_documents(
    question: str,
    retriever: Optional[VectorStoreRetriever] = None,
) -> List[Document]:
    if not question.strip():
        return []
    if retriever is None:
        retriever = get_retriever()
    docs = retriever.invoke(question)
    logger.info("retriever_results", hits=len(docs))
    return docs


def format_documents(docs: Iterable[Document]) -> str:
    return "\n\n".join(doc.page_content for doc in docs)
