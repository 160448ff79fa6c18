from __future__ import annotations

import structlog
from langchain_community.vectorstores import SupabaseVectorStore
from langchain_core.embeddings import Embeddings
from supabase import Client

from chatrag.models import RetrieverConfig

logger = structlog.get_logger()


def build_vector_store(
    embeddings: Embeddings,
    client: Client,
    config: RetrieverConfig,
) -> SupabaseVectorStore:
    """Supabase-backed vector store.

    Similarity search runs server-side through the ``query_name`` function
    over ``table_name``; nothing is queried until the store is searched.
    """
    store = SupabaseVectorStore(
        embedding=embeddings,
        client=client,
        table_name=config.table_name,
        query_name=config.query_name,
    )
    logger.info(
        "vector_store_configured",
        backend="supabase",
        table=config.table_name,
        query=config.query_name,
    )
    return store
