from functools import lru_cache

import structlog
from supabase import Client, create_client

from chatrag.config import settings
from chatrag.exceptions import RetrieverConfigurationError

logger = structlog.get_logger()


@lru_cache
def get_supabase_client() -> Client:
    """Shared Supabase client, created on first use."""
    if not settings.supabase_configured:
        raise RetrieverConfigurationError(
            "SUPABASE_URL and SUPABASE_API_KEY must be set to build the retriever"
        )

    client = create_client(
        settings.supabase_url,
        settings.supabase_api_key.get_secret_value(),
    )
    logger.info("supabase_client_created", url=settings.supabase_url)
    return client
