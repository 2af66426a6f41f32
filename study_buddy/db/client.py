"""Store factory selected by the STORE_BACKEND setting."""

import logging
from functools import lru_cache

from study_buddy.config.settings import get_settings
from study_buddy.db.store import MemoryStore, Store, SupabaseStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_store() -> Store:
    settings = get_settings()
    if settings.STORE_BACKEND == "memory":
        logger.info("Using in-memory store")
        return MemoryStore()
    if settings.STORE_BACKEND == "supabase":
        from supabase import create_client

        client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
        return SupabaseStore(client)
    raise ValueError(f"Unknown store backend: {settings.STORE_BACKEND}")
