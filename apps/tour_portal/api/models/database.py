"""
Database Access Module
=======================

Store access for the Tour API. Route handlers get the store through the
get_store() dependency so tests can swap in a temporary database.
"""

from functools import lru_cache

from src.database.tour_store import SQLiteTourStore

from ..config import settings


@lru_cache(maxsize=1)
def _default_store() -> SQLiteTourStore:
    store = SQLiteTourStore(settings.database_path)
    store.init_schema()
    return store


def get_store() -> SQLiteTourStore:
    """FastAPI dependency returning the configured tour store"""
    return _default_store()
