"""
Arcade Tours - Persistence
Tour storage used by the catalog and the REST API.

Usage:
    from src.database.tour_store import SQLiteTourStore

    store = SQLiteTourStore(settings.database_path)
    store.init_schema()
"""
