from flask import current_app

from storage.json_store import JsonFileStore
from storage.memory_store import MemoryStore
from storage.sql_store import SqlAlchemyStore

EXTENSION_KEY = "onboarding_store"


def build_store(config):
    backend = config.get("STORAGE_BACKEND", "sqlalchemy")
    if backend == "sqlalchemy":
        return SqlAlchemyStore()
    if backend == "memory":
        return MemoryStore()
    if backend == "json":
        return JsonFileStore(config["DATA_DIR"])
    raise ValueError(f"Unknown STORAGE_BACKEND '{backend}'")


def init_store(app, store=None):
    """Attach the store to the app; every manager gets it from here."""
    app.extensions[EXTENSION_KEY] = store or build_store(app.config)
    return app.extensions[EXTENSION_KEY]


def get_store():
    return current_app.extensions[EXTENSION_KEY]
