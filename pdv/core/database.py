"""
Record store wiring for the application
"""

from typing import Optional

import structlog

from pdv.core.config import get_settings
from pdv.core.store import JsonStore

logger = structlog.get_logger(__name__)
settings = get_settings()

_store: Optional[JsonStore] = None


def init_store(data_dir: Optional[str] = None) -> JsonStore:
    """Create and initialize the process-wide store"""
    global _store
    _store = JsonStore(data_dir or settings.DATA_DIR)
    _store.initialize()
    return _store


def get_store() -> JsonStore:
    """Dependency to get the record store"""
    if _store is None:
        return init_store()
    return _store
