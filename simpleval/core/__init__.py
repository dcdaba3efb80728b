"""Core modules - configurações principais"""
from simpleval.core.config import settings
from simpleval.core.database import get_db, Base, SessionLocal, transactional
from simpleval.core.cache import cache, CacheManager
from simpleval.core.logging_config import setup_logging

__all__ = [
    "settings",
    "get_db",
    "Base",
    "SessionLocal",
    "transactional",
    "cache",
    "CacheManager",
    "setup_logging",
]
