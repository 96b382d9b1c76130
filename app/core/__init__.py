"""Core app configuration, database, errors and security."""

from app.core.config import Settings, get_settings
from app.core.database import build_engine, build_session_factory, get_db

__all__ = ["Settings", "get_settings", "build_engine", "build_session_factory", "get_db"]
