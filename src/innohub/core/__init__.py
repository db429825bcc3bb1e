"""
Core module - Configuration, database, security, errors, and utilities.
"""

from innohub.core.config import get_settings, settings
from innohub.core.database import Base, close_db, get_db, init_db
from innohub.core.redis import close_redis, init_redis, redis_status
from innohub.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    # Redis
    "redis_status",
    "init_redis",
    "close_redis",
    # Security
    "hash_password",
    "verify_password",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
]
