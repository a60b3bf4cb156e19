"""数据库模块

提供 SQLite 持久化层，以键值表保存自定义预设等数据。
"""

from .database import (
    Base,
    get_engine,
    get_session_factory,
    get_session,
    init_db,
    close_db,
    DATABASE_PATH,
)
from .models import KeyValueEntry

__all__ = [
    "Base",
    "KeyValueEntry",
    "get_engine",
    "get_session_factory",
    "get_session",
    "init_db",
    "close_db",
    "DATABASE_PATH",
]
