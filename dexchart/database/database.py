"""
SQLite 存储连接

引擎与会话工厂在首次使用时创建，进程内共享一份；
close_db 之后再次调用会重新创建，测试据此切换临时库。
"""

from __future__ import annotations

from pathlib import Path
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import event

from dexchart.config.settings import settings


# 未配置 DATABASE_URL 时落在仓库根目录 data/ 下
DATA_DIR = Path(__file__).parent.parent.parent / "data"
DATABASE_PATH = DATA_DIR / "dexchart.db"
DATABASE_URL = f"sqlite+aiosqlite:///{DATABASE_PATH}"

# 每个新连接执行一次
_SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
)


class Base(DeclarativeBase):
    """表模型基类"""
    pass


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _apply_pragmas(dbapi_conn, connection_record) -> None:
    cursor = dbapi_conn.cursor()
    for pragma in _SQLITE_PRAGMAS:
        cursor.execute(pragma)
    cursor.close()


def get_database_url() -> str:
    """数据库地址，配置项 DATABASE_URL 优先"""
    return settings.DATABASE_URL or DATABASE_URL


def get_engine() -> AsyncEngine:
    """返回共享的异步引擎，SQLite 连接建立时开启 WAL"""
    global _engine

    if _engine is None:
        url = get_database_url()
        if url == DATABASE_URL:
            DATA_DIR.mkdir(parents=True, exist_ok=True)

        _engine = create_async_engine(url, echo=False, pool_pre_ping=True)

        if url.startswith("sqlite"):
            event.listen(_engine.sync_engine, "connect", _apply_pragmas)

    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory

    if _session_factory is None:
        _session_factory = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    return _session_factory


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """一次读写事务：正常退出时提交，抛出异常时回滚后继续抛出

    Example:
        >>> async with get_session() as session:
        ...     entry = await session.get(KeyValueEntry, "chartCustomPresets")
    """
    session = get_session_factory()()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def init_db() -> None:
    """建表，已存在的表保持不变"""
    from .models import KeyValueEntry  # noqa: F401  注册到 Base.metadata

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """释放连接池并丢弃引擎与会话工厂"""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
