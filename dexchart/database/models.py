"""
数据库 ORM 模型

以键值表保存前端约定的持久化数据（如自定义预设 JSON 数组）。
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueEntry(Base):
    """键值存储 ORM 模型

    Attributes:
        key: 约定的存储键，如 "chartCustomPresets"
        value: JSON 文本
        updated_at: 最后写入时间 (UTC)
    """

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(
        String(100),
        primary_key=True,
        comment="存储键"
    )
    value: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="JSON 文本"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        comment="更新时间"
    )

    def __repr__(self) -> str:
        return f"<KeyValueEntry(key={self.key}, size={len(self.value or '')})>"
