"""
自定义预设仓库

把自定义预设序列化为 JSON 数组，保存在键值表的约定键下
(默认 "chartCustomPresets")，与前端本地存储的格式一致。
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from dexchart.config.settings import settings
from dexchart.database import get_session, KeyValueEntry
from dexchart.messages import ErrorMessage
from .store import Preset, PresetImportError, PresetStore, parse_presets

logger = logging.getLogger(__name__)


class PresetRepository:
    """自定义预设的持久化入口

    Example:
        >>> repo = PresetRepository()
        >>> await repo.load_into(store)
        >>> store.save_preset("Scalping", params)
        >>> await repo.persist(store)
    """

    def __init__(self, key: Optional[str] = None) -> None:
        """初始化仓库

        Args:
            key: 存储键，默认读取配置 CUSTOM_PRESETS_KEY
        """
        self.key = key or settings.CUSTOM_PRESETS_KEY

    async def load(self) -> List[Preset]:
        """读取已保存的自定义预设

        存储内容损坏时记录错误并返回空列表，不影响内置预设的使用。
        """
        async with get_session() as session:
            entry = await session.get(KeyValueEntry, self.key)

        if entry is None:
            return []

        try:
            return parse_presets(entry.value)
        except PresetImportError as e:
            logger.error(ErrorMessage.PRESET_STORAGE_CORRUPT.format(error=e))
            return []

    async def save(self, presets: Sequence[Preset]) -> None:
        """覆盖写入自定义预设 (Upsert)"""
        payload = json.dumps([p.to_dict() for p in presets], ensure_ascii=False)

        now = datetime.now(timezone.utc)
        stmt = sqlite_insert(KeyValueEntry).values(key=self.key, value=payload, updated_at=now)
        stmt = stmt.on_conflict_do_update(
            index_elements=["key"],
            set_={"value": payload, "updated_at": now},
        )

        async with get_session() as session:
            await session.execute(stmt)

        logger.debug("自定义预设已保存: key=%s, count=%d", self.key, len(presets))

    async def load_into(self, store: PresetStore) -> int:
        """把已保存的自定义预设载入 store

        Returns:
            载入数量
        """
        presets = await self.load()
        store.load_custom(presets)
        return len(presets)

    async def persist(self, store: PresetStore) -> None:
        """保存 store 当前的全部自定义预设"""
        await self.save(store.custom_presets)
