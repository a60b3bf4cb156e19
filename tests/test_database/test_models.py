# tests/test_database/test_models.py
"""KeyValueEntry ORM 模型测试"""

import pytest
import pytest_asyncio

from sqlalchemy import select

from dexchart.database import KeyValueEntry, close_db, get_session, init_db


@pytest_asyncio.fixture
async def database(temp_database):
    await init_db()
    yield temp_database
    await close_db()


class TestKeyValueEntryModel:
    """测试 KeyValueEntry ORM 模型"""

    def test_tablename(self):
        """测试表名"""
        assert KeyValueEntry.__tablename__ == "kv_store"

    def test_create_instance(self):
        """测试创建实例"""
        entry = KeyValueEntry(key="chartCustomPresets", value="[]")

        assert entry.key == "chartCustomPresets"
        assert entry.value == "[]"

    def test_repr(self):
        """测试字符串表示"""
        repr_str = repr(KeyValueEntry(key="chartCustomPresets", value="[1, 2]"))

        assert "chartCustomPresets" in repr_str
        assert "size=6" in repr_str


class TestKeyValueEntryCRUD:
    """测试 KeyValueEntry 读写"""

    @pytest.mark.asyncio
    async def test_insert_and_query(self, database):
        """测试插入和查询"""
        async with get_session() as session:
            session.add(KeyValueEntry(key="a", value='{"x": 1}'))

        async with get_session() as session:
            result = await session.execute(select(KeyValueEntry).where(KeyValueEntry.key == "a"))
            found = result.scalar_one()

        assert found.value == '{"x": 1}'
        assert found.updated_at is not None

    @pytest.mark.asyncio
    async def test_update_value(self, database):
        """测试更新"""
        async with get_session() as session:
            session.add(KeyValueEntry(key="a", value="old"))

        async with get_session() as session:
            entry = await session.get(KeyValueEntry, "a")
            entry.value = "new"

        async with get_session() as session:
            assert (await session.get(KeyValueEntry, "a")).value == "new"
