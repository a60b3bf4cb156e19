# tests/conftest.py
"""pytest 全局配置"""

from typing import List, Optional, Sequence

import pytest

from dexchart.data import Bar


def _make_bars(
    closes: Sequence[float],
    highs: Optional[Sequence[float]] = None,
    lows: Optional[Sequence[float]] = None,
) -> List[Bar]:
    """按收盘价构造 K 线，未给出高低价时取收盘价 ±1"""
    bars = []
    for i, close in enumerate(closes):
        high = highs[i] if highs is not None else close + 1
        low = lows[i] if lows is not None else close - 1
        bars.append(Bar(
            timestamp=f"2024-01-01T{i % 24:02d}:00:00+00:00",
            open=close,
            high=high,
            low=low,
            close=close,
            volume=100.0,
        ))
    return bars


@pytest.fixture
def make_bars():
    """K 线构造函数"""
    return _make_bars


@pytest.fixture
def temp_database(tmp_path, monkeypatch):
    """把数据库指向临时文件，并重置全局引擎"""
    from dexchart.config.settings import settings
    from dexchart.database import database

    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(database, "_engine", None)
    monkeypatch.setattr(database, "_session_factory", None)
    yield tmp_path / "test.db"
