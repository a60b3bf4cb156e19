# tests/test_data/test_bar_model.py
"""数据模型测试"""

import math
from dataclasses import FrozenInstanceError, is_dataclass

import pytest

from dexchart.data import Bar, EnrichedPoint


@pytest.fixture
def bar():
    return Bar(
        timestamp="2024-01-01T00:00:00+00:00",
        open=2500.0,
        high=2520.0,
        low=2490.0,
        close=2510.0,
        volume=812.5,
    )


class TestBar:
    """Bar 测试"""

    def test_bar_is_dataclass(self):
        """测试 Bar 是 dataclass"""
        assert is_dataclass(Bar)

    def test_immutable(self, bar):
        """测试不可变"""
        with pytest.raises(FrozenInstanceError):
            bar.close = 1.0

    def test_to_dict(self, bar):
        """测试 to_dict 包含六个字段"""
        result = bar.to_dict()

        assert result == {
            "timestamp": "2024-01-01T00:00:00+00:00",
            "open": 2500.0,
            "high": 2520.0,
            "low": 2490.0,
            "close": 2510.0,
            "volume": 812.5,
        }

    def test_from_dict_round_trip(self, bar):
        """测试 from_dict 还原"""
        assert Bar.from_dict(bar.to_dict()) == bar

    def test_from_dict_coerces_numbers(self):
        """测试数值字符串被转换"""
        parsed = Bar.from_dict({
            "timestamp": "t", "open": "1", "high": "2", "low": "0.5", "close": "1.5"
        })

        assert parsed.close == 1.5
        assert parsed.volume == 0.0

    @pytest.mark.parametrize("data", [
        {"timestamp": "t", "open": 1, "high": 2, "low": 0},
        {"timestamp": "t", "open": "x", "high": 2, "low": 0, "close": 1},
        {"timestamp": "t", "open": None, "high": 2, "low": 0, "close": 1},
    ])
    def test_from_dict_invalid(self, data):
        """测试字段缺失或无法解析"""
        with pytest.raises(ValueError) as exc_info:
            Bar.from_dict(data)

        assert "K 线数据解析失败" in str(exc_info.value)

    def test_equality(self, bar):
        """测试相同值相等"""
        assert bar == Bar(**bar.to_dict())


class TestEnrichedPoint:
    """EnrichedPoint 测试"""

    def test_no_indicator_fields_by_default(self, bar):
        """测试默认无指标字段"""
        point = EnrichedPoint(bar=bar)

        assert point.indicator_fields() == {}
        assert point.to_dict() == bar.to_dict()

    def test_set_field(self, bar):
        """测试按输出字段名写入"""
        point = EnrichedPoint(bar=bar)
        point.set_field("ma20", 2505.0)
        point.set_field("upperBand", 2530.0)
        point.set_field("plusDI", 25.0)

        assert point.moving_averages == {20: 2505.0}
        assert point.upper_band == 2530.0
        assert point.plus_di == 25.0
        assert point.to_dict()["ma20"] == 2505.0
        assert point.to_dict()["upperBand"] == 2530.0

    def test_set_field_none_clears(self, bar):
        """测试写入 None 清除字段"""
        point = EnrichedPoint(bar=bar)
        point.set_field("ma5", 1.0)
        point.set_field("ma5", None)
        point.set_field("rsi", None)

        assert point.indicator_fields() == {}

    def test_set_unknown_field(self, bar):
        """测试未知字段"""
        with pytest.raises(KeyError):
            EnrichedPoint(bar=bar).set_field("vwap", 1.0)

    def test_absent_fields_omitted(self, bar):
        """测试未计算的字段被省略而不是 0 或 null"""
        point = EnrichedPoint(bar=bar, rsi=55.0)
        data = point.to_dict()

        assert data["rsi"] == 55.0
        assert "macd" not in data
        assert "stochK" not in data

    def test_zero_is_kept(self, bar):
        """测试 0 与缺失区分"""
        point = EnrichedPoint(bar=bar, histogram=0.0)

        assert point.to_dict()["histogram"] == 0.0

    def test_finite_only(self, bar):
        """测试 finite_only 将 NaN/inf 转为 None"""
        point = EnrichedPoint(bar=bar, adx=math.nan, rsi=math.inf, macd=1.0)
        data = point.to_dict(finite_only=True)

        assert data["adx"] is None
        assert data["rsi"] is None
        assert data["macd"] == 1.0
