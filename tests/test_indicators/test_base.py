# tests/test_indicators/test_base.py
"""指标基类测试"""

import pytest
from dataclasses import is_dataclass

from dexchart.indicators.base import BaseIndicator, MACDResult, BollingerResult, closes


class TestMACDResult:
    """MACDResult 数据类测试"""

    def test_is_dataclass(self):
        """测试是 dataclass"""
        assert is_dataclass(MACDResult)

    def test_fields_may_be_none(self):
        """测试字段允许为 None（预热期不同）"""
        result = MACDResult(macd_line=None, signal_line=0.5, histogram=None)

        assert result.macd_line is None
        assert result.signal_line == 0.5
        assert result.histogram is None


class TestBollingerResult:
    """BollingerResult 数据类测试"""

    def test_bollinger_result_creation(self):
        """测试 BollingerResult 创建"""
        result = BollingerResult(upper=110.0, middle=100.0, lower=90.0)

        assert result.upper == 110.0
        assert result.middle == 100.0
        assert result.lower == 90.0

    def test_bollinger_result_equality(self):
        """测试 BollingerResult 相等性"""
        assert BollingerResult(120, 100, 80) == BollingerResult(120, 100, 80)


class TestBaseIndicator:
    """BaseIndicator 抽象基类测试"""

    class ConcreteIndicator(BaseIndicator):
        def calculate(self, bars):
            return [None] * len(bars)

    def test_cannot_instantiate_directly(self):
        """测试不能直接实例化"""
        with pytest.raises(TypeError):
            BaseIndicator(14)

    def test_invalid_period_zero(self):
        """测试无效周期 0"""
        with pytest.raises(ValueError) as exc_info:
            self.ConcreteIndicator(0)

        assert "周期必须" in str(exc_info.value)
        assert "ConcreteIndicator" in str(exc_info.value)

    def test_invalid_period_negative(self):
        """测试无效周期负数"""
        with pytest.raises(ValueError):
            self.ConcreteIndicator(-5)

    def test_default_warmup(self):
        """测试默认预热期为 period - 1"""
        assert self.ConcreteIndicator(10).warmup == 9

    def test_repr(self):
        """测试 __repr__ 方法"""
        repr_str = repr(self.ConcreteIndicator(20))

        assert "ConcreteIndicator" in repr_str
        assert "period=20" in repr_str


class TestCloses:
    """closes 辅助函数测试"""

    def test_extracts_close_prices(self, make_bars):
        """测试提取收盘价"""
        assert closes(make_bars([1, 2, 3])) == [1, 2, 3]

    def test_empty(self):
        """测试空序列"""
        assert closes([]) == []
