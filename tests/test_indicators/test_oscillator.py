# tests/test_indicators/test_oscillator.py
"""振荡器指标测试"""

import pytest

from dexchart.data import generate_mock_bars
from dexchart.indicators import RSI, MACD


class TestRSI:
    """RSI 指标测试"""

    def test_rsi_warmup(self, make_bars):
        """测试预热期：下标 < period 为 None"""
        result = RSI(14).calculate(make_bars(range(1, 21)))

        assert len(result) == 20
        assert all(v is None for v in result[:14])
        assert all(v is not None for v in result[14:])

    def test_rsi_monotonic_rise_is_50(self, make_bars):
        """测试单边上涨：平均跌幅为 0 时按 1 处理，RSI = 50"""
        result = RSI(14).calculate(make_bars(range(1, 21)))

        assert all(v == 50.0 for v in result[14:])

    def test_rsi_monotonic_fall_is_zero(self, make_bars):
        """测试单边下跌：平均涨幅为 0，RSI = 0"""
        result = RSI(5).calculate(make_bars(range(20, 0, -1)))

        assert all(v == 0.0 for v in result[5:])

    def test_rsi_known_values(self, make_bars):
        """测试已知数值"""
        result = RSI(2).calculate(make_bars([10, 12, 11, 14]))

        assert result[:2] == [None, None]
        # 涨幅均值 1.0，跌幅均值 0.5，RS = 2
        assert result[2] == pytest.approx(100 - 100 / 3)
        # 涨幅均值 1.5，跌幅均值 0.5，RS = 3
        assert result[3] == pytest.approx(75.0)

    def test_rsi_range(self):
        """测试 RSI 取值范围"""
        bars = generate_mock_bars(200, seed=7)
        result = RSI(14).calculate(bars)

        for value in result[14:]:
            assert 0 <= value <= 100

    def test_rsi_short_series(self, make_bars):
        """测试数据不足"""
        assert RSI(14).calculate(make_bars([1, 2, 3])) == [None, None, None]

    def test_warmup_property(self):
        """测试 warmup 属性等于 period"""
        assert RSI(14).warmup == 14


class TestMACD:
    """MACD 指标测试"""

    def test_default_params(self):
        """测试默认参数"""
        macd = MACD()

        assert macd.fast_period == 12
        assert macd.slow_period == 26
        assert macd.signal_period == 9
        assert macd.strict_signal is False

    def test_macd_known_values(self, make_bars):
        """测试 MACD 线数值：收盘价 1..10，SMA(2) - SMA(3) = 0.5"""
        results = MACD(2, 3, 2).calculate(make_bars(range(1, 11)))

        assert results[0].macd_line is None
        assert results[1].macd_line is None
        assert all(r.macd_line == 0.5 for r in results[2:])

    def test_signal_appears_before_macd(self, make_bars):
        """测试默认模式：未定义的 MACD 以 0 计入，信号线早于 MACD 线出现"""
        results = MACD(2, 3, 2).calculate(make_bars(range(1, 11)))

        assert results[0].signal_line is None
        assert results[1].signal_line == 0.0
        assert results[1].macd_line is None
        assert results[1].histogram is None
        assert results[2].signal_line == 0.25
        assert results[2].histogram == 0.25
        assert all(r.signal_line == 0.5 for r in results[3:])
        assert all(r.histogram == 0.0 for r in results[3:])

    def test_strict_signal(self, make_bars):
        """测试严格模式：信号线只在已定义的 MACD 值上计算"""
        results = MACD(2, 3, 2, strict_signal=True).calculate(make_bars(range(1, 11)))

        assert [r.signal_line for r in results[:3]] == [None, None, None]
        assert results[3].signal_line == 0.5
        assert results[3].histogram == 0.0
        assert results[2].histogram is None

    def test_histogram_identity(self):
        """测试 histogram = macd - signal"""
        bars = generate_mock_bars(120, seed=42)

        for strict in (False, True):
            for r in MACD(12, 26, 9, strict_signal=strict).calculate(bars):
                if r.histogram is not None:
                    assert r.histogram == pytest.approx(r.macd_line - r.signal_line)

    def test_macd_warmup(self):
        """测试 MACD 线预热期"""
        bars = generate_mock_bars(60, seed=1)
        results = MACD(12, 26, 9).calculate(bars)

        assert all(r.macd_line is None for r in results[:25])
        assert all(r.macd_line is not None for r in results[25:])

    def test_fast_greater_than_slow_allowed(self, make_bars):
        """测试快线周期大于慢线周期时不报错"""
        results = MACD(26, 12, 9).calculate(make_bars(range(1, 41)))

        assert results[24].macd_line is None
        assert results[25].macd_line is not None

    def test_empty_series(self):
        """测试空序列"""
        assert MACD().calculate([]) == []

    def test_invalid_periods(self):
        """测试无效周期"""
        with pytest.raises(ValueError):
            MACD(0, 26, 9)
        with pytest.raises(ValueError):
            MACD(12, 26, 0)
        with pytest.raises(ValueError):
            MACD(12, 0, 9)

    def test_repr(self):
        """测试 __repr__"""
        assert repr(MACD(12, 26, 9)) == "MACD(fast=12, slow=26, signal=9, strict_signal=False)"
