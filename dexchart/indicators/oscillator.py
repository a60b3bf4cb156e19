# dexchart/indicators/oscillator.py
"""振荡器指标模块"""

from typing import List, Optional, Sequence

from dexchart.data.models import Bar
from dexchart.messages import ErrorMessage
from .base import BaseIndicator, MACDResult, closes
from .ma import SMA, rolling_mean


class RSI(BaseIndicator):
    """相对强弱指标 (Relative Strength Index)

    计算公式:
        RSI = 100 - 100 / (1 + RS)
        RS = 平均涨幅 / 平均跌幅

    平均涨跌幅取最近 N 根 K 线的简单平均（非 Wilder 平滑）。
    平均跌幅为 0 时分母按 1 处理，此时 RS 等于平均涨幅。

    Example:
        >>> rsi = RSI(14)
        >>> values = rsi.calculate(bars)
        >>> oversold = [i for i, v in enumerate(values) if v is not None and v < 30]
    """

    def __init__(self, period: int = 14) -> None:
        """初始化 RSI

        Args:
            period: 计算周期，默认 14
        """
        super().__init__(period)

    def calculate(self, bars: Sequence[Bar]) -> List[Optional[float]]:
        """计算 RSI 序列

        Args:
            bars: K 线序列

        Returns:
            RSI 值列表，下标 < N 处为 None
        """
        prices = closes(bars)

        # 首根 K 线没有前值，涨跌幅记为 0
        gains = [0.0] * len(prices)
        losses = [0.0] * len(prices)
        for i in range(1, len(prices)):
            change = prices[i] - prices[i - 1]
            gains[i] = max(change, 0.0)
            losses[i] = max(-change, 0.0)

        result: List[Optional[float]] = []
        for i in range(len(prices)):
            if i < self.period:
                result.append(None)
                continue

            avg_gain = sum(gains[i - self.period + 1:i + 1]) / self.period
            avg_loss = sum(losses[i - self.period + 1:i + 1]) / self.period

            rs = avg_gain / (avg_loss if avg_loss != 0 else 1.0)
            result.append(100.0 - 100.0 / (1 + rs))

        return result

    @property
    def warmup(self) -> int:
        return self.period


class MACD(BaseIndicator):
    """MACD 指标 (Moving Average Convergence Divergence)

    计算公式:
        MACD Line = SMA(fast) - SMA(slow)
        Signal Line = SMA(MACD Line, signal)
        Histogram = MACD Line - Signal Line

    默认模式下，MACD 线尚未定义的位置以 0 计入信号线窗口，
    因此信号线会早于 MACD 线出现。strict_signal=True 时信号线
    只在已定义的 MACD 值上计算。

    快慢周期的大小关系不做校验，由调用方保证。

    Example:
        >>> macd = MACD(12, 26, 9)
        >>> for result in macd.calculate(bars):
        ...     if result.histogram is not None:
        ...         print(f"MACD: {result.macd_line:.2f}")
    """

    def __init__(
        self,
        fast_period: int = 12,
        slow_period: int = 26,
        signal_period: int = 9,
        strict_signal: bool = False,
    ) -> None:
        """初始化 MACD

        Args:
            fast_period: 快线周期，默认 12
            slow_period: 慢线周期，默认 26
            signal_period: 信号线周期，默认 9
            strict_signal: 信号线是否跳过 MACD 预热期
        """
        # 使用 slow_period 作为基础周期
        super().__init__(slow_period)

        for period in (fast_period, signal_period):
            if period < 1:
                raise ValueError(ErrorMessage.INVALID_PERIOD.indicator("MACD").build(period=period))

        self.fast_period = fast_period
        self.slow_period = slow_period
        self.signal_period = signal_period
        self.strict_signal = strict_signal

    def calculate(self, bars: Sequence[Bar]) -> List[MACDResult]:
        """计算 MACD 序列

        Args:
            bars: K 线序列

        Returns:
            与 bars 等长的 MACDResult 列表，各字段在预热期为 None
        """
        fast = SMA(self.fast_period).calculate(bars)
        slow = SMA(self.slow_period).calculate(bars)

        macd_line: List[Optional[float]] = [
            f - s if f is not None and s is not None else None
            for f, s in zip(fast, slow)
        ]

        if self.strict_signal:
            signal = self._strict_signal(macd_line)
        else:
            signal = rolling_mean(
                [m if m is not None else 0.0 for m in macd_line],
                self.signal_period,
            )

        results = []
        for m, s in zip(macd_line, signal):
            histogram = m - s if m is not None and s is not None else None
            results.append(MACDResult(macd_line=m, signal_line=s, histogram=histogram))

        return results

    def _strict_signal(self, macd_line: List[Optional[float]]) -> List[Optional[float]]:
        """仅在已定义的 MACD 值上计算信号线"""
        start = next((i for i, m in enumerate(macd_line) if m is not None), len(macd_line))
        return [None] * start + rolling_mean(macd_line[start:], self.signal_period)

    @property
    def warmup(self) -> int:
        return max(self.fast_period, self.slow_period) - 1

    def __repr__(self) -> str:
        return (
            f"MACD(fast={self.fast_period}, slow={self.slow_period}, "
            f"signal={self.signal_period}, strict_signal={self.strict_signal})"
        )
