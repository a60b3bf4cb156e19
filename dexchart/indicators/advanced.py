# dexchart/indicators/advanced.py
"""高级技术指标

包含随机指标与趋向指标 (ADX) 的整段序列实现。

分母为 0 的约定：随机指标的高低区间为 0、ADX 平滑真实波幅为 0、
+DI 与 -DI 之和为 0 时，结果记为 NaN，并在后续平滑中原样传播。
"""

from __future__ import annotations

import math
from typing import Optional, List, Sequence
from dataclasses import dataclass

from dexchart.data.models import Bar
from dexchart.messages import ErrorMessage
from .base import BaseIndicator
from .ma import rolling_mean


@dataclass
class StochasticResult:
    """随机指标计算结果"""
    k: Optional[float]  # 平滑后的 %K
    d: Optional[float]  # %D


@dataclass
class ADXResult:
    """趋向指标计算结果"""
    adx: Optional[float]
    plus_di: Optional[float]
    minus_di: Optional[float]


def _percent(numerator: float, denominator: float) -> float:
    """百分比，分母为 0 时返回 NaN"""
    if denominator == 0:
        return math.nan
    return 100 * numerator / denominator


class Stochastic(BaseIndicator):
    """随机指标 (Stochastic Oscillator)

    用于判断超买超卖状态。
    %K > 80 超买，%K < 20 超卖。

    计算步骤:
        raw %K = (close - 最低低点) / (最高高点 - 最低低点) * 100
        %K = SMA(raw %K, smooth_k)
        %D = SMA(%K, smooth_d)

    Example:
        >>> stoch = Stochastic(14, 3, 3)
        >>> for result in stoch.calculate(bars):
        ...     if result.d is not None:
        ...         print(f"K: {result.k:.2f}, D: {result.d:.2f}")
    """

    def __init__(self, period: int = 14, smooth_k: int = 3, smooth_d: int = 3) -> None:
        super().__init__(period)

        for value in (smooth_k, smooth_d):
            if value < 1:
                raise ValueError(ErrorMessage.INVALID_PERIOD.indicator("Stochastic").build(period=value))

        self.smooth_k = smooth_k
        self.smooth_d = smooth_d

    def raw_k(self, bars: Sequence[Bar]) -> List[Optional[float]]:
        """未平滑的 %K 序列

        Args:
            bars: K 线序列

        Returns:
            raw %K 列表，下标 < period-1 处为 None
        """
        result: List[Optional[float]] = []
        for i, bar in enumerate(bars):
            if i < self.period - 1:
                result.append(None)
                continue

            window = bars[i - self.period + 1:i + 1]
            highest = max(b.high for b in window)
            lowest = min(b.low for b in window)
            result.append(_percent(bar.close - lowest, highest - lowest))

        return result

    def calculate(self, bars: Sequence[Bar]) -> List[StochasticResult]:
        """计算随机指标

        Args:
            bars: K 线序列

        Returns:
            StochasticResult 列表，%K 与 %D 各自在预热期为 None
        """
        k_values = rolling_mean(self.raw_k(bars), self.smooth_k)
        d_values = rolling_mean(k_values, self.smooth_d)

        return [StochasticResult(k=k, d=d) for k, d in zip(k_values, d_values)]

    @property
    def warmup(self) -> int:
        return self.period + self.smooth_k - 2

    def __repr__(self) -> str:
        return f"Stochastic(period={self.period}, smooth_k={self.smooth_k}, smooth_d={self.smooth_d})"


class ADX(BaseIndicator):
    """平均趋向指标 (Average Directional Index)

    用于衡量趋势的强度，不区分方向。
    ADX > 25 表示强趋势，ADX < 20 表示弱趋势或震荡。

    采用 Wilder 平滑:
        1. 前 period 根 K 线累加 TR/+DM/-DM，于下标 period-1 处取平均作为初值
        2. 此后 smoothed = (prev * (period - 1) + current) / period
        3. +DI/-DI 自下标 period 起有效
        4. ADX 于下标 2*period-1 处以 DX[period..2*period-1] 的简单平均为初值，之后同样 Wilder 平滑

    开头的平坦区间使 DX 为 NaN 时，ADX 初值即为 NaN，递推使其后所有 ADX 均为 NaN；
    ±DI 在价格恢复波动后重新有效。

    Example:
        >>> adx = ADX(14)
        >>> for result in adx.calculate(bars):
        ...     if result.adx is not None:
        ...         print(f"ADX: {result.adx:.2f}")
    """

    def __init__(self, period: int = 14) -> None:
        super().__init__(period)

    @staticmethod
    def directional_movement(bars: Sequence[Bar]) -> tuple[List[float], List[float], List[float]]:
        """计算每根 K 线的 TR、+DM、-DM

        首根 K 线没有前值，三项均记为 0。

        Returns:
            (tr, plus_dm, minus_dm)
        """
        n = len(bars)
        tr = [0.0] * n
        plus_dm = [0.0] * n
        minus_dm = [0.0] * n

        for i in range(1, n):
            bar, prev = bars[i], bars[i - 1]
            tr[i] = max(
                bar.high - bar.low,
                abs(bar.high - prev.close),
                abs(bar.low - prev.close)
            )

            up_move = bar.high - prev.high
            down_move = prev.low - bar.low

            # 仅严格占优的一方计入，另一方为 0
            if up_move > down_move:
                plus_dm[i] = max(up_move, 0.0)
            elif down_move > up_move:
                minus_dm[i] = max(down_move, 0.0)

        return tr, plus_dm, minus_dm

    def calculate(self, bars: Sequence[Bar]) -> List[ADXResult]:
        """计算 ADX 与 ±DI

        Args:
            bars: K 线序列

        Returns:
            ADXResult 列表；±DI 在下标 < period 处为 None，ADX 在下标 < 2*period-1 处为 None
        """
        n = len(bars)
        period = self.period
        tr, plus_dm, minus_dm = self.directional_movement(bars)

        plus_di: List[Optional[float]] = [None] * n
        minus_di: List[Optional[float]] = [None] * n
        dx: List[Optional[float]] = [None] * n

        smoothed_tr = 0.0
        smoothed_plus = 0.0
        smoothed_minus = 0.0

        for i in range(n):
            if i < period:
                smoothed_tr += tr[i]
                smoothed_plus += plus_dm[i]
                smoothed_minus += minus_dm[i]

                if i == period - 1:
                    smoothed_tr /= period
                    smoothed_plus /= period
                    smoothed_minus /= period
                continue

            smoothed_tr = (smoothed_tr * (period - 1) + tr[i]) / period
            smoothed_plus = (smoothed_plus * (period - 1) + plus_dm[i]) / period
            smoothed_minus = (smoothed_minus * (period - 1) + minus_dm[i]) / period

            p_di = _percent(smoothed_plus, smoothed_tr)
            m_di = _percent(smoothed_minus, smoothed_tr)

            plus_di[i] = p_di
            minus_di[i] = m_di
            dx[i] = _percent(abs(p_di - m_di), p_di + m_di)

        adx: List[Optional[float]] = [None] * n
        seed = 2 * period - 1
        for i in range(seed, n):
            if i == seed:
                adx[i] = sum(dx[period:2 * period]) / period
            else:
                adx[i] = (adx[i - 1] * (period - 1) + dx[i]) / period

        return [
            ADXResult(adx=a, plus_di=p, minus_di=m)
            for a, p, m in zip(adx, plus_di, minus_di)
        ]

    @property
    def warmup(self) -> int:
        return 2 * self.period - 1
