"""移动平均指标模块"""

from typing import List, Optional, Sequence

from dexchart.data.models import Bar
from .base import BaseIndicator, closes


def rolling_mean(values: Sequence[Optional[float]], period: int) -> List[Optional[float]]:
    """滑动窗口算术平均

    窗口未满或窗口内含 None 时结果为 None；NaN 会原样传播。

    Args:
        values: 数值序列
        period: 窗口大小

    Returns:
        与 values 等长的平均值列表
    """
    result: List[Optional[float]] = []
    for i in range(len(values)):
        if i < period - 1:
            result.append(None)
            continue

        window = values[i - period + 1:i + 1]
        if any(v is None for v in window):
            result.append(None)
        else:
            result.append(sum(window) / period)

    return result


class SMA(BaseIndicator):
    """简单移动平均 (Simple Moving Average)

    计算公式: SMA = sum(close[i-N+1..i]) / N

    仅提供简单平均，不含指数平滑变体。

    Example:
        >>> sma = SMA(3)
        >>> [v for v in sma.calculate(bars)]  # closes = [1, 2, 3, 4, 5]
        [None, None, 2.0, 3.0, 4.0]
    """

    def calculate(self, bars: Sequence[Bar]) -> List[Optional[float]]:
        """计算 SMA 序列

        Args:
            bars: K 线序列

        Returns:
            SMA 值列表，前 N-1 个为 None
        """
        return rolling_mean(closes(bars), self.period)

    @property
    def field_name(self) -> str:
        """增强点中的输出字段名"""
        return f"ma{self.period}"
