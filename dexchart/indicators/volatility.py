# dexchart/indicators/volatility.py
"""波动率指标模块"""

from typing import List, Optional, Sequence

from dexchart.data.models import Bar
from dexchart.messages import ErrorMessage
from .base import BaseIndicator, BollingerResult, closes
from .ma import SMA


class BollingerBands(BaseIndicator):
    """布林带 (Bollinger Bands)

    计算公式:
        Middle Band = SMA(close, period)
        Upper Band = Middle Band + std_dev * 总体标准差
        Lower Band = Middle Band - std_dev * 总体标准差

    Example:
        >>> bb = BollingerBands(20, 2)
        >>> for bar, bands in zip(bars, bb.calculate(bars)):
        ...     if bands and bar.close < bands.lower:
        ...         print("价格触及下轨")
    """

    def __init__(self, period: int = 20, std_dev: float = 2.0) -> None:
        """初始化布林带

        Args:
            period: 计算周期，默认 20
            std_dev: 标准差倍数，默认 2.0
        """
        super().__init__(period)
        if std_dev < 0:
            raise ValueError(ErrorMessage.INVALID_STD_DEV.indicator("BollingerBands").build(std_dev=std_dev))
        self.std_dev = std_dev

    def calculate(self, bars: Sequence[Bar]) -> List[Optional[BollingerResult]]:
        """计算布林带序列

        Args:
            bars: K 线序列

        Returns:
            BollingerResult 列表，预热期为 None
        """
        prices = closes(bars)
        middle_values = SMA(self.period).calculate(bars)

        results: List[Optional[BollingerResult]] = []
        for i, middle in enumerate(middle_values):
            if middle is None:
                results.append(None)
                continue

            window = prices[i - self.period + 1:i + 1]
            variance = sum((x - middle) ** 2 for x in window) / self.period
            std = variance ** 0.5

            results.append(BollingerResult(
                upper=middle + self.std_dev * std,
                middle=middle,
                lower=middle - self.std_dev * std,
            ))

        return results

    def __repr__(self) -> str:
        return f"BollingerBands(period={self.period}, std_dev={self.std_dev})"
