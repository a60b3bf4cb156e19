"""指标基类模块"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from dataclasses import dataclass

from dexchart.data.models import Bar
from dexchart.messages import ErrorMessage


@dataclass
class MACDResult:
    """MACD 计算结果

    三个字段的预热期不同，任一字段可能为 None。
    """
    macd_line: Optional[float]
    signal_line: Optional[float]
    histogram: Optional[float]


@dataclass
class BollingerResult:
    """布林带计算结果"""
    upper: float
    middle: float
    lower: float


class BaseIndicator(ABC):
    """指标基类 - 整段序列计算接口

    每次调用 calculate() 都基于传入的 K 线快照从头计算，
    不在两次调用之间保留任何状态。返回列表与输入等长，
    预热期内的位置为 None。

    Example:
        >>> sma = SMA(20)
        >>> values = sma.calculate(bars)
        >>> len(values) == len(bars)
        True
    """

    def __init__(self, period: int) -> None:
        """初始化指标

        Args:
            period: 计算周期
        """
        if period < 1:
            raise ValueError(
                ErrorMessage.INVALID_PERIOD.indicator(self.__class__.__name__).build(period=period)
            )

        self.period = period

    @abstractmethod
    def calculate(self, bars: Sequence[Bar]) -> list:
        """计算整段序列

        Args:
            bars: 按时间升序排列的 K 线

        Returns:
            与 bars 等长的结果列表，数据不足处为 None
        """
        pass

    @property
    def warmup(self) -> int:
        """首个有效值之前的 K 线数量"""
        return self.period - 1

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(period={self.period})"


def closes(bars: Sequence[Bar]) -> List[float]:
    """提取收盘价序列"""
    return [bar.close for bar in bars]
