"""
数据层数据模型

定义 K 线及指标增强点的内存表示。
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional

from dexchart.messages import ErrorMessage


@dataclass(frozen=True)
class Bar:
    """K 线数据结构

    计算器只读取该结构，不做 OHLC 合法性校验
    (low <= min(open, close), high >= max(open, close) 由数据源保证)。

    Attributes:
        timestamp: 开盘时间 (ISO-8601 字符串)
        open: 开盘价
        high: 最高价
        low: 最低价
        close: 收盘价
        volume: 成交量

    Example:
        >>> bar = Bar(
        ...     timestamp="2024-01-01T00:00:00Z",
        ...     open=2500.0,
        ...     high=2520.0,
        ...     low=2490.0,
        ...     close=2510.0,
        ...     volume=812.5
        ... )
        >>> bar.close
        2510.0
    """

    timestamp: str
    open: float
    high: float
    low: float
    close: float
    volume: float

    @classmethod
    def from_dict(cls, data: dict) -> Bar:
        """从字典构建 K 线

        Args:
            data: 包含 timestamp/open/high/low/close/volume 的字典

        Returns:
            Bar 实例

        Raises:
            ValueError: 字段缺失或数值无法解析
        """
        try:
            return cls(
                timestamp=str(data["timestamp"]),
                open=float(data["open"]),
                high=float(data["high"]),
                low=float(data["low"]),
                close=float(data["close"]),
                volume=float(data.get("volume", 0.0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(ErrorMessage.BAR_PARSE_ERROR.format(error=e)) from e

    def to_dict(self) -> dict:
        """转换为字典格式"""
        return {
            "timestamp": self.timestamp,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


@dataclass
class EnrichedPoint:
    """带指标字段的 K 线

    指标字段为 None 表示该位置尚处于预热期（不可计算），
    `to_dict()` 中会直接省略这些字段，而不是输出 0 或 null。

    Attributes:
        bar: 原始 K 线
        moving_averages: 周期 -> 均线值，输出为 ma{N}
    """

    bar: Bar
    moving_averages: Dict[int, float] = field(default_factory=dict)
    rsi: Optional[float] = None
    upper_band: Optional[float] = None
    lower_band: Optional[float] = None
    middle_band: Optional[float] = None
    macd: Optional[float] = None
    signal: Optional[float] = None
    histogram: Optional[float] = None
    stoch_k: Optional[float] = None
    stoch_d: Optional[float] = None
    adx: Optional[float] = None
    plus_di: Optional[float] = None
    minus_di: Optional[float] = None

    # 属性名 -> 输出字段名
    FIELD_NAMES = {
        "rsi": "rsi",
        "upper_band": "upperBand",
        "lower_band": "lowerBand",
        "middle_band": "middleBand",
        "macd": "macd",
        "signal": "signal",
        "histogram": "histogram",
        "stoch_k": "stochK",
        "stoch_d": "stochD",
        "adx": "adx",
        "plus_di": "plusDI",
        "minus_di": "minusDI",
    }

    def set_field(self, name: str, value: Optional[float]) -> None:
        """按输出字段名写入指标值

        Args:
            name: 输出字段名，如 "rsi"、"upperBand"、"ma20"
            value: 指标值，None 表示预热期
        """
        if name.startswith("ma") and name[2:].isdigit():
            if value is None:
                self.moving_averages.pop(int(name[2:]), None)
            else:
                self.moving_averages[int(name[2:])] = value
            return

        for attr, out in self.FIELD_NAMES.items():
            if out == name:
                setattr(self, attr, value)
                return
        raise KeyError(name)

    def indicator_fields(self) -> dict:
        """仅返回已计算出的指标字段"""
        fields = {f"ma{period}": value for period, value in self.moving_averages.items()}
        for attr, out in self.FIELD_NAMES.items():
            value = getattr(self, attr)
            if value is not None:
                fields[out] = value
        return fields

    def to_dict(self, finite_only: bool = False) -> dict:
        """转换为字典格式

        Args:
            finite_only: 为 True 时将 NaN/inf 转为 None，便于 JSON 序列化

        Returns:
            K 线字段 + 已计算出的指标字段
        """
        data = self.bar.to_dict()
        for key, value in self.indicator_fields().items():
            if finite_only and not math.isfinite(value):
                value = None
            data[key] = value
        return data
