"""指标类型与参数模型

参数对象为不可变值对象，修改参数不会影响任何已计算的序列，
调用方需要重新计算。序列化时使用前端约定的驼峰字段名。
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Tuple, Union

from dexchart.messages import ErrorMessage


class IndicatorKind(Enum):
    """指标类型枚举

    枚举值即前端与预设 JSON 中使用的指标名称。
    """
    MA = "MA"
    RSI = "RSI"
    BOLLINGER_BANDS = "Bollinger Bands"
    MACD = "MACD"
    STOCHASTIC = "Stochastic"
    ADX = "ADX"

    @classmethod
    def parse(cls, value: Union[IndicatorKind, str]) -> IndicatorKind:
        """解析指标类型

        同时接受枚举值 ("Bollinger Bands") 与枚举名 ("BOLLINGER_BANDS")。

        Raises:
            ValueError: 未知的指标类型
        """
        if isinstance(value, cls):
            return value
        for kind in cls:
            if value == kind.value or value == kind.name:
                return kind
        raise ValueError(ErrorMessage.UNKNOWN_INDICATOR.format(indicator=value))


class _ParamsMixin:
    """参数对象的序列化支持

    子类通过 WIRE_NAMES 声明 {驼峰字段名: 属性名}。
    """

    WIRE_NAMES: ClassVar[Dict[str, str]] = {}

    def to_dict(self) -> dict:
        """转换为驼峰字段名的字典"""
        data = {}
        for wire, attr in self.WIRE_NAMES.items():
            value = getattr(self, attr)
            data[wire] = list(value) if isinstance(value, (list, tuple)) else value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """从字典构建参数对象，缺失字段使用默认值

        Raises:
            ValueError: 含未知字段或字段类型错误
        """
        if not isinstance(data, Mapping):
            raise ValueError(
                ErrorMessage.WRONG_PARAMS_TYPE.build(expected="object", actual=type(data).__name__)
            )

        kwargs = {}
        for wire, value in data.items():
            attr = cls.WIRE_NAMES.get(wire)
            if attr is None:
                raise ValueError(ErrorMessage.UNKNOWN_PARAMETER.format(param=wire, indicator=cls.__name__))
            kwargs[attr] = cls._coerce(attr, value)
        return cls(**kwargs)

    @classmethod
    def _coerce(cls, attr: str, value: Any) -> Any:
        declared = {f.name: f.type for f in fields(cls)}[attr]
        if isinstance(value, bool):
            raise ValueError(
                ErrorMessage.WRONG_PARAMS_TYPE.build(expected=declared, actual="bool")
            )
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(
                ErrorMessage.WRONG_PARAMS_TYPE.build(expected=declared, actual=repr(value))
            )
        if declared == "int":
            if not isinstance(value, (int, float)) or float(value) != int(value):
                raise ValueError(
                    ErrorMessage.WRONG_PARAMS_TYPE.build(expected="int", actual=repr(value))
                )
            return int(value)
        if declared == "float":
            if not isinstance(value, (int, float)):
                raise ValueError(
                    ErrorMessage.WRONG_PARAMS_TYPE.build(expected="float", actual=repr(value))
                )
            return float(value)
        return value


@dataclass(frozen=True)
class MAParams(_ParamsMixin):
    """均线参数，每个周期输出一条 ma{N}

    周期以元组保存，传入列表时自动转换。
    """
    periods: Tuple[int, ...] = (20, 50, 200)

    WIRE_NAMES: ClassVar[Dict[str, str]] = {"periods": "periods"}

    def __post_init__(self) -> None:
        object.__setattr__(self, "periods", tuple(self.periods))

    @classmethod
    def _coerce(cls, attr: str, value: Any) -> Any:
        if not isinstance(value, (list, tuple)):
            raise ValueError(
                ErrorMessage.WRONG_PARAMS_TYPE.build(expected="list[int]", actual=type(value).__name__)
            )
        periods = []
        for item in value:
            if (
                isinstance(item, bool)
                or not isinstance(item, (int, float))
                or not math.isfinite(item)
                or float(item) != int(item)
            ):
                raise ValueError(
                    ErrorMessage.WRONG_PARAMS_TYPE.build(expected="int", actual=repr(item))
                )
            periods.append(int(item))
        return periods


@dataclass(frozen=True)
class RSIParams(_ParamsMixin):
    period: int = 14

    WIRE_NAMES: ClassVar[Dict[str, str]] = {"period": "period"}


@dataclass(frozen=True)
class BollingerBandsParams(_ParamsMixin):
    period: int = 20
    std_dev: float = 2.0

    WIRE_NAMES: ClassVar[Dict[str, str]] = {"period": "period", "stdDev": "std_dev"}


@dataclass(frozen=True)
class MACDParams(_ParamsMixin):
    fast_period: int = 12
    slow_period: int = 26
    signal_period: int = 9

    WIRE_NAMES: ClassVar[Dict[str, str]] = {
        "fastPeriod": "fast_period",
        "slowPeriod": "slow_period",
        "signalPeriod": "signal_period",
    }


@dataclass(frozen=True)
class StochasticParams(_ParamsMixin):
    period: int = 14
    smooth_k: int = 3
    smooth_d: int = 3

    WIRE_NAMES: ClassVar[Dict[str, str]] = {
        "period": "period",
        "smoothK": "smooth_k",
        "smoothD": "smooth_d",
    }


@dataclass(frozen=True)
class ADXParams(_ParamsMixin):
    period: int = 14

    WIRE_NAMES: ClassVar[Dict[str, str]] = {"period": "period"}


IndicatorParameters = Union[
    MAParams, RSIParams, BollingerBandsParams, MACDParams, StochasticParams, ADXParams
]

# 指标类型 -> 参数类
PARAMS_TYPES: Dict[IndicatorKind, type] = {
    IndicatorKind.MA: MAParams,
    IndicatorKind.RSI: RSIParams,
    IndicatorKind.BOLLINGER_BANDS: BollingerBandsParams,
    IndicatorKind.MACD: MACDParams,
    IndicatorKind.STOCHASTIC: StochasticParams,
    IndicatorKind.ADX: ADXParams,
}


def default_params() -> Dict[IndicatorKind, IndicatorParameters]:
    """全部指标的默认参数"""
    return {kind: params_type() for kind, params_type in PARAMS_TYPES.items()}


def params_from_dict(kind: Union[IndicatorKind, str], data: Mapping[str, Any]) -> IndicatorParameters:
    """按指标类型解析参数字典"""
    return PARAMS_TYPES[IndicatorKind.parse(kind)].from_dict(data)


def bundle_from_dict(data: Mapping[str, Any]) -> Dict[IndicatorKind, IndicatorParameters]:
    """解析参数集合 {"MA": {...}, "RSI": {...}}

    Raises:
        ValueError: 未知指标或参数无效
    """
    return {IndicatorKind.parse(name): params_from_dict(name, value) for name, value in data.items()}


def bundle_to_dict(bundle: Mapping[IndicatorKind, IndicatorParameters]) -> dict:
    """参数集合转换为 JSON 友好的字典"""
    return {kind.value: params.to_dict() for kind, params in bundle.items()}
