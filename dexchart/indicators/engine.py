"""指标计算调度

按 IndicatorKind 分派到具体计算器，并把结果合并为增强点序列。
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Union

from dexchart.config.settings import settings
from dexchart.data.models import Bar, EnrichedPoint
from dexchart.messages import ErrorMessage
from .advanced import ADX, Stochastic
from .ma import SMA
from .oscillator import MACD, RSI
from .params import (
    PARAMS_TYPES,
    IndicatorKind,
    IndicatorParameters,
    params_from_dict,
)
from .volatility import BollingerBands


logger = logging.getLogger(__name__)


ParamsLike = Union[IndicatorParameters, Mapping]


def _resolve_params(kind: IndicatorKind, params: Optional[ParamsLike]) -> IndicatorParameters:
    """校验参数对象与指标类型匹配"""
    if params is None:
        raise ValueError(ErrorMessage.MISSING_PARAMS.indicator(kind).build())

    if isinstance(params, Mapping):
        return params_from_dict(kind, params)

    expected = PARAMS_TYPES[kind]
    if not isinstance(params, expected):
        raise ValueError(
            ErrorMessage.WRONG_PARAMS_TYPE.indicator(kind).build(
                expected=expected.__name__, actual=type(params).__name__
            )
        )
    return params


def compute_indicator(
    kind: Union[IndicatorKind, str],
    bars: Sequence[Bar],
    params: Optional[ParamsLike],
    strict_signal: Optional[bool] = None,
) -> List[Dict[str, float]]:
    """计算单个指标

    Args:
        kind: 指标类型
        bars: K 线序列
        params: 该指标的参数对象（或驼峰字段名的字典）
        strict_signal: MACD 信号线是否跳过预热期，默认读取配置

    Returns:
        与 bars 等长的字段字典列表，预热期内的字段不出现

    Raises:
        ValueError: 未知指标、缺少参数或参数类型不匹配

    Example:
        >>> fields = compute_indicator(IndicatorKind.MA, bars, MAParams([3]))
        >>> fields[2]
        {'ma3': 2.0}
    """
    kind = IndicatorKind.parse(kind)
    params = _resolve_params(kind, params)
    if strict_signal is None:
        strict_signal = settings.MACD_STRICT_SIGNAL

    fields: List[Dict[str, float]] = [{} for _ in bars]

    def put(name: str, values: Sequence[Optional[float]]) -> None:
        for point, value in zip(fields, values):
            if value is not None:
                point[name] = value

    if kind is IndicatorKind.MA:
        for period in params.periods:
            sma = SMA(period)
            put(sma.field_name, sma.calculate(bars))

    elif kind is IndicatorKind.RSI:
        put("rsi", RSI(params.period).calculate(bars))

    elif kind is IndicatorKind.BOLLINGER_BANDS:
        bands = BollingerBands(params.period, params.std_dev).calculate(bars)
        put("upperBand", [b.upper if b else None for b in bands])
        put("middleBand", [b.middle if b else None for b in bands])
        put("lowerBand", [b.lower if b else None for b in bands])

    elif kind is IndicatorKind.MACD:
        results = MACD(
            params.fast_period,
            params.slow_period,
            params.signal_period,
            strict_signal=strict_signal,
        ).calculate(bars)
        put("macd", [r.macd_line for r in results])
        put("signal", [r.signal_line for r in results])
        put("histogram", [r.histogram for r in results])

    elif kind is IndicatorKind.STOCHASTIC:
        results = Stochastic(params.period, params.smooth_k, params.smooth_d).calculate(bars)
        put("stochK", [r.k for r in results])
        put("stochD", [r.d for r in results])

    elif kind is IndicatorKind.ADX:
        results = ADX(params.period).calculate(bars)
        put("adx", [r.adx for r in results])
        put("plusDI", [r.plus_di for r in results])
        put("minusDI", [r.minus_di for r in results])

    return fields


def enrich_bars(
    bars: Sequence[Bar],
    indicators: Mapping[Union[IndicatorKind, str], ParamsLike],
    strict_signal: Optional[bool] = None,
) -> List[EnrichedPoint]:
    """计算全部激活指标并合并为增强点

    Args:
        bars: K 线序列
        indicators: 指标类型 -> 参数
        strict_signal: 透传给 MACD

    Returns:
        与 bars 等长的 EnrichedPoint 列表
    """
    points = [EnrichedPoint(bar=bar) for bar in bars]

    for kind, params in indicators.items():
        fields = compute_indicator(kind, bars, params, strict_signal=strict_signal)
        for point, values in zip(points, fields):
            for name, value in values.items():
                point.set_field(name, value)

    logger.debug(
        "指标计算完成: bars=%d, indicators=%s",
        len(bars),
        [IndicatorKind.parse(k).value for k in indicators],
    )
    return points
