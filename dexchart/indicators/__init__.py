"""技术指标库

提供图表所用技术指标的整段序列计算实现。每次计算都基于传入的
K 线快照从头进行，不保留跨调用的状态。

Example:
    >>> from dexchart.indicators import IndicatorKind, RSIParams, compute_indicator, enrich_bars
    >>>
    >>> rsi_fields = compute_indicator(IndicatorKind.RSI, bars, RSIParams(14))
    >>> points = enrich_bars(bars, {
    ...     IndicatorKind.MA: MAParams([20, 50]),
    ...     IndicatorKind.ADX: ADXParams(14),
    ... })
"""

from .base import BaseIndicator, MACDResult, BollingerResult
from .ma import SMA, rolling_mean
from .oscillator import RSI, MACD
from .volatility import BollingerBands
from .advanced import (
    ADX,
    ADXResult,
    Stochastic,
    StochasticResult,
)
from .params import (
    IndicatorKind,
    IndicatorParameters,
    MAParams,
    RSIParams,
    BollingerBandsParams,
    MACDParams,
    StochasticParams,
    ADXParams,
    PARAMS_TYPES,
    default_params,
    params_from_dict,
    bundle_from_dict,
    bundle_to_dict,
)
from .engine import compute_indicator, enrich_bars


__all__ = [
    # 基类
    "BaseIndicator",
    "MACDResult",
    "BollingerResult",
    # 移动平均
    "SMA",
    "rolling_mean",
    # 振荡器
    "RSI",
    "MACD",
    # 波动率
    "BollingerBands",
    # 高级指标
    "ADX",
    "ADXResult",
    "Stochastic",
    "StochasticResult",
    # 参数
    "IndicatorKind",
    "IndicatorParameters",
    "MAParams",
    "RSIParams",
    "BollingerBandsParams",
    "MACDParams",
    "StochasticParams",
    "ADXParams",
    "PARAMS_TYPES",
    "default_params",
    "params_from_dict",
    "bundle_from_dict",
    "bundle_to_dict",
    # 调度
    "compute_indicator",
    "enrich_bars",
]
