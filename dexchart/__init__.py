"""DexChart - 限价单 DEX 图表技术指标引擎"""

from .data import Bar, EnrichedPoint
from .indicators import IndicatorKind, compute_indicator, enrich_bars
from .messages import ErrorMessage
from .presets import PresetStore, validate_parameter

__version__ = "0.1.0"
__all__ = [
    "Bar",
    "EnrichedPoint",
    "IndicatorKind",
    "compute_indicator",
    "enrich_bars",
    "ErrorMessage",
    "PresetStore",
    "validate_parameter",
]
