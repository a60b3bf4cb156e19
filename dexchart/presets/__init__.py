"""参数校验与预设模块

Example:
    >>> from dexchart.presets import PresetStore, validate_parameter
    >>> validate_parameter("RSI", "period", 150).error
    'Value must be between 2 and 100'
    >>> store = PresetStore()
    >>> [p.name for p in store.list_presets()]
    ['Trend Following', 'Momentum Trading', 'Volatility Trading']
"""

from .rules import ParamRule, VALIDATION_RULES, rules_to_dict
from .validator import (
    ValidationResult,
    ParameterEditor,
    parse_periods,
    validate_parameter,
    validate_params,
    validate_bundle,
)
from .store import (
    DEFAULT_PRESETS,
    Preset,
    PresetImportError,
    PresetStore,
    normalize_bundle,
    parse_presets,
)
from .repository import PresetRepository

__all__ = [
    "ParamRule",
    "VALIDATION_RULES",
    "rules_to_dict",
    "ValidationResult",
    "ParameterEditor",
    "parse_periods",
    "validate_parameter",
    "validate_params",
    "validate_bundle",
    "DEFAULT_PRESETS",
    "Preset",
    "PresetImportError",
    "PresetStore",
    "normalize_bundle",
    "parse_presets",
    "PresetRepository",
]
