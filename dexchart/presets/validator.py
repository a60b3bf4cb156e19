"""指标参数校验

校验失败不抛异常，而是返回带错误文案的结果；由调用方决定如何展示。
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from dexchart.indicators.params import (
    PARAMS_TYPES,
    IndicatorKind,
    IndicatorParameters,
    default_params,
)
from dexchart.messages import ErrorMessage
from .rules import VALIDATION_RULES, ParamRule


logger = logging.getLogger(__name__)


_INT_PREFIX = re.compile(r"^[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class ValidationResult:
    """校验结果

    Attributes:
        ok: 是否通过
        error: 失败时的错误文案
        value: 通过时解析出的值（MA 为周期列表，其余为数值）
    """
    ok: bool
    error: Optional[str] = None
    value: Any = None

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> ValidationResult:
        return cls(ok=False, error=error)


def _parse_int_prefix(text: str) -> Optional[int]:
    """解析前导整数，"20abc" -> 20，无法解析返回 None"""
    match = _INT_PREFIX.match(text.strip())
    return int(match.group()) if match else None


def _parse_float_prefix(text: str) -> float:
    """解析前导浮点数，无法解析返回 NaN"""
    match = _FLOAT_PREFIX.match(text.strip())
    return float(match.group()) if match else math.nan


def _format_bound(value: float) -> str:
    """整数边界不带小数点输出"""
    return str(int(value)) if float(value).is_integer() else str(value)


def parse_periods(raw: Union[str, List[Any]]) -> List[int]:
    """解析逗号分隔的周期列表，非数字项直接丢弃

    Example:
        >>> parse_periods("20, abc, 50")
        [20, 50]
    """
    items = raw if isinstance(raw, (list, tuple)) else str(raw).split(",")

    periods = []
    for item in items:
        if isinstance(item, bool):
            continue
        if isinstance(item, (int, float)):
            if math.isfinite(item):
                periods.append(int(item))
            continue
        value = _parse_int_prefix(str(item))
        if value is not None:
            periods.append(value)
    return periods


def _validate_periods(raw: Any, rule: ParamRule) -> ValidationResult:
    periods = parse_periods(raw)
    if any(p < rule.min or p > rule.max for p in periods):
        return ValidationResult.failure(
            ErrorMessage.PERIODS_OUT_OF_RANGE.format(
                min=_format_bound(rule.min), max=_format_bound(rule.max)
            )
        )
    return ValidationResult.success(periods)


def _validate_number(raw: Any, rule: ParamRule) -> ValidationResult:
    if isinstance(raw, bool):
        value = math.nan
    elif isinstance(raw, (int, float)):
        value = float(raw)
    else:
        value = _parse_float_prefix(str(raw))

    if math.isnan(value) or value < rule.min or value > rule.max:
        return ValidationResult.failure(
            ErrorMessage.PARAM_OUT_OF_RANGE.format(
                min=_format_bound(rule.min), max=_format_bound(rule.max)
            )
        )

    if rule.integer:
        if not value.is_integer():
            return ValidationResult.failure(ErrorMessage.PARAM_NOT_INTEGER)
        return ValidationResult.success(int(value))

    return ValidationResult.success(value)


def validate_parameter(
    indicator: Union[IndicatorKind, str],
    param: str,
    raw: Any,
) -> ValidationResult:
    """校验单个参数

    Args:
        indicator: 指标类型
        param: 参数名（驼峰命名，如 "period"、"stdDev"）
        raw: 原始输入，字符串或数值；MA 的 periods 可为逗号分隔字符串或列表

    Returns:
        ValidationResult

    Example:
        >>> validate_parameter("RSI", "period", 150).error
        'Value must be between 2 and 100'
        >>> validate_parameter("MA", "periods", "20, 50").value
        [20, 50]
    """
    try:
        kind = IndicatorKind.parse(indicator)
    except ValueError as e:
        return ValidationResult.failure(str(e))

    rule = VALIDATION_RULES[kind].get(param)
    if rule is None:
        return ValidationResult.failure(
            ErrorMessage.UNKNOWN_PARAMETER.format(param=param, indicator=kind.value)
        )

    if kind is IndicatorKind.MA and param == "periods":
        return _validate_periods(raw, rule)
    return _validate_number(raw, rule)


def validate_params(
    indicator: Union[IndicatorKind, str],
    params: IndicatorParameters,
) -> Dict[str, str]:
    """校验一个参数对象的全部字段

    Returns:
        {参数名: 错误文案}，全部通过时为空字典
    """
    errors = {}
    for wire, value in params.to_dict().items():
        result = validate_parameter(indicator, wire, value)
        if not result.ok:
            errors[wire] = result.error
    return errors


def validate_bundle(bundle: Mapping[IndicatorKind, IndicatorParameters]) -> Dict[str, Dict[str, str]]:
    """校验参数集合

    Returns:
        {指标名: {参数名: 错误文案}}，只包含有错误的指标
    """
    errors = {}
    for kind, params in bundle.items():
        field_errors = validate_params(kind, params)
        if field_errors:
            errors[IndicatorKind.parse(kind).value] = field_errors
    return errors


class ParameterEditor:
    """参数编辑会话

    持有全部指标的当前参数与逐字段的错误表。校验失败时保留原值并记录错误；
    只要仍有任一字段出错，就不会触发 on_change 预览回调。

    Example:
        >>> editor = ParameterEditor(on_change=preview)
        >>> editor.update("RSI", "period", "150")
        False
        >>> editor.errors
        {<IndicatorKind.RSI: 'RSI'>: {'period': 'Value must be between 2 and 100'}}
    """

    def __init__(
        self,
        params: Optional[Mapping[IndicatorKind, IndicatorParameters]] = None,
        on_change: Optional[Callable[[Dict[IndicatorKind, IndicatorParameters]], None]] = None,
    ) -> None:
        """初始化编辑会话

        Args:
            params: 初始参数，缺失的指标使用默认值
            on_change: 参数全部有效时的回调，接收参数快照
        """
        self.params: Dict[IndicatorKind, IndicatorParameters] = default_params()
        if params:
            self.params.update({IndicatorKind.parse(k): v for k, v in params.items()})
        self.errors: Dict[IndicatorKind, Dict[str, str]] = {}
        self._on_change = on_change

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def snapshot(self) -> Dict[IndicatorKind, IndicatorParameters]:
        """当前参数的浅拷贝"""
        return dict(self.params)

    def update(self, indicator: Union[IndicatorKind, str], param: str, raw: Any) -> bool:
        """校验并更新单个参数

        Args:
            indicator: 指标类型
            param: 参数名
            raw: 原始输入

        Returns:
            是否校验通过

        Raises:
            ValueError: 未知的指标类型
        """
        kind = IndicatorKind.parse(indicator)
        result = validate_parameter(kind, param, raw)

        if result.ok:
            field_errors = self.errors.get(kind, {})
            field_errors.pop(param, None)
            if not field_errors:
                self.errors.pop(kind, None)

            attr = PARAMS_TYPES[kind].WIRE_NAMES[param]
            self.params[kind] = replace(self.params[kind], **{attr: result.value})
        else:
            self.errors.setdefault(kind, {})[param] = result.error
            logger.debug("参数校验失败: %s.%s=%r (%s)", kind.value, param, raw, result.error)

        self._notify()
        return result.ok

    def load(self, bundle: Mapping[IndicatorKind, IndicatorParameters]) -> None:
        """载入一组参数（例如选中的预设），并清除对应指标的错误"""
        for kind, params in bundle.items():
            kind = IndicatorKind.parse(kind)
            self.params[kind] = params
            self.errors.pop(kind, None)
        self._notify()

    def _notify(self) -> None:
        if self.errors or self._on_change is None:
            return
        self._on_change(self.snapshot())
