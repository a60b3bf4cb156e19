# dexchart/messages/errorMessage.py
"""错误消息模板 - 支持链式语法"""

from __future__ import annotations
from enum import Enum
from typing import Final


class MessageBuilder:
    """消息构建器 - 支持链式调用 (不可变模式)

    Example:
        >>> msg = MessageBuilder("周期必须 >= 1, 当前值: {period}").indicator("RSI").build(period=0)
        >>> print(msg)
        RSI: 周期必须 >= 1, 当前值: 0
    """

    def __init__(self, template: str, indicator: str | None = None, context: dict | None = None) -> None:
        self._template = template
        self._indicator = indicator
        self._context = context or {}

    def indicator(self, kind: Enum | str) -> MessageBuilder:
        """设置指标前缀 (返回新实例)

        Args:
            kind: 指标类型枚举或指标名称
        """
        label = kind.value if isinstance(kind, Enum) else str(kind)
        return MessageBuilder(self._template, indicator=label, context=self._context)

    def ctx(self, **kwargs) -> MessageBuilder:
        """添加通用上下文变量 (返回新实例)"""
        new_context = self._context.copy()
        new_context.update(kwargs)
        return MessageBuilder(self._template, indicator=self._indicator, context=new_context)

    def build(self, **kwargs) -> str:
        """构建最终消息

        Args:
            **kwargs: 额外的模板变量 (优先级高于 context)

        Returns:
            格式化后的完整消息
        """
        final_kwargs = self._context.copy()
        final_kwargs.update(kwargs)

        msg = self._template.format(**final_kwargs)

        if self._indicator:
            return f"{self._indicator}: {msg}"
        return msg

    def __str__(self) -> str:
        """直接转字符串（用于无参数模板）"""
        if self._indicator is None:
            return self._template
        return f"{self._indicator}: {self._template}"


class ErrorMessage:
    """消息模板目录

    参数校验消息保持英文，与前端表单展示的文案一致；其余消息为中文。

    支持两种使用方式:

    1. 链式语法:
        >>> ErrorMessage.INVALID_PERIOD.indicator("ADX").build(period=0)
        'ADX: 周期必须 >= 1, 当前值: 0'

    2. 静态方法:
        >>> ErrorMessage.format(ErrorMessage.INVALID_PERIOD, "ADX", period=0)
        'ADX: 周期必须 >= 1, 当前值: 0'
    """

    # ============ 指标计算相关 ============
    INVALID_PERIOD: Final[MessageBuilder] = MessageBuilder("周期必须 >= 1, 当前值: {period}")
    INVALID_STD_DEV: Final[MessageBuilder] = MessageBuilder("标准差倍数必须 >= 0, 当前值: {std_dev}")
    MISSING_PARAMS: Final[MessageBuilder] = MessageBuilder("缺少指标参数")
    WRONG_PARAMS_TYPE: Final[MessageBuilder] = MessageBuilder("参数类型错误: 期望 {expected}, 实际 {actual}")
    UNKNOWN_INDICATOR: Final[str] = "Unknown indicator: {indicator}"

    # ============ 参数校验相关 (前端文案) ============
    PARAM_OUT_OF_RANGE: Final[str] = "Value must be between {min} and {max}"
    PERIODS_OUT_OF_RANGE: Final[str] = "Periods must be between {min} and {max}"
    PARAM_NOT_INTEGER: Final[str] = "Value must be a whole number"
    UNKNOWN_PARAMETER: Final[str] = "Unknown parameter '{param}' for {indicator}"

    # ============ 预设相关 ============
    PRESET_NAME_EMPTY: Final[str] = "预设名称不能为空"
    PRESET_NOT_FOUND: Final[str] = "预设不存在: {name}"
    PRESET_IMPORT_INVALID_JSON: Final[str] = "预设导入失败, JSON 无效: {error}"
    PRESET_IMPORT_NOT_ARRAY: Final[str] = "预设导入失败, 顶层必须是数组"
    PRESET_IMPORT_BAD_ENTRY: Final[str] = "预设导入失败, 第 {index} 项无效: {error}"
    PRESET_STORAGE_CORRUPT: Final[str] = "已保存的自定义预设无法解析, 已忽略: {error}"

    # ============ 数据相关 ============
    BAR_PARSE_ERROR: Final[str] = "K 线数据解析失败。error={error}"
    TOO_MANY_BARS: Final[str] = "K 线数量超过上限: {count} > {limit}"

    # ============ HTTP 相关 ============
    HTTP_INTERNAL_ERROR: Final[str] = "内部错误: {error}"
    HTTP_INVALID_PARAMETERS: Final[str] = "指标参数校验失败"

    @staticmethod
    def format(template: MessageBuilder | str, indicator: Enum | str | None = None, **kwargs) -> str:
        """格式化消息

        Args:
            template: 消息模板 (MessageBuilder 或 str)
            indicator: 指标前缀 (可选)
            **kwargs: 模板变量

        Returns:
            格式化后的完整消息
        """
        tpl = template._template if isinstance(template, MessageBuilder) else template
        msg = tpl.format(**kwargs)

        if indicator:
            label = indicator.value if isinstance(indicator, Enum) else indicator
            return f"{label}: {msg}"
        return msg
