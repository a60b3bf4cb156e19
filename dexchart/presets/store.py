"""指标参数预设

内置预设在启动时固定载入且不可修改；自定义预设可按名称新增、覆盖和删除。
自定义预设允许与内置预设同名，按名称查询时自定义预设优先。
存储介质不在本模块内，持久化见 PresetRepository。
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from dexchart.indicators.params import (
    PARAMS_TYPES,
    ADXParams,
    BollingerBandsParams,
    IndicatorKind,
    IndicatorParameters,
    MACDParams,
    MAParams,
    RSIParams,
    StochasticParams,
    bundle_to_dict,
    params_from_dict,
)
from dexchart.messages import ErrorMessage
from .validator import validate_params


logger = logging.getLogger(__name__)


ParameterBundle = Dict[IndicatorKind, IndicatorParameters]

# 预设 JSON 中的元数据字段，其余键均为指标名
_META_KEYS = ("name", "description", "isCustom")


class PresetImportError(ValueError):
    """预设导入失败（整体失败，不做部分导入）"""


@dataclass(frozen=True)
class Preset:
    """指标参数预设

    Attributes:
        name: 名称（自定义预设内唯一）
        description: 描述
        is_custom: 是否为用户自定义
        parameters: 指标类型 -> 参数，可只包含部分指标
    """
    name: str
    description: str = ""
    is_custom: bool = False
    parameters: ParameterBundle = field(default_factory=dict)

    def to_dict(self) -> dict:
        """转换为扁平 JSON 结构 {"name", "description", "isCustom", "MA": {...}, ...}"""
        data = {
            "name": self.name,
            "description": self.description,
            "isCustom": self.is_custom,
        }
        data.update(bundle_to_dict(self.parameters))
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Preset:
        """从扁平 JSON 结构构建

        Raises:
            ValueError: 名称缺失、未知指标或参数无效
        """
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValueError(ErrorMessage.PRESET_NAME_EMPTY)

        parameters = normalize_bundle({k: v for k, v in data.items() if k not in _META_KEYS})
        return cls(
            name=name,
            description=str(data.get("description") or ""),
            is_custom=bool(data.get("isCustom", False)),
            parameters=parameters,
        )


def normalize_bundle(
    parameters: Mapping[Union[IndicatorKind, str], Union[IndicatorParameters, Mapping]],
) -> ParameterBundle:
    """统一参数集合的键为 IndicatorKind、值为参数对象

    Raises:
        ValueError: 未知指标，或参数既不是对象也不是对应的参数类
    """
    bundle = {}
    for key, value in parameters.items():
        kind = IndicatorKind.parse(key)
        if isinstance(value, Mapping):
            bundle[kind] = params_from_dict(kind, value)
        elif isinstance(value, PARAMS_TYPES[kind]):
            bundle[kind] = value
        else:
            raise ValueError(
                ErrorMessage.WRONG_PARAMS_TYPE.indicator(kind).build(
                    expected=PARAMS_TYPES[kind].__name__, actual=type(value).__name__
                )
            )
    return bundle


DEFAULT_PRESETS: tuple = (
    Preset(
        name="Trend Following",
        description="Moving averages and ADX for trend identification",
        parameters={
            IndicatorKind.MA: MAParams(periods=[20, 50, 200]),
            IndicatorKind.ADX: ADXParams(period=14),
        },
    ),
    Preset(
        name="Momentum Trading",
        description="RSI and MACD for momentum analysis",
        parameters={
            IndicatorKind.RSI: RSIParams(period=14),
            IndicatorKind.MACD: MACDParams(fast_period=12, slow_period=26, signal_period=9),
        },
    ),
    Preset(
        name="Volatility Trading",
        description="Bollinger Bands and Stochastic for volatility analysis",
        parameters={
            IndicatorKind.BOLLINGER_BANDS: BollingerBandsParams(period=20, std_dev=2.0),
            IndicatorKind.STOCHASTIC: StochasticParams(period=14, smooth_k=3, smooth_d=3),
        },
    ),
)


def parse_presets(text: str) -> List[Preset]:
    """解析自定义预设 JSON 数组

    任一条目无效即整体失败。

    Raises:
        PresetImportError: JSON 无效、顶层不是数组或条目无效
    """
    try:
        entries = json.loads(text)
    except (TypeError, ValueError) as e:
        raise PresetImportError(ErrorMessage.PRESET_IMPORT_INVALID_JSON.format(error=e)) from e

    if not isinstance(entries, list):
        raise PresetImportError(ErrorMessage.PRESET_IMPORT_NOT_ARRAY)

    presets = []
    for index, entry in enumerate(entries):
        try:
            if not isinstance(entry, Mapping):
                raise ValueError(type(entry).__name__)
            preset = Preset.from_dict(entry)
            for kind, params in preset.parameters.items():
                field_errors = validate_params(kind, params)
                if field_errors:
                    raise ValueError(f"{kind.value} {field_errors}")
        except ValueError as e:
            raise PresetImportError(
                ErrorMessage.PRESET_IMPORT_BAD_ENTRY.format(index=index, error=e)
            ) from e
        presets.append(preset)

    return presets


class PresetStore:
    """预设仓库

    每个进程（会话）构造一个实例并注入使用。

    Example:
        >>> store = PresetStore()
        >>> store.save_preset("Scalping", {IndicatorKind.RSI: RSIParams(7)}, "fast RSI")
        True
        >>> store.get_preset_parameters("Scalping")
        {<IndicatorKind.RSI: 'RSI'>: RSIParams(period=7)}
    """

    def __init__(self, builtin: Sequence[Preset] = DEFAULT_PRESETS) -> None:
        self._builtin = tuple(builtin)
        self._custom: List[Preset] = []

    @property
    def builtin_presets(self) -> List[Preset]:
        return list(self._builtin)

    @property
    def custom_presets(self) -> List[Preset]:
        return list(self._custom)

    def list_presets(self) -> List[Preset]:
        """内置预设在前，自定义预设按插入顺序在后"""
        return list(self._builtin) + list(self._custom)

    def get_preset(self, name: str) -> Optional[Preset]:
        """按名称查找预设，自定义预设优先"""
        for preset in self._custom:
            if preset.name == name:
                return preset
        for preset in self._builtin:
            if preset.name == name:
                return preset
        return None

    def get_preset_parameters(self, name: str) -> Optional[ParameterBundle]:
        """仅返回参数部分（去掉名称、描述等元数据），未找到返回 None"""
        preset = self.get_preset(name)
        if preset is None:
            return None
        return dict(preset.parameters)

    def save_preset(
        self,
        name: str,
        parameters: Mapping[Union[IndicatorKind, str], Union[IndicatorParameters, Mapping]],
        description: str = "",
    ) -> bool:
        """新增或按名称覆盖自定义预设

        Args:
            name: 预设名称，不能为空
            parameters: 参数集合
            description: 描述

        Returns:
            是否保存成功（名称为空时返回 False）

        Raises:
            ValueError: 参数集合中含未知指标或无效参数
        """
        if not name or not name.strip():
            logger.warning(ErrorMessage.PRESET_NAME_EMPTY)
            return False

        preset = Preset(
            name=name,
            description=description or "",
            is_custom=True,
            parameters=normalize_bundle(parameters),
        )

        for i, existing in enumerate(self._custom):
            if existing.name == name:
                self._custom[i] = preset
                logger.info("覆盖自定义预设: %s", name)
                break
        else:
            self._custom.append(preset)
            logger.info("新增自定义预设: %s", name)

        return True

    def delete_preset(self, name: str) -> bool:
        """删除自定义预设；内置预设不受影响"""
        before = len(self._custom)
        self._custom = [p for p in self._custom if p.name != name]
        if len(self._custom) < before:
            logger.info("删除自定义预设: %s", name)
        return True

    def load_custom(self, presets: Iterable[Preset]) -> None:
        """用持久化的数据替换当前自定义预设"""
        self._custom = []
        for preset in presets:
            self.save_preset(preset.name, preset.parameters, preset.description)

    def export_json(self) -> str:
        """导出自定义预设为 JSON 数组"""
        return json.dumps([p.to_dict() for p in self._custom], ensure_ascii=False, indent=2)

    def import_json(self, text: str) -> int:
        """导入 JSON 数组中的自定义预设

        先完整解析全部条目，再逐条调用 save_preset；解析失败时不做任何修改。

        Returns:
            导入的预设数量

        Raises:
            PresetImportError: JSON 无效或条目无效
        """
        try:
            presets = parse_presets(text)
        except PresetImportError as e:
            logger.error("%s", e)
            raise

        for preset in presets:
            self.save_preset(preset.name, preset.parameters, preset.description)

        logger.info("导入自定义预设 %d 个", len(presets))
        return len(presets)
