"""指标参数校验规则

每个 (指标, 参数) 对应一条 {min, max, step} 规则，参数名使用前端的驼峰命名。
"""

from dataclasses import dataclass
from typing import Dict

from dexchart.indicators.params import IndicatorKind


@dataclass(frozen=True)
class ParamRule:
    """单个参数的取值规则"""
    min: float
    max: float
    step: float
    description: str

    @property
    def integer(self) -> bool:
        """步长为 1 的参数只接受整数"""
        return self.step == 1

    def to_dict(self) -> dict:
        return {
            "min": self.min,
            "max": self.max,
            "step": self.step,
            "description": self.description,
        }


VALIDATION_RULES: Dict[IndicatorKind, Dict[str, ParamRule]] = {
    IndicatorKind.MA: {
        "periods": ParamRule(
            min=1, max=500, step=1,
            description="Number of periods to calculate the moving average. Common values are "
                        "20 (short-term), 50 (medium-term), and 200 (long-term) periods.",
        ),
    },
    IndicatorKind.RSI: {
        "period": ParamRule(
            min=2, max=100, step=1,
            description="Number of periods used to calculate RSI. Standard is 14 periods. "
                        "Lower values increase sensitivity.",
        ),
    },
    IndicatorKind.BOLLINGER_BANDS: {
        "period": ParamRule(
            min=5, max=100, step=1,
            description="Number of periods for the moving average. Standard is 20 periods.",
        ),
        "stdDev": ParamRule(
            min=0.1, max=5, step=0.1,
            description="Number of standard deviations for the bands. Standard is 2. "
                        "Higher values create wider bands.",
        ),
    },
    IndicatorKind.MACD: {
        "fastPeriod": ParamRule(
            min=2, max=100, step=1,
            description="Number of periods for the fast moving average. Standard is 12 periods.",
        ),
        "slowPeriod": ParamRule(
            min=2, max=100, step=1,
            description="Number of periods for the slow moving average. Standard is 26 periods.",
        ),
        "signalPeriod": ParamRule(
            min=2, max=100, step=1,
            description="Number of periods for the signal line. Standard is 9 periods.",
        ),
    },
    IndicatorKind.STOCHASTIC: {
        "period": ParamRule(
            min=1, max=100, step=1,
            description="Look-back period for highest high and lowest low. Standard is 14 periods.",
        ),
        "smoothK": ParamRule(
            min=1, max=10, step=1,
            description="Smoothing for %K line. Standard is 3 periods.",
        ),
        "smoothD": ParamRule(
            min=1, max=10, step=1,
            description="Smoothing for %D line. Standard is 3 periods.",
        ),
    },
    IndicatorKind.ADX: {
        "period": ParamRule(
            min=2, max=100, step=1,
            description="Number of periods for ADX calculation. Standard is 14 periods.",
        ),
    },
}


def rules_to_dict() -> dict:
    """全部规则的 JSON 友好表示"""
    return {
        kind.value: {name: rule.to_dict() for name, rule in params.items()}
        for kind, params in VALIDATION_RULES.items()
    }
