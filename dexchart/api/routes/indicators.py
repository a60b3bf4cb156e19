# dexchart/api/routes/indicators.py
"""指标计算相关端点"""

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from dexchart.config.settings import settings
from dexchart.data import Bar, generate_mock_bars
from dexchart.indicators import (
    PARAMS_TYPES,
    IndicatorKind,
    bundle_from_dict,
    enrich_bars,
)
from dexchart.messages import ErrorMessage
from dexchart.presets import rules_to_dict, validate_bundle, validate_parameter


router = APIRouter()


# === 请求/响应模型 ===

class BarModel(BaseModel):
    """K 线请求体"""
    timestamp: str
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


class ComputeRequest(BaseModel):
    """指标计算请求"""
    bars: List[BarModel] = Field(..., description="按时间升序排列的 K 线")
    indicators: Dict[str, Dict[str, Any]] = Field(
        ..., description='指标参数，如 {"MA": {"periods": [20, 50]}, "RSI": {"period": 14}}'
    )
    strict_signal: Optional[bool] = Field(None, description="MACD 信号线是否跳过预热期")


class ValidateRequest(BaseModel):
    """单参数校验请求"""
    indicator: str
    param: str
    value: Any


class ValidateResponse(BaseModel):
    """单参数校验结果"""
    ok: bool
    error: Optional[str] = None


# === API 端点 ===

@router.get("/indicators/rules")
async def get_rules() -> dict:
    """获取全部参数校验规则"""
    return rules_to_dict()


@router.post("/indicators/validate")
async def validate(request: ValidateRequest) -> ValidateResponse:
    """校验单个指标参数，校验失败同样返回 200"""
    result = validate_parameter(request.indicator, request.param, request.value)
    return ValidateResponse(ok=result.ok, error=result.error)


@router.post("/indicators/compute")
async def compute(request: ComputeRequest) -> List[dict]:
    """计算指标并返回增强后的 K 线

    参数存在任一校验错误时返回 400，detail 中给出逐字段错误表。
    """
    if len(request.bars) > settings.MAX_BARS:
        raise HTTPException(
            status_code=400,
            detail=ErrorMessage.TOO_MANY_BARS.format(count=len(request.bars), limit=settings.MAX_BARS),
        )

    try:
        bundle = bundle_from_dict(request.indicators)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    errors = validate_bundle(bundle)
    if errors:
        raise HTTPException(
            status_code=400,
            detail={"message": ErrorMessage.HTTP_INVALID_PARAMETERS, "errors": errors},
        )

    bars = [Bar(**b.model_dump()) for b in request.bars]
    try:
        points = enrich_bars(bars, bundle, strict_signal=request.strict_signal)
    except Exception as e:
        raise HTTPException(status_code=500, detail=ErrorMessage.HTTP_INTERNAL_ERROR.format(error=str(e)))

    return [point.to_dict(finite_only=True) for point in points]


@router.get("/bars/mock")
async def get_mock_bars(
    count: Optional[int] = Query(None, ge=1, le=1000, description="K 线数量，默认读取配置"),
    seed: Optional[int] = Query(None, description="随机种子"),
    indicators: List[str] = Query([], description="使用默认参数计算的指标，如 MA、RSI"),
) -> List[dict]:
    """生成模拟 K 线，可附带默认参数的指标

    Args:
        count: K 线数量
        seed: 随机种子，相同种子返回相同价格
        indicators: 指标名称列表
    """
    try:
        kinds = [IndicatorKind.parse(name) for name in indicators]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    bars = generate_mock_bars(count or settings.MOCK_BAR_COUNT, seed=seed)
    points = enrich_bars(bars, {kind: PARAMS_TYPES[kind]() for kind in kinds})
    return [point.to_dict(finite_only=True) for point in points]
