# dexchart/api/routes/presets.py
"""参数预设相关端点"""

import logging
from functools import lru_cache
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response
from pydantic import BaseModel, Field

from dexchart.indicators import bundle_to_dict
from dexchart.messages import ErrorMessage
from dexchart.presets import (
    PresetImportError,
    PresetRepository,
    PresetStore,
    normalize_bundle,
    validate_bundle,
)


logger = logging.getLogger(__name__)

router = APIRouter()

EXPORT_FILENAME = "indicator-presets.json"


# === 依赖注入 ===

@lru_cache()
def get_preset_store() -> PresetStore:
    """获取预设仓库实例 (依赖注入)"""
    return PresetStore()


@lru_cache()
def get_preset_repository() -> PresetRepository:
    """获取预设持久化实例 (依赖注入)"""
    return PresetRepository()


# === 请求模型 ===

class SavePresetRequest(BaseModel):
    """保存预设请求"""
    name: str = Field(..., description="预设名称")
    description: str = Field("", description="预设描述")
    parameters: Dict[str, Dict[str, Any]] = Field(..., description="指标参数")


# === API 端点 ===

@router.get("/presets")
async def list_presets(store: PresetStore = Depends(get_preset_store)) -> List[dict]:
    """列出全部预设（内置在前）"""
    return [preset.to_dict() for preset in store.list_presets()]


@router.post("/presets")
async def save_preset(
    request: SavePresetRequest,
    store: PresetStore = Depends(get_preset_store),
    repo: PresetRepository = Depends(get_preset_repository),
) -> dict:
    """新增或覆盖自定义预设"""
    try:
        bundle = normalize_bundle(request.parameters)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    errors = validate_bundle(bundle)
    if errors:
        raise HTTPException(
            status_code=400,
            detail={"message": ErrorMessage.HTTP_INVALID_PARAMETERS, "errors": errors},
        )

    if not store.save_preset(request.name, bundle, request.description):
        raise HTTPException(status_code=400, detail=ErrorMessage.PRESET_NAME_EMPTY)

    await repo.persist(store)
    return {"success": True, "preset": store.get_preset(request.name).to_dict()}


@router.get("/presets/export")
async def export_presets(store: PresetStore = Depends(get_preset_store)) -> Response:
    """下载自定义预设 JSON 文件"""
    return Response(
        content=store.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/presets/import")
async def import_presets(
    request: Request,
    store: PresetStore = Depends(get_preset_store),
    repo: PresetRepository = Depends(get_preset_repository),
) -> dict:
    """导入自定义预设 JSON 数组，任一条目无效则整体失败"""
    body = await request.body()
    try:
        count = store.import_json(body.decode("utf-8"))
    except (PresetImportError, UnicodeDecodeError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    await repo.persist(store)
    return {"success": True, "imported": count}


@router.get("/presets/{name}/parameters")
async def get_preset_parameters(name: str, store: PresetStore = Depends(get_preset_store)) -> dict:
    """获取预设的参数部分"""
    bundle = store.get_preset_parameters(name)
    if bundle is None:
        raise HTTPException(status_code=404, detail=ErrorMessage.PRESET_NOT_FOUND.format(name=name))
    return bundle_to_dict(bundle)


@router.delete("/presets/{name}")
async def delete_preset(
    name: str,
    store: PresetStore = Depends(get_preset_store),
    repo: PresetRepository = Depends(get_preset_repository),
) -> dict:
    """删除自定义预设；内置预设名称不做任何修改"""
    success = store.delete_preset(name)
    await repo.persist(store)
    return {"success": success}
