# dexchart/api/main.py
"""FastAPI 应用入口"""

from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
from dexchart.api.routes import health, indicators, presets
from dexchart.api.routes.presets import get_preset_repository, get_preset_store
from dexchart.core.logging import setup_logging, logger
from dexchart.config.settings import settings
from dexchart.database import init_db, close_db

# 加载环境变量
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    setup_logging()
    await init_db()

    count = await get_preset_repository().load_into(get_preset_store())
    logger.info("已载入自定义预设 %d 个", count)
    logger.info("🚀 DexChart API 启动成功")
    yield
    await close_db()
    logger.info("👋 DexChart API 已关闭")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# 配置 CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 生产环境应设置为具体域名
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 注册路由
app.include_router(health.router, tags=["健康检查"])
app.include_router(indicators.router, prefix="/api", tags=["指标"])
app.include_router(presets.router, prefix="/api", tags=["预设"])


def run() -> None:
    """以 uvicorn 启动服务"""
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    run()
