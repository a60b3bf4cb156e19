from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    """应用配置"""
    
    # API 配置
    API_TITLE: str = "DexChart API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "限价单 DEX 图表指标 API - 支持技术指标计算与参数预设管理"
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000
    
    # 指标配置
    MACD_STRICT_SIGNAL: bool = False
    MAX_BARS: int = 5000
    MOCK_BAR_COUNT: int = 100
    
    # 预设存储配置
    CUSTOM_PRESETS_KEY: str = "chartCustomPresets"
    DATABASE_URL: Optional[str] = None
    
    # 日志配置
    LOG_LEVEL: str = "INFO"
    LOG_JSON_FORMAT: bool = False
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

settings = Settings()
