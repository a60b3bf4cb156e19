# tests/test_config/test_settings.py
"""Settings 配置测试"""

import os
from unittest.mock import patch

from dexchart.config.settings import Settings


class TestSettingsDefaults:
    """Settings 默认值测试"""

    def test_api_defaults(self):
        """测试 API 配置默认值"""
        settings = Settings()

        assert settings.API_TITLE == "DexChart API"
        assert settings.API_VERSION == "0.1.0"
        assert "指标" in settings.API_DESCRIPTION

    def test_indicator_defaults(self):
        """测试指标配置默认值"""
        settings = Settings()

        assert settings.MACD_STRICT_SIGNAL is False
        assert settings.MAX_BARS == 5000
        assert settings.MOCK_BAR_COUNT == 100

    def test_preset_storage_defaults(self):
        """测试预设存储默认值"""
        settings = Settings()

        assert settings.CUSTOM_PRESETS_KEY == "chartCustomPresets"

    def test_log_defaults(self):
        """测试日志配置默认值"""
        settings = Settings()

        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_JSON_FORMAT is False


class TestSettingsEnvironmentOverride:
    """Settings 环境变量覆盖测试"""

    def test_strict_signal_from_env(self):
        """测试从环境变量读取 MACD 严格模式"""
        with patch.dict(os.environ, {"MACD_STRICT_SIGNAL": "true"}):
            assert Settings().MACD_STRICT_SIGNAL is True

    def test_max_bars_from_env(self):
        """测试从环境变量读取 K 线上限"""
        with patch.dict(os.environ, {"MAX_BARS": "200"}):
            settings = Settings()
            assert settings.MAX_BARS == 200
            assert isinstance(settings.MAX_BARS, int)

    def test_database_url_from_env(self):
        """测试从环境变量读取数据库地址"""
        with patch.dict(os.environ, {"DATABASE_URL": "sqlite+aiosqlite:///:memory:"}):
            assert Settings().DATABASE_URL == "sqlite+aiosqlite:///:memory:"

    def test_env_is_case_sensitive(self):
        """测试环境变量区分大小写"""
        with patch.dict(os.environ, {"log_level": "DEBUG"}):
            assert Settings().LOG_LEVEL == "INFO"


class TestServerSettings:
    """服务监听配置测试"""

    def test_defaults(self):
        """测试监听地址默认值"""
        settings = Settings()

        assert settings.API_HOST == "127.0.0.1"
        assert settings.API_PORT == 8000

    def test_port_from_env(self):
        """测试从环境变量读取端口"""
        with patch.dict(os.environ, {"API_PORT": "9000"}):
            assert Settings().API_PORT == 9000
