# dexchart/api/routes/__init__.py
"""路由模块"""

from . import health, indicators, presets

__all__ = ["health", "indicators", "presets"]
