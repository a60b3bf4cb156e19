"""数据层模块"""

from .models import Bar, EnrichedPoint
from .mock import generate_mock_bars

__all__ = [
    "Bar",
    "EnrichedPoint",
    "generate_mock_bars",
]
