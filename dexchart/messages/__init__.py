# dexchart/messages/__init__.py
"""消息模块 - 统一管理错误消息、校验文案等"""

from .errorMessage import ErrorMessage, MessageBuilder

__all__ = ["ErrorMessage", "MessageBuilder"]
