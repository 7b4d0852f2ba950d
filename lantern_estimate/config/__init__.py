"""
全局配置模块

管理系统级的全局配置和设置。
"""

from .settings import Settings, get_settings, setup_logging

__all__ = ["Settings", "get_settings", "setup_logging"]
