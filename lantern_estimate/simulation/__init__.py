"""
模拟模块

在给定的网络/CPU节流假设下，对依赖图进行确定性模拟，
得到每个节点的开始/结束时间。
"""

from .base import NodeTiming, SimulationResult, ThrottlingProfile, SimulationOptions
from .profiles import (
    create_profile,
    list_supported_profiles,
    THROTTLING_PROFILES,
)
from .simulator import GraphSimulator

__all__ = [
    # 基础类
    "NodeTiming",
    "SimulationResult",
    "ThrottlingProfile",
    "SimulationOptions",

    # 节流配置
    "create_profile",
    "list_supported_profiles",
    "THROTTLING_PROFILES",

    # 模拟器
    "GraphSimulator",
]
