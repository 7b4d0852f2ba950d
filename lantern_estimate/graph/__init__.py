"""
依赖图模块

描述页面加载过程中的网络请求与CPU任务，以及它们之间的依赖关系。
"""

from .base import NodeType, ChildEvent, WorkNode, DependencyGraph

__all__ = [
    "NodeType",
    "ChildEvent",
    "WorkNode",
    "DependencyGraph",
]
