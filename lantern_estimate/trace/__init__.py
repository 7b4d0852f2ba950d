"""
Trace输入模块

读取并校验JSON格式的trace包，构建依赖图。
"""

from .base import Trace, TraceNode, VisualFrame, TraceError
from .loader import load_trace, parse_trace, build_dependency_graph, request_dependency_graph

__all__ = [
    "Trace",
    "TraceNode",
    "VisualFrame",
    "TraceError",
    "load_trace",
    "parse_trace",
    "build_dependency_graph",
    "request_dependency_graph",
]
