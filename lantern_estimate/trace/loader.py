"""
Trace加载与依赖图构建
"""

import json
from pathlib import Path
from typing import Any, Dict, Union, TYPE_CHECKING
from pydantic import ValidationError

from ..graph.base import ChildEvent, DependencyGraph, WorkNode
from .base import Trace, TraceError

# 避免循环导入
if TYPE_CHECKING:
    from ..computed.context import AnalysisContext


def parse_trace(data: Dict[str, Any]) -> Trace:
    """
    校验trace数据

    Raises:
        TraceError: 数据不符合trace格式
    """
    try:
        return Trace.model_validate(data)
    except ValidationError as e:
        raise TraceError(f"Invalid trace: {e}") from e


def load_trace(path: Union[str, Path]) -> Trace:
    """
    从JSON文件加载trace

    Args:
        path: trace文件路径

    Returns:
        Trace实例

    Raises:
        TraceError: 文件无法读取或内容无效
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise TraceError(f"Unable to read trace {path}: {e}") from e

    return parse_trace(data)


def build_dependency_graph(trace: Trace) -> DependencyGraph:
    """
    根据trace节点构建依赖图

    Raises:
        TraceError: 依赖了不存在的节点、节点ID重复或存在环
    """
    nodes: Dict[str, WorkNode] = {}
    for item in trace.nodes:
        if item.id in nodes:
            raise TraceError(f"Duplicate node id in trace: {item.id}")
        nodes[item.id] = WorkNode(
            node_id=item.id,
            node_type=item.type,
            start_time_ms=item.start_time_ms,
            duration_ms=item.duration_ms,
            transfer_size_bytes=item.transfer_size_bytes,
            render_blocking=item.render_blocking,
            child_events=tuple(ChildEvent(name) for name in item.child_events),
        )

    edges = []
    for item in trace.nodes:
        for dep_id in item.dependencies:
            if dep_id not in nodes:
                raise TraceError(f"Node {item.id} depends on unknown node {dep_id}")
            edges.append((nodes[dep_id], nodes[item.id]))

    graph = DependencyGraph(nodes.values(), edges)
    try:
        graph.topological_order()
    except ValueError as e:
        raise TraceError(str(e)) from e
    return graph


async def request_dependency_graph(trace: Trace, context: "AnalysisContext") -> DependencyGraph:
    """获取trace的依赖图（同一次分析内只构建一次）"""

    async def compute() -> DependencyGraph:
        return build_dependency_graph(trace)

    return await context.cache.request("PageDependencyGraph", trace, compute)
