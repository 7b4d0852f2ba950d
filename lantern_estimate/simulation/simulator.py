"""
依赖图模拟器

按拓扑顺序调度节点：每个节点在其所有依赖完成后立即开始，
不限制并发。同一图和同一选项的模拟结果总是相同。
"""

import logging
from typing import Dict

from ..graph.base import DependencyGraph, WorkNode
from .base import NodeTiming, SimulationResult, SimulationOptions

logger = logging.getLogger(__name__)


class GraphSimulator:
    """依赖图模拟器"""

    def simulate(self, graph: DependencyGraph, options: SimulationOptions) -> SimulationResult:
        """
        模拟依赖图的执行

        Args:
            graph: 依赖图
            options: 模拟选项（节流配置 + 乐观/悲观假设）

        Returns:
            包含每个节点耗时和整体完成时间的模拟结果
        """
        node_timings: Dict[WorkNode, NodeTiming] = {}

        for node in graph.topological_order():
            start_time = max(
                (node_timings[dep].end_time for dep in graph.dependencies(node)),
                default=0.0,
            )
            end_time = start_time + self.estimate_node_duration(node, options)
            node_timings[node] = NodeTiming(start_time=start_time, end_time=end_time)

        timing = max((t.end_time for t in node_timings.values()), default=0.0)

        logger.debug(
            "Simulated %d nodes (%s, optimistic=%s): %.1f ms",
            len(node_timings), options.profile.name, options.optimistic, timing,
        )
        return SimulationResult(node_timings=node_timings, timing=timing)

    def estimate_node_duration(self, node: WorkNode, options: SimulationOptions) -> float:
        """估算单个节点在节流条件下的耗时(ms)"""
        profile = options.profile

        if node.is_cpu:
            return node.duration_ms * profile.cpu_slowdown_multiplier

        # bytes * 8 / Kbps 即为毫秒
        transfer_time = node.transfer_size_bytes * 8 / profile.throughput_kbps
        return options.round_trips * profile.rtt_ms + transfer_time
