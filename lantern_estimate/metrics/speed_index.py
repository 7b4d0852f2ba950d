"""
Lantern Speed Index 估算

乐观侧直接使用实际观测到的 Speed Index（Speedline），
悲观侧根据模拟结果中包含 Layout 的CPU任务做加权平均。
最终结果不早于悲观的 FCP。
"""

import asyncio
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, List, Mapping, TYPE_CHECKING

from ..graph.base import DependencyGraph, WorkNode
from ..simulation.base import NodeTiming, SimulationResult
from ..trace.base import Trace
from .base import (
    FinalMetricResult,
    MetricCoefficients,
    MetricEstimate,
    MetricStrategy,
    compute_metric_with_graphs,
)
from .first_contentful_paint import request_first_contentful_paint
from .speedline import request_speedline

if TYPE_CHECKING:
    from ..computed.context import AnalysisContext

logger = logging.getLogger(__name__)

LAYOUT_EVENT_NAME = "Layout"

# 最终结果取 max(悲观FCP, 合并值)，截距可以为负
SPEED_INDEX_COEFFICIENTS = MetricCoefficients(
    intercept=-250,
    optimistic=1.4,
    pessimistic=0.65,
)


@dataclass(frozen=True)
class LayoutWeight:
    """一个包含Layout的CPU任务的结束时间及其权重"""
    time: float
    weight: float
    node: WorkNode


def layout_weight(timing: NodeTiming) -> float:
    """log2(耗时)，不足1ms的任务权重为0"""
    duration = timing.end_time - timing.start_time
    if duration <= 0:
        return 0.0
    return max(math.log2(duration), 0.0)


def collect_layout_weights(node_timings: Mapping[WorkNode, NodeTiming]) -> List[LayoutWeight]:
    """收集所有包含Layout子事件的CPU节点"""
    weights = []
    for node, timing in node_timings.items():
        if not node.is_cpu:
            continue
        if node.has_child_event(LAYOUT_EVENT_NAME):
            weights.append(LayoutWeight(time=timing.end_time, weight=layout_weight(timing), node=node))
    return weights


def compute_layout_based_speed_index(node_timings: Mapping[WorkNode, NodeTiming],
                                     fcp_time_in_ms: float) -> float:
    """
    根据模拟结果中的Layout事件近似计算 Speed Index

    结果是包含 Layout 的CPU任务结束时间的加权平均，权重为 log2(任务耗时)，
    代表该任务对页面的"重要程度"。每个结束时间都先与FCP取较大值。
    没有Layout事件或总权重为0时直接返回FCP。

    Args:
        node_timings: 模拟得到的节点耗时
        fcp_time_in_ms: 悲观侧的FCP估算

    Returns:
        Speed Index 估算(ms)
    """
    layout_weights = collect_layout_weights(node_timings)

    total_weight = sum(evt.weight for evt in layout_weights)
    if not layout_weights or total_weight <= 0:
        logger.debug("No weighted layout events, falling back to FCP (%.1f ms)", fcp_time_in_ms)
        return fcp_time_in_ms

    total_weighted_time = sum(
        evt.weight * max(evt.time, fcp_time_in_ms) for evt in layout_weights
    )
    return total_weighted_time / total_weight


def _identity_graph(graph: DependencyGraph, trace: Trace) -> DependencyGraph:
    return graph


def derive_speed_index_estimate(simulation_result: SimulationResult,
                                optimistic: bool,
                                extras: Mapping[str, Any]) -> MetricEstimate:
    """乐观侧取观测值，悲观侧取基于Layout的估算"""
    fcp_time_in_ms = extras["fcp_result"].pessimistic_estimate.time_in_ms
    if optimistic:
        estimate = extras["speedline"].speed_index
    else:
        estimate = compute_layout_based_speed_index(simulation_result.node_timings, fcp_time_in_ms)

    return MetricEstimate(time_in_ms=estimate, node_timings=simulation_result.node_timings)


SPEED_INDEX = MetricStrategy(
    name="speed-index",
    coefficients=SPEED_INDEX_COEFFICIENTS,
    select_optimistic_graph=_identity_graph,
    select_pessimistic_graph=_identity_graph,
    derive_estimate=derive_speed_index_estimate,
)


async def compute_speed_index(trace: Trace, context: "AnalysisContext") -> FinalMetricResult:
    """
    估算 Speed Index

    观测值与FCP估算相互独立，并发获取；任何一方失败都会直接抛出。
    """
    speedline, fcp_result = await asyncio.gather(
        request_speedline(trace, context),
        request_first_contentful_paint(trace, context),
    )
    metric_result = await compute_metric_with_graphs(
        SPEED_INDEX, trace, context, {"speedline": speedline, "fcp_result": fcp_result}
    )

    fcp_floor = fcp_result.pessimistic_estimate.time_in_ms
    timing = max(metric_result.timing, fcp_floor)
    logger.info("Speed Index: %.1f ms (blended %.1f ms, FCP floor %.1f ms)",
                timing, metric_result.timing, fcp_floor)
    return replace(metric_result, timing=timing)


async def request_speed_index(trace: Trace, context: "AnalysisContext") -> FinalMetricResult:
    """获取 Speed Index 估算（同一次分析内只计算一次）"""
    return await context.cache.request(
        "LanternSpeedIndex", trace, lambda: compute_speed_index(trace, context)
    )
