"""
Lantern First Contentful Paint 估算

悲观图：观测FCP之前开始的所有节点；
乐观图：在悲观图基础上去掉非渲染阻塞的网络请求。
"""

import logging
from typing import Any, Mapping, TYPE_CHECKING

from ..graph.base import DependencyGraph
from ..simulation.base import SimulationResult
from ..trace.base import Trace, TraceError
from .base import (
    FinalMetricResult,
    MetricCoefficients,
    MetricEstimate,
    MetricStrategy,
    compute_metric_with_graphs,
)

if TYPE_CHECKING:
    from ..computed.context import AnalysisContext

logger = logging.getLogger(__name__)

FIRST_CONTENTFUL_PAINT_COEFFICIENTS = MetricCoefficients(
    intercept=0,
    optimistic=0.5,
    pessimistic=0.5,
)


def _observed_fcp(trace: Trace) -> float:
    if trace.first_contentful_paint_ms is None:
        raise TraceError("No first contentful paint found in trace")
    return trace.first_contentful_paint_ms


def get_pessimistic_fcp_graph(graph: DependencyGraph, trace: Trace) -> DependencyGraph:
    """观测FCP之前开始的节点"""
    fcp_ts = _observed_fcp(trace)
    return graph.filter(lambda node: node.start_time_ms <= fcp_ts)


def get_optimistic_fcp_graph(graph: DependencyGraph, trace: Trace) -> DependencyGraph:
    """观测FCP之前开始的CPU任务和渲染阻塞请求"""
    fcp_ts = _observed_fcp(trace)
    return graph.filter(
        lambda node: node.start_time_ms <= fcp_ts and (node.is_cpu or node.render_blocking)
    )


def derive_fcp_estimate(simulation_result: SimulationResult,
                        optimistic: bool,
                        extras: Mapping[str, Any]) -> MetricEstimate:
    return MetricEstimate(
        time_in_ms=simulation_result.timing,
        node_timings=simulation_result.node_timings,
    )


FIRST_CONTENTFUL_PAINT = MetricStrategy(
    name="first-contentful-paint",
    coefficients=FIRST_CONTENTFUL_PAINT_COEFFICIENTS,
    select_optimistic_graph=get_optimistic_fcp_graph,
    select_pessimistic_graph=get_pessimistic_fcp_graph,
    derive_estimate=derive_fcp_estimate,
)


async def compute_first_contentful_paint(trace: Trace,
                                         context: "AnalysisContext") -> FinalMetricResult:
    """估算 First Contentful Paint"""
    _observed_fcp(trace)
    result = await compute_metric_with_graphs(FIRST_CONTENTFUL_PAINT, trace, context)
    logger.info("First Contentful Paint: %.1f ms", result.timing)
    return result


async def request_first_contentful_paint(trace: Trace,
                                         context: "AnalysisContext") -> FinalMetricResult:
    """获取FCP估算（同一次分析内只计算一次）"""
    return await context.cache.request(
        "LanternFirstContentfulPaint", trace,
        lambda: compute_first_contentful_paint(trace, context),
    )
