"""
Lantern指标估算基础

每个指标提供一个策略记录（MetricStrategy）：乐观/悲观依赖图的选择方式、
从模拟结果推导估算值的方式，以及线性模型系数。
compute_metric_with_graphs 对所有指标执行同一套流程：

    timing = intercept + optimistic * 乐观估算 + pessimistic * 悲观估算
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, TYPE_CHECKING

from ..graph.base import DependencyGraph, WorkNode
from ..simulation.base import NodeTiming, SimulationResult
from ..trace.base import Trace
from ..trace.loader import request_dependency_graph

# 避免循环导入
if TYPE_CHECKING:
    from ..computed.context import AnalysisContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricCoefficients:
    """线性模型系数（离线基于真实数据拟合，运行期间不变）"""
    intercept: float
    optimistic: float
    pessimistic: float

    def __post_init__(self):
        for name in ("intercept", "optimistic", "pessimistic"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"Invalid coefficient {name}: {value!r}")


@dataclass(frozen=True)
class MetricEstimate:
    """单侧（乐观或悲观）的估算值，node_timings 原样保留供诊断使用"""
    time_in_ms: float
    node_timings: Mapping[WorkNode, NodeTiming]


@dataclass(frozen=True)
class FinalMetricResult:
    """指标估算的最终结果"""
    timing: float
    optimistic_estimate: MetricEstimate
    pessimistic_estimate: MetricEstimate


GraphSelector = Callable[[DependencyGraph, Trace], DependencyGraph]
EstimateDeriver = Callable[[SimulationResult, bool, Mapping[str, Any]], MetricEstimate]


@dataclass(frozen=True)
class MetricStrategy:
    """单个指标的估算策略"""
    name: str
    coefficients: MetricCoefficients
    select_optimistic_graph: GraphSelector
    select_pessimistic_graph: GraphSelector
    derive_estimate: EstimateDeriver


def blend_estimates(coefficients: MetricCoefficients,
                    optimistic_estimate: MetricEstimate,
                    pessimistic_estimate: MetricEstimate) -> float:
    """按线性模型合并乐观与悲观估算"""
    return (
        coefficients.intercept
        + coefficients.optimistic * optimistic_estimate.time_in_ms
        + coefficients.pessimistic * pessimistic_estimate.time_in_ms
    )


async def compute_metric_with_graphs(strategy: MetricStrategy,
                                     trace: Trace,
                                     context: "AnalysisContext",
                                     extras: Optional[Mapping[str, Any]] = None) -> FinalMetricResult:
    """
    执行通用的乐观/悲观双侧模拟并合并结果

    Args:
        strategy: 指标策略
        trace: 输入trace
        context: 分析上下文
        extras: 传给 derive_estimate 的附加数据（如观测到的Speed Index）

    Returns:
        最终指标结果
    """
    extras = extras or {}
    graph = await request_dependency_graph(trace, context)

    optimistic_graph = strategy.select_optimistic_graph(graph, trace)
    pessimistic_graph = strategy.select_pessimistic_graph(graph, trace)

    optimistic_simulation = context.simulator.simulate(
        optimistic_graph, context.simulation_options(optimistic=True)
    )
    pessimistic_simulation = context.simulator.simulate(
        pessimistic_graph, context.simulation_options(optimistic=False)
    )

    optimistic_estimate = strategy.derive_estimate(optimistic_simulation, True, extras)
    pessimistic_estimate = strategy.derive_estimate(pessimistic_simulation, False, extras)

    timing = blend_estimates(strategy.coefficients, optimistic_estimate, pessimistic_estimate)
    logger.debug(
        "%s: optimistic=%.1f ms, pessimistic=%.1f ms, blended=%.1f ms",
        strategy.name, optimistic_estimate.time_in_ms, pessimistic_estimate.time_in_ms, timing,
    )

    return FinalMetricResult(
        timing=timing,
        optimistic_estimate=optimistic_estimate,
        pessimistic_estimate=pessimistic_estimate,
    )


def result_to_dict(result: FinalMetricResult) -> Dict[str, float]:
    """转换为只包含数值的字典"""
    return {
        "timing_ms": result.timing,
        "optimistic_ms": result.optimistic_estimate.time_in_ms,
        "pessimistic_ms": result.pessimistic_estimate.time_in_ms,
    }
