"""
Lantern-Estimate: 页面加载指标估算工具

基于依赖图模拟估算页面加载指标（First Contentful Paint、Speed Index），
无需运行真实浏览器。
"""

__version__ = "0.1.0"

from .estimator.base import MetricEstimator
from .computed.context import AnalysisContext
from .graph.base import NodeType, ChildEvent, WorkNode, DependencyGraph
from .metrics.base import MetricCoefficients, MetricEstimate, FinalMetricResult, MetricStrategy
from .metrics.registry import MetricRegistry
from .metrics.speed_index import compute_layout_based_speed_index, compute_speed_index
from .simulation.base import NodeTiming, SimulationResult, ThrottlingProfile
from .simulation.profiles import create_profile, list_supported_profiles
from .trace.base import Trace, TraceError
from .trace.loader import load_trace

__all__ = [
    "MetricEstimator",
    "AnalysisContext",
    "NodeType",
    "ChildEvent",
    "WorkNode",
    "DependencyGraph",
    "MetricCoefficients",
    "MetricEstimate",
    "FinalMetricResult",
    "MetricStrategy",
    "MetricRegistry",
    "compute_layout_based_speed_index",
    "compute_speed_index",
    "NodeTiming",
    "SimulationResult",
    "ThrottlingProfile",
    "create_profile",
    "list_supported_profiles",
    "Trace",
    "TraceError",
    "load_trace",
]
