"""
指标估算模块

基于依赖图模拟估算页面加载指标（FCP、Speed Index）。
"""

from .base import (
    MetricCoefficients,
    MetricEstimate,
    FinalMetricResult,
    MetricStrategy,
    blend_estimates,
    compute_metric_with_graphs,
)
from .speed_index import (
    SPEED_INDEX,
    compute_layout_based_speed_index,
    compute_speed_index,
)
from .first_contentful_paint import FIRST_CONTENTFUL_PAINT, compute_first_contentful_paint
from .speedline import SpeedlineResult, compute_speedline
from .registry import MetricRegistry, metric_registry

__all__ = [
    "MetricCoefficients",
    "MetricEstimate",
    "FinalMetricResult",
    "MetricStrategy",
    "blend_estimates",
    "compute_metric_with_graphs",
    "SPEED_INDEX",
    "compute_layout_based_speed_index",
    "compute_speed_index",
    "FIRST_CONTENTFUL_PAINT",
    "compute_first_contentful_paint",
    "SpeedlineResult",
    "compute_speedline",
    "MetricRegistry",
    "metric_registry",
]
