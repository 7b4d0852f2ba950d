"""
指标注册表

统一管理所有支持的指标，提供指标查询、注册和获取计算函数的功能。
"""

from typing import Awaitable, Callable, Dict, List, TYPE_CHECKING

from ..trace.base import Trace
from .base import FinalMetricResult
from .first_contentful_paint import FIRST_CONTENTFUL_PAINT, request_first_contentful_paint
from .speed_index import SPEED_INDEX, request_speed_index

if TYPE_CHECKING:
    from ..computed.context import AnalysisContext

MetricComputeFn = Callable[[Trace, "AnalysisContext"], Awaitable[FinalMetricResult]]


class MetricRegistry:
    """指标注册表类"""

    def __init__(self):
        self._metrics: Dict[str, MetricComputeFn] = {}
        self._register_built_in_metrics()

    def _register_built_in_metrics(self) -> None:
        """注册内置指标"""
        self.register(FIRST_CONTENTFUL_PAINT.name, request_first_contentful_paint)
        self.register(SPEED_INDEX.name, request_speed_index)

    def register(self, metric_name: str, compute_fn: MetricComputeFn) -> None:
        """
        注册指标

        Args:
            metric_name: 指标名称
            compute_fn: 异步计算函数 (trace, context) -> FinalMetricResult
        """
        self._metrics[metric_name] = compute_fn

    def get(self, metric_name: str) -> MetricComputeFn:
        """获取指标的计算函数"""
        if metric_name not in self._metrics:
            raise ValueError(f"Unsupported metric: {metric_name}")
        return self._metrics[metric_name]

    def list_metrics(self) -> List[str]:
        """获取所有支持的指标列表"""
        return list(self._metrics.keys())


# 全局指标注册表实例
metric_registry = MetricRegistry()
