"""
指标估算器

对单个trace执行一次完整的分析运行，并整理成便于输出的结果字典。
"""

import asyncio
from typing import Dict, Any, Optional, List

from ..computed.context import AnalysisContext
from ..config.settings import Settings, get_settings
from ..metrics.base import FinalMetricResult, result_to_dict
from ..metrics.registry import metric_registry
from ..metrics.speed_index import SPEED_INDEX, collect_layout_weights
from ..simulation.profiles import create_profile
from ..trace.base import Trace


class MetricEstimator:
    """指标估算器主类"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.metric_registry = metric_registry

    def create_context(self, profile_name: Optional[str] = None) -> AnalysisContext:
        """为一次分析运行创建新的上下文（独立的缓存）"""
        profile = create_profile(profile_name or self.settings.default_profile)
        return AnalysisContext(profile=profile)

    async def estimate_async(self, metric_name: str, trace: Trace,
                             profile_name: Optional[str] = None) -> Dict[str, Any]:
        """
        估算单个指标

        Args:
            metric_name: 指标名称（如 speed-index）
            trace: 输入trace
            profile_name: 节流配置名称，默认使用设置中的配置

        Returns:
            估算结果字典
        """
        compute_fn = self.metric_registry.get(metric_name)
        context = self.create_context(profile_name)
        result = await compute_fn(trace, context)

        report = {
            "metric_name": metric_name,
            "url": trace.url,
            "profile": context.profile.get_profile_info(),
            **result_to_dict(result),
            "node_count": len(result.pessimistic_estimate.node_timings),
        }

        if metric_name == SPEED_INDEX.name:
            report["layout_nodes"] = self._identify_major_layout_nodes(result)

        return report

    def estimate(self, metric_name: str, trace: Trace,
                 profile_name: Optional[str] = None) -> Dict[str, Any]:
        """estimate_async 的同步版本"""
        return asyncio.run(self.estimate_async(metric_name, trace, profile_name))

    def _identify_major_layout_nodes(self, result: FinalMetricResult) -> List[Dict[str, Any]]:
        """悲观模拟中权重最高的Layout节点"""
        layout_weights = collect_layout_weights(result.pessimistic_estimate.node_timings)
        total_weight = sum(evt.weight for evt in layout_weights)

        top = sorted(layout_weights, key=lambda x: x.weight, reverse=True)
        return [
            {
                "node_id": evt.node.node_id,
                "end_time_ms": evt.time,
                "weight": evt.weight,
                "percentage": (evt.weight / total_weight * 100) if total_weight > 0 else 0,
            }
            for evt in top[:self.settings.top_layout_nodes]
        ]
