"""
估算引擎模块

对一次分析运行进行编排：创建上下文、执行指标计算并整理结果。
"""

from .base import MetricEstimator

__all__ = [
    "MetricEstimator",
]
