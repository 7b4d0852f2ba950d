"""
计算结果缓存模块

同一次分析运行内，对同一trace的派生结果只计算一次。
"""

from .cache import ComputedArtifactCache
from .context import AnalysisContext

__all__ = ["ComputedArtifactCache", "AnalysisContext"]
