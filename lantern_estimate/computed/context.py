"""
分析上下文

一次分析运行所需的全部协作者：节流配置、模拟器和派生结果缓存。
"""

from dataclasses import dataclass, field

from ..simulation.base import ThrottlingProfile, SimulationOptions
from ..simulation.simulator import GraphSimulator
from .cache import ComputedArtifactCache


@dataclass
class AnalysisContext:
    """单次分析运行的上下文"""
    profile: ThrottlingProfile
    simulator: GraphSimulator = field(default_factory=GraphSimulator)
    cache: ComputedArtifactCache = field(default_factory=ComputedArtifactCache)

    def simulation_options(self, optimistic: bool) -> SimulationOptions:
        """构建一侧（乐观/悲观）的模拟选项"""
        return SimulationOptions(profile=self.profile, optimistic=optimistic)
