"""
模拟基础类定义

定义节流配置、模拟选项以及模拟结果的数据结构。
"""

from dataclasses import dataclass
from typing import Dict, Any, Mapping
from pydantic import BaseModel as PydanticModel, Field

from ..graph.base import WorkNode


@dataclass(frozen=True)
class NodeTiming:
    """单个节点的模拟耗时（相对导航开始，单位ms）"""
    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class SimulationResult:
    """一次模拟的结果"""
    node_timings: Mapping[WorkNode, NodeTiming]
    timing: float  # 整体完成时间


class ThrottlingProfile(PydanticModel):
    """网络/CPU节流配置"""
    name: str = Field(description="配置名称")
    rtt_ms: float = Field(gt=0, description="往返时延(ms)")
    throughput_kbps: float = Field(gt=0, description="下行吞吐量(Kbps)")
    cpu_slowdown_multiplier: float = Field(default=1.0, gt=0, description="CPU降速倍数")

    def get_profile_info(self) -> Dict[str, Any]:
        """获取节流配置信息"""
        return self.model_dump()


class SimulationOptions(PydanticModel):
    """模拟选项"""
    profile: ThrottlingProfile
    optimistic: bool = Field(default=False, description="是否使用乐观假设（复用连接）")

    @property
    def round_trips(self) -> int:
        """每个网络请求需要的往返次数"""
        # 悲观：DNS + TCP + TLS 之后才发送请求
        return 1 if self.optimistic else 3
