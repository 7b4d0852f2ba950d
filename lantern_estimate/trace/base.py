"""
Trace数据模型

trace包是本工具的输入格式：已经从浏览器trace中提取出的
节点列表、可视化进度帧以及观测到的FCP时间。
"""

from typing import List, Optional
from pydantic import BaseModel as PydanticModel, Field

from ..graph.base import NodeType


class TraceError(ValueError):
    """trace内容无效或缺少计算所需的数据"""


class VisualFrame(PydanticModel):
    """一帧截图的可视化完成度"""
    timestamp_ms: float = Field(ge=0, description="相对导航开始的时间(ms)")
    progress: float = Field(ge=0, le=100, description="可视化完成度(%)")


class TraceNode(PydanticModel):
    """trace中的一个网络请求或CPU任务"""
    id: str = Field(description="节点ID")
    type: NodeType = Field(description="节点类型：network 或 cpu")
    start_time_ms: float = Field(default=0.0, ge=0, description="观测到的开始时间(ms)")
    duration_ms: float = Field(default=0.0, ge=0, description="CPU任务耗时(ms)")
    transfer_size_bytes: int = Field(default=0, ge=0, description="传输大小(bytes)")
    render_blocking: bool = Field(default=False, description="是否阻塞渲染")
    child_events: List[str] = Field(default_factory=list, description="子事件名称")
    dependencies: List[str] = Field(default_factory=list, description="依赖的节点ID")


class Trace(PydanticModel):
    """trace包"""
    url: Optional[str] = Field(default=None, description="页面URL")
    first_contentful_paint_ms: Optional[float] = Field(default=None, ge=0, description="观测到的FCP(ms)")
    frames: List[VisualFrame] = Field(default_factory=list, description="可视化进度帧")
    nodes: List[TraceNode] = Field(default_factory=list, description="节点列表")
