"""
观测 Speed Index（Speedline）

根据截图帧的可视化完成度积分得到 Speed Index：
导航开始（0ms）时完成度为0，每段区间贡献 (1 - 上一帧完成度) * 区间长度。
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..trace.base import Trace, TraceError

if TYPE_CHECKING:
    from ..computed.context import AnalysisContext


@dataclass(frozen=True)
class SpeedlineResult:
    """观测到的可视化进度指标"""
    speed_index: float
    first_visual_change_ms: float
    visually_complete_ms: float


def compute_speedline(trace: Trace) -> SpeedlineResult:
    """
    计算观测到的 Speed Index

    Raises:
        TraceError: 没有截图帧，或最后一帧未达到100%
    """
    if not trace.frames:
        raise TraceError("No screenshot frames found in trace")

    frames = sorted(trace.frames, key=lambda f: f.timestamp_ms)
    if frames[-1].progress < 100:
        raise TraceError("Trace ended before the page was visually complete")

    speed_index = 0.0
    last_time = 0.0
    last_progress = 0.0
    first_visual_change = None
    visually_complete = None

    for frame in frames:
        speed_index += (1 - last_progress / 100) * (frame.timestamp_ms - last_time)
        last_time = frame.timestamp_ms
        last_progress = frame.progress

        if first_visual_change is None and frame.progress > 0:
            first_visual_change = frame.timestamp_ms
        if visually_complete is None and frame.progress >= 100:
            visually_complete = frame.timestamp_ms

    return SpeedlineResult(
        speed_index=speed_index,
        first_visual_change_ms=first_visual_change,
        visually_complete_ms=visually_complete,
    )


async def request_speedline(trace: Trace, context: "AnalysisContext") -> SpeedlineResult:
    """获取观测 Speed Index（同一次分析内只计算一次）"""

    async def compute() -> SpeedlineResult:
        return compute_speedline(trace)

    return await context.cache.request("Speedline", trace, compute)
