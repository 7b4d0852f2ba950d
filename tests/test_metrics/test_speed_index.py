"""
测试 Lantern Speed Index 估算

覆盖基于Layout的加权平均、线性模型合并以及与FCP的下限约束。
"""

import math

import pytest

from lantern_estimate.graph.base import ChildEvent, NodeType, WorkNode
from lantern_estimate.metrics.base import FinalMetricResult, MetricCoefficients, MetricEstimate, blend_estimates
from lantern_estimate.metrics.speed_index import (
    SPEED_INDEX,
    SPEED_INDEX_COEFFICIENTS,
    compute_layout_based_speed_index,
    compute_speed_index,
    derive_speed_index_estimate,
    layout_weight,
)
from lantern_estimate.metrics.speedline import SpeedlineResult, compute_speedline
from lantern_estimate.simulation.base import NodeTiming, SimulationResult
from lantern_estimate.trace.base import TraceError


def cpu_node(node_id, *event_names):
    return WorkNode(
        node_id=node_id,
        node_type=NodeType.CPU,
        child_events=tuple(ChildEvent(name) for name in event_names),
    )


def network_node(node_id, *event_names):
    return WorkNode(
        node_id=node_id,
        node_type=NodeType.NETWORK,
        child_events=tuple(ChildEvent(name) for name in event_names),
    )


def fcp_result(pessimistic_ms, optimistic_ms=None):
    optimistic_ms = pessimistic_ms if optimistic_ms is None else optimistic_ms
    return FinalMetricResult(
        timing=(optimistic_ms + pessimistic_ms) / 2,
        optimistic_estimate=MetricEstimate(time_in_ms=optimistic_ms, node_timings={}),
        pessimistic_estimate=MetricEstimate(time_in_ms=pessimistic_ms, node_timings={}),
    )


class TestLayoutBasedSpeedIndex:
    """测试基于Layout的加权平均"""

    def test_single_layout_node(self):
        node_timings = {cpu_node("layout", "Layout"): NodeTiming(start_time=1000, end_time=1008)}
        assert compute_layout_based_speed_index(node_timings, 900) == 1008

    def test_no_layout_falls_back_to_fcp(self):
        node_timings = {
            cpu_node("script", "EvaluateScript"): NodeTiming(start_time=0, end_time=500),
            network_node("image"): NodeTiming(start_time=0, end_time=2000),
        }
        assert compute_layout_based_speed_index(node_timings, 1200) == 1200

    def test_empty_timings_fall_back_to_fcp(self):
        assert compute_layout_based_speed_index({}, 1200) == 1200

    def test_network_nodes_with_layout_event_are_ignored(self):
        node_timings = {network_node("odd", "Layout"): NodeTiming(start_time=0, end_time=5000)}
        assert compute_layout_based_speed_index(node_timings, 700) == 700

    def test_zero_duration_falls_back_to_fcp(self):
        node_timings = {cpu_node("layout", "Layout"): NodeTiming(start_time=1500, end_time=1500)}
        result = compute_layout_based_speed_index(node_timings, 1100)
        assert result == 1100
        assert not math.isnan(result)

    def test_sub_millisecond_tasks_fall_back_to_fcp(self):
        node_timings = {
            cpu_node("a", "Layout"): NodeTiming(start_time=100, end_time=100.5),
            cpu_node("b", "Layout"): NodeTiming(start_time=200, end_time=201),
        }
        assert compute_layout_based_speed_index(node_timings, 50) == 50

    def test_weighted_average(self):
        node_timings = {
            cpu_node("a", "Layout"): NodeTiming(start_time=100, end_time=104),  # 权重 2
            cpu_node("b", "Paint", "Layout"): NodeTiming(start_time=200, end_time=216),  # 权重 4
        }
        expected = (2 * 104 + 4 * 216) / 6
        assert compute_layout_based_speed_index(node_timings, 0) == pytest.approx(expected)

    def test_end_times_are_clamped_to_fcp(self):
        node_timings = {
            cpu_node("a", "Layout"): NodeTiming(start_time=100, end_time=104),
            cpu_node("b", "Layout"): NodeTiming(start_time=200, end_time=216),
        }
        expected = (2 * 150 + 4 * 216) / 6
        assert compute_layout_based_speed_index(node_timings, 150) == pytest.approx(expected)

    def test_zero_weight_nodes_do_not_shift_average(self):
        node_timings = {
            cpu_node("a", "Layout"): NodeTiming(start_time=100, end_time=108),
            cpu_node("tiny", "Layout"): NodeTiming(start_time=5000, end_time=5001),
        }
        assert compute_layout_based_speed_index(node_timings, 0) == pytest.approx(108)

    @pytest.mark.parametrize("fcp", [0, 250, 900, 5000])
    def test_result_within_clamped_range(self, fcp):
        timings = [(0, 40), (120, 130), (300, 900), (1000, 1003), (1200, 1264)]
        node_timings = {
            cpu_node(f"n{i}", "Layout"): NodeTiming(start_time=s, end_time=e)
            for i, (s, e) in enumerate(timings)
        }
        result = compute_layout_based_speed_index(node_timings, fcp)
        upper = max(max(e for _, e in timings), fcp)
        assert fcp <= result <= upper

    def test_weight_is_monotonic_in_duration(self):
        durations = [1, 2, 3.5, 8, 50, 400, 10000]
        weights = [layout_weight(NodeTiming(start_time=0, end_time=d)) for d in durations]
        assert weights == sorted(weights)
        assert weights[0] == 0
        assert layout_weight(NodeTiming(start_time=1000, end_time=1008)) == pytest.approx(3)


class TestSpeedIndexModel:
    """测试线性模型与单侧估算"""

    def test_coefficients(self):
        assert SPEED_INDEX_COEFFICIENTS == MetricCoefficients(intercept=-250, optimistic=1.4, pessimistic=0.65)
        assert SPEED_INDEX.coefficients is SPEED_INDEX_COEFFICIENTS

    def test_blend(self):
        optimistic = MetricEstimate(time_in_ms=1500, node_timings={})
        pessimistic = MetricEstimate(time_in_ms=1800, node_timings={})
        assert blend_estimates(SPEED_INDEX_COEFFICIENTS, optimistic, pessimistic) == pytest.approx(3020)

    def test_blend_is_deterministic(self):
        optimistic = MetricEstimate(time_in_ms=1234.5, node_timings={})
        pessimistic = MetricEstimate(time_in_ms=2345.6, node_timings={})
        first = blend_estimates(SPEED_INDEX_COEFFICIENTS, optimistic, pessimistic)
        second = blend_estimates(SPEED_INDEX_COEFFICIENTS, optimistic, pessimistic)
        assert first == second

    def test_invalid_coefficients_rejected(self):
        with pytest.raises(ValueError):
            MetricCoefficients(intercept=float("nan"), optimistic=1, pessimistic=1)

    def test_graph_selection_is_identity(self, sample_trace):
        graph = object()
        assert SPEED_INDEX.select_optimistic_graph(graph, sample_trace) is graph
        assert SPEED_INDEX.select_pessimistic_graph(graph, sample_trace) is graph

    def test_optimistic_estimate_uses_observed_speed_index(self):
        node_timings = {cpu_node("layout", "Layout"): NodeTiming(start_time=0, end_time=64)}
        simulation = SimulationResult(node_timings=node_timings, timing=64)
        extras = {
            "speedline": SpeedlineResult(speed_index=1500, first_visual_change_ms=800, visually_complete_ms=2000),
            "fcp_result": fcp_result(900),
        }

        estimate = derive_speed_index_estimate(simulation, True, extras)
        assert estimate.time_in_ms == 1500
        assert estimate.node_timings is node_timings

    def test_pessimistic_estimate_uses_layout_average(self):
        node_timings = {cpu_node("layout", "Layout"): NodeTiming(start_time=1000, end_time=1008)}
        simulation = SimulationResult(node_timings=node_timings, timing=1008)
        extras = {
            "speedline": SpeedlineResult(speed_index=1500, first_visual_change_ms=800, visually_complete_ms=2000),
            "fcp_result": fcp_result(900, optimistic_ms=400),
        }

        estimate = derive_speed_index_estimate(simulation, False, extras)
        assert estimate.time_in_ms == 1008
        assert estimate.node_timings is node_timings


class TestComputeSpeedIndex:
    """测试完整的 Speed Index 计算流程"""

    @pytest.fixture
    def fake_providers(self, monkeypatch):
        """用固定值替换观测 Speed Index 与 FCP 估算"""
        values = {}

        async def fake_speedline(trace, context):
            return SpeedlineResult(
                speed_index=values["speed_index"], first_visual_change_ms=0, visually_complete_ms=0,
            )

        async def fake_fcp(trace, context):
            return fcp_result(values["fcp_pessimistic"], optimistic_ms=values["fcp_pessimistic"] / 2)

        monkeypatch.setattr("lantern_estimate.metrics.speed_index.request_speedline", fake_speedline)
        monkeypatch.setattr("lantern_estimate.metrics.speed_index.request_first_contentful_paint", fake_fcp)
        return values

    @pytest.fixture
    def single_layout_trace(self, sample_trace_data):
        from lantern_estimate.trace.loader import parse_trace

        sample_trace_data["nodes"] = [
            {"id": "layout", "type": "cpu", "duration_ms": 2, "child_events": ["Layout"]},
        ]
        return parse_trace(sample_trace_data)

    @pytest.mark.asyncio
    async def test_blended_timing(self, fake_providers, single_layout_trace, mobile_context):
        # 模拟结束于 8ms，早于FCP，悲观估算被抬升到 1800
        fake_providers.update(speed_index=1500, fcp_pessimistic=1800)

        result = await compute_speed_index(single_layout_trace, mobile_context)

        assert result.optimistic_estimate.time_in_ms == 1500
        assert result.pessimistic_estimate.time_in_ms == 1800
        assert result.timing == pytest.approx(3020)

    @pytest.mark.asyncio
    async def test_timing_never_below_pessimistic_fcp(self, fake_providers, single_layout_trace, mobile_context):
        fake_providers.update(speed_index=100, fcp_pessimistic=5000)

        result = await compute_speed_index(single_layout_trace, mobile_context)

        # -250 + 1.4 * 100 + 0.65 * 5000 = 3140 < 5000
        assert result.timing == 5000

    @pytest.mark.asyncio
    async def test_sample_trace(self, sample_trace, mobile_context):
        result = await compute_speed_index(sample_trace, mobile_context)

        speedline = compute_speedline(sample_trace)
        assert result.optimistic_estimate.time_in_ms == pytest.approx(speedline.speed_index)

        # 悲观模拟: FCP下限 1341.33ms，三个Layout任务
        fcp_floor = 450 + 60000 * 8 / 1638.4 + 598.359375
        layouts = [
            (math.log2(48), max(1135.421875, fcp_floor)),
            (math.log2(320), 1563.671875),
            (math.log2(24), 1587.671875),
        ]
        expected_pessimistic = sum(w * t for w, t in layouts) / sum(w for w, _ in layouts)
        assert result.pessimistic_estimate.time_in_ms == pytest.approx(expected_pessimistic)

        expected = -250 + 1.4 * speedline.speed_index + 0.65 * expected_pessimistic
        assert result.timing == pytest.approx(max(expected, fcp_floor))
        assert result.timing >= fcp_floor

    @pytest.mark.asyncio
    async def test_missing_frames_propagate(self, sample_trace_data, mobile_context):
        from lantern_estimate.trace.loader import parse_trace

        sample_trace_data["frames"] = []
        with pytest.raises(TraceError):
            await compute_speed_index(parse_trace(sample_trace_data), mobile_context)

    @pytest.mark.asyncio
    async def test_missing_fcp_propagates(self, sample_trace_data, mobile_context):
        from lantern_estimate.trace.loader import parse_trace

        sample_trace_data["first_contentful_paint_ms"] = None
        with pytest.raises(TraceError):
            await compute_speed_index(parse_trace(sample_trace_data), mobile_context)
