"""
pytest配置文件

定义测试的全局配置和fixture。
"""

import copy
import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from lantern_estimate.computed.context import AnalysisContext
from lantern_estimate.simulation.profiles import create_profile
from lantern_estimate.trace.loader import parse_trace


SAMPLE_TRACE = {
    "url": "https://example.com/",
    "first_contentful_paint_ms": 900,
    "frames": [
        {"timestamp_ms": 900, "progress": 40},
        {"timestamp_ms": 1400, "progress": 85},
        {"timestamp_ms": 2100, "progress": 100},
    ],
    "nodes": [
        {"id": "document", "type": "network", "start_time_ms": 0,
         "transfer_size_bytes": 14000, "render_blocking": True},
        {"id": "parse-html", "type": "cpu", "start_time_ms": 300, "duration_ms": 20,
         "child_events": ["ParseHTML"], "dependencies": ["document"]},
        {"id": "style.css", "type": "network", "start_time_ms": 320, "transfer_size_bytes": 8000,
         "render_blocking": True, "dependencies": ["parse-html"]},
        {"id": "first-layout", "type": "cpu", "start_time_ms": 700, "duration_ms": 12,
         "child_events": ["RecalculateStyles", "Layout", "Paint"], "dependencies": ["style.css"]},
        {"id": "hero.jpg", "type": "network", "start_time_ms": 800, "transfer_size_bytes": 60000,
         "dependencies": ["parse-html"]},
        {"id": "app.js", "type": "network", "start_time_ms": 330, "transfer_size_bytes": 40000,
         "dependencies": ["parse-html"]},
        {"id": "evaluate-app", "type": "cpu", "start_time_ms": 1100, "duration_ms": 80,
         "child_events": ["EvaluateScript", "Layout"], "dependencies": ["app.js", "first-layout"]},
        {"id": "hero-layout", "type": "cpu", "start_time_ms": 1500, "duration_ms": 6,
         "child_events": ["Layout", "Paint"], "dependencies": ["hero.jpg", "evaluate-app"]},
    ],
}


@pytest.fixture
def sample_trace_data():
    """示例trace数据（每个测试一份独立副本）"""
    return copy.deepcopy(SAMPLE_TRACE)


@pytest.fixture
def sample_trace(sample_trace_data):
    """示例trace"""
    return parse_trace(sample_trace_data)


@pytest.fixture
def mobile_context():
    """慢速4G移动网络的分析上下文"""
    return AnalysisContext(profile=create_profile("mobile-slow-4g"))
