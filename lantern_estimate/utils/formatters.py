"""
数据格式化工具

提供各种数据格式化功能。
"""

import json
from typing import Dict, Any, List
from tabulate import tabulate


def format_results(result: Dict[str, Any], format_type: str = "table",
                   verbose: bool = False) -> str:
    """
    格式化估算结果

    Args:
        result: 估算结果字典
        format_type: 输出格式 ("table", "json", "csv")
        verbose: 是否显示详细信息

    Returns:
        格式化后的字符串
    """
    if format_type == "json":
        return json.dumps(result, indent=2, ensure_ascii=False)

    elif format_type == "csv":
        return format_results_csv(result)

    else:  # table format
        return format_results_table(result, verbose)


def format_results_table(result: Dict[str, Any], verbose: bool = False) -> str:
    """格式化为表格形式"""
    lines = []
    lines.append("=" * 60)
    lines.append("Lantern 指标估算结果")
    lines.append("=" * 60)

    lines.append(f"\n指标: {result['metric_name']}")
    if result.get("url"):
        lines.append(f"页面: {result['url']}")

    profile = result.get("profile", {})
    if profile:
        lines.append(f"\n节流配置: {profile.get('name', 'N/A')}")
        if verbose:
            lines.append(f"  RTT: {profile.get('rtt_ms', 0):.0f} ms")
            lines.append(f"  吞吐量: {profile.get('throughput_kbps', 0):.1f} Kbps")
            lines.append(f"  CPU降速: {profile.get('cpu_slowdown_multiplier', 1):.1f}x")

    metrics_data = [
        ["估算值", format_ms(result.get("timing_ms", 0))],
        ["乐观估算", format_ms(result.get("optimistic_ms", 0))],
        ["悲观估算", format_ms(result.get("pessimistic_ms", 0))],
        ["模拟节点数", result.get("node_count", 0)],
    ]
    lines.append("")
    lines.append(tabulate(metrics_data, headers=["指标", "值"], tablefmt="grid"))

    if verbose and result.get("layout_nodes"):
        lines.append("\n主要Layout任务:")
        lines.append(format_layout_nodes(result["layout_nodes"]))

    return "\n".join(lines)


def format_layout_nodes(layout_nodes: List[Dict[str, Any]]) -> str:
    """格式化Layout节点诊断信息"""
    data = []
    for i, node in enumerate(layout_nodes, 1):
        data.append([
            i,
            node["node_id"],
            f"{node['end_time_ms']:.1f}",
            f"{node['weight']:.2f}",
            f"{node['percentage']:.1f}%",
        ])

    headers = ["#", "节点", "结束时间(ms)", "权重", "权重占比"]
    return tabulate(data, headers=headers, tablefmt="grid")


def format_results_csv(result: Dict[str, Any]) -> str:
    """格式化为CSV形式"""
    headers = ["metric_name", "profile", "timing_ms", "optimistic_ms", "pessimistic_ms", "node_count"]
    values = [
        result.get("metric_name", ""),
        result.get("profile", {}).get("name", ""),
        str(result.get("timing_ms", 0)),
        str(result.get("optimistic_ms", 0)),
        str(result.get("pessimistic_ms", 0)),
        str(result.get("node_count", 0)),
    ]
    return "\n".join([",".join(headers), ",".join(values)])


def format_ms(value: float) -> str:
    """
    格式化毫秒数

    不足1秒显示为ms，否则显示为s
    """
    if abs(value) >= 1000:
        return f"{value / 1000:.2f} s"
    return f"{value:.0f} ms"
