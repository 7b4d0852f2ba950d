#!/usr/bin/env python3
"""
Lantern-Estimate 基本使用示例

演示如何使用Lantern-Estimate估算 Speed Index。
"""

from pathlib import Path

from lantern_estimate import MetricEstimator, MetricRegistry, TraceError, load_trace, list_supported_profiles


def main():
    """主函数"""
    print("=== Lantern-Estimate 基本使用示例 ===\n")

    # 1. 查看支持的指标和节流配置
    print("支持的指标:")
    for metric in MetricRegistry().list_metrics():
        print(f"  - {metric}")
    print("支持的节流配置:")
    for profile in list_supported_profiles():
        print(f"  - {profile}")
    print()

    # 2. 加载trace并估算
    trace_path = Path(__file__).parent / "sample_trace.json"
    estimator = MetricEstimator()

    try:
        trace = load_trace(trace_path)
        for profile in ("mobile-slow-4g", "desktop-dense-4g"):
            result = estimator.estimate("speed-index", trace, profile)
            print(f"[{profile}] Speed Index: {result['timing_ms']:.0f} ms "
                  f"(乐观 {result['optimistic_ms']:.0f} ms, 悲观 {result['pessimistic_ms']:.0f} ms)")
            for node in result["layout_nodes"]:
                print(f"    {node['node_id']}: 结束于 {node['end_time_ms']:.0f} ms, 权重 {node['weight']:.2f}")
    except TraceError as e:
        print(f"估算失败: {e}")

    print("\n=== 示例完成 ===")


if __name__ == "__main__":
    main()
