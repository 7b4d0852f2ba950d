"""
CLI命令实现

提供命令行界面的具体命令实现。
"""

import click
from typing import Optional
from tabulate import tabulate

from ..config.settings import get_settings, setup_logging
from ..estimator.base import MetricEstimator
from ..metrics.registry import metric_registry
from ..simulation.profiles import list_supported_profiles
from ..trace.loader import load_trace
from ..utils.formatters import format_results


@click.group()
@click.version_option(version="0.1.0", prog_name="lantern-estimate")
def cli():
    """Lantern 页面指标估算工具

    基于依赖图模拟，在不运行真实浏览器的情况下估算页面加载指标。
    """
    pass


@cli.command()
@click.option("--trace", "-t", "trace_path", required=True, type=click.Path(exists=True, dir_okay=False),
              help="trace包文件路径 (JSON)")
@click.option("--metric", "-m", default="speed-index", help="指标名称 (speed-index/first-contentful-paint)")
@click.option("--profile", "-p", help="节流配置 (如: mobile-slow-4g, desktop-dense-4g)")
@click.option("--output-file", type=click.Path(), help="输出文件路径")
@click.option("--format", "-f", type=click.Choice(["table", "json", "csv"]), help="输出格式")
@click.option("--verbose", "-v", is_flag=True, help="详细输出（包含节流参数、Layout诊断和调试日志）")
def estimate(trace_path: str, metric: str, profile: Optional[str], output_file: Optional[str],
             format: Optional[str], verbose: bool):
    """估算单个trace的指标"""
    settings = get_settings()
    if verbose:
        setup_logging(settings.model_copy(update={"log_level": "DEBUG"}))
    else:
        setup_logging(settings)

    try:
        estimator = MetricEstimator(settings)
        trace = load_trace(trace_path)
        result = estimator.estimate(metric, trace, profile)

        formatted_result = format_results(result, format or settings.default_output_format, verbose)

        if output_file:
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(formatted_result)
            click.echo(f"结果已保存到: {output_file}")
        else:
            click.echo(formatted_result)

    except Exception as e:
        click.echo(f"错误: {e}", err=True)
        raise click.Abort()


@cli.command()
def list_metrics():
    """列出支持的指标"""
    data = [[name] for name in metric_registry.list_metrics()]
    click.echo(tabulate(data, headers=["指标名称"], tablefmt="grid"))


@cli.command()
def list_profiles():
    """列出支持的节流配置"""
    data = []
    for name, info in list_supported_profiles().items():
        data.append([
            name,
            f"{info['rtt_ms']:.0f} ms",
            f"{info['throughput_kbps']:.1f} Kbps",
            f"{info['cpu_slowdown_multiplier']:.1f}x",
        ])

    headers = ["配置", "RTT", "吞吐量", "CPU降速"]
    click.echo(tabulate(data, headers=headers, tablefmt="grid"))


def main():
    """主程序入口"""
    cli()


if __name__ == "__main__":
    main()
