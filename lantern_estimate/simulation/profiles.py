"""
预定义节流配置

取值与 Lighthouse 公开的 Lantern 节流常量一致。
"""

from typing import Dict, Any
from .base import ThrottlingProfile


THROTTLING_PROFILES = {
    # 慢速4G移动网络，CPU降速4倍
    "mobile-slow-4g": ThrottlingProfile(
        name="mobile-slow-4g",
        rtt_ms=150.0,
        throughput_kbps=1.6 * 1024,
        cpu_slowdown_multiplier=4.0,
    ),

    # 桌面端，稠密4G网络
    "desktop-dense-4g": ThrottlingProfile(
        name="desktop-dense-4g",
        rtt_ms=40.0,
        throughput_kbps=10.0 * 1024,
        cpu_slowdown_multiplier=1.0,
    ),
}


def create_profile(profile_name: str) -> ThrottlingProfile:
    """
    获取节流配置

    Args:
        profile_name: 配置名称

    Returns:
        节流配置实例（副本）

    Raises:
        ValueError: 不支持的节流配置
    """
    profile_name_lower = profile_name.lower()
    if profile_name_lower not in THROTTLING_PROFILES:
        raise ValueError(f"不支持的节流配置: {profile_name}")
    return THROTTLING_PROFILES[profile_name_lower].model_copy()


def list_supported_profiles() -> Dict[str, Dict[str, Any]]:
    """列出所有支持的节流配置"""
    return {
        name: profile.get_profile_info()
        for name, profile in THROTTLING_PROFILES.items()
    }
