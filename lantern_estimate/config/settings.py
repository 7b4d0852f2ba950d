"""
全局系统设置

定义系统级配置参数和默认值。
"""

import logging
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """系统设置类"""

    model_config = ConfigDict(validate_assignment=True)

    # 日志配置
    log_level: str = Field(default="INFO", description="日志级别")
    log_file: Optional[str] = Field(default=None, description="日志文件路径")

    # 输出配置
    default_output_format: str = Field(default="table", description="默认输出格式")

    # 估算配置
    default_profile: str = Field(default="mobile-slow-4g", description="默认节流配置")
    top_layout_nodes: int = Field(default=5, ge=0, description="诊断输出中显示的Layout节点数")


class ConfigManager:
    """配置管理器"""

    def __init__(self):
        self._settings: Optional[Settings] = None

    def get_settings(self) -> Settings:
        """获取设置实例（单例模式）"""
        if self._settings is None:
            self._settings = Settings()
        return self._settings

    def update_settings(self, **kwargs) -> None:
        """更新设置"""
        settings = self.get_settings()

        for key, value in kwargs.items():
            if hasattr(settings, key):
                setattr(settings, key, value)
            else:
                raise ValueError(f"Unknown setting: {key}")


# 全局配置管理器实例
config_manager = ConfigManager()


def get_settings() -> Settings:
    """获取全局设置"""
    return config_manager.get_settings()


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    根据设置配置 lantern_estimate 的日志

    Args:
        settings: 系统设置，默认使用全局设置

    Returns:
        包的根logger
    """
    settings = settings or get_settings()
    logger = logging.getLogger("lantern_estimate")
    logger.setLevel(settings.log_level.upper())

    if settings.log_file:
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    return logger
