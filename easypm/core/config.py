"""集中配置管理

替代各模块散落的目录名/默认地址常量，提供统一的配置入口。
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any

import yaml

from easypm.core.exceptions import ConfigError
from easypm.utils.file_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/easypm.yml"


@dataclass
class Config:
    """包管理器全局配置"""

    # 注册表
    default_registry_url: str = "https://github.com/jackygx/PackageManager.git"
    registry_checkout_dir: str = "Configuration"
    registry_file: str = "Packages.json"

    # 安装目录布局
    packages_dir: str = "Packages"
    interface_dir: str = "Interface"
    framework_dir: str = "EasyCpp"

    # 所有库/可执行包隐式动态链接的基础运行时
    base_runtime: str = "EasyCpp"

    # 查找不到 (包名, 版本) 时报错而不是静默跳过
    strict_lookup: bool = False

    # 单条 git 命令超时（秒），不设置则不限时
    fetch_timeout: int | None = None

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_PATH) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"配置文件无效: {path}: {e}") from e
        if not data:
            return cls()
        known = {f.name for f in fields(cls)} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        if "strict_lookup" in matched and not isinstance(matched["strict_lookup"], bool):
            raise ConfigError(f"strict_lookup 必须是布尔值: {path}")
        timeout = matched.get("fetch_timeout")
        if timeout is not None and (
            isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0
        ):
            raise ConfigError(f"fetch_timeout 必须是正整数: {path}")
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = DEFAULT_CONFIG_PATH) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.debug("配置已加载: %s", path)
    return _current


def reset_config() -> None:
    """丢弃全局配置，下次 get_config() 回到默认值"""
    global _current  # noqa: PLW0603
    _current = None
