"""依赖包管理器

把注册表、拉取器、安装清单和递归解析器组装在一起，供 CLI 调用。

注册表来源:
  1. 显式指定的 JSON 文件
  2. 未指定时，克隆默认注册表仓库到 <root>/Configuration 并读取 Packages.json

用法:
    from easypm.core.pkg_manager import PackageManager

    pm = PackageManager(registry_path="Packages.json", root="./build")
    pm.add("Foo", "1.0")

    # 只查看注册表
    for line in pm.list_catalog():
        print(line)
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from easypm.core.config import Config, get_config
from easypm.core.exceptions import ValidationError
from easypm.core.pkg.fetcher import GitFetcher
from easypm.core.pkg.lister import format_catalog
from easypm.core.pkg.manifest import ManifestStore
from easypm.core.pkg.models import InstallContext, ResolveOutcome
from easypm.core.pkg.registry import PackageRegistry
from easypm.core.pkg.resolver import PackageResolver, default_emitters
from easypm.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


def parse_request(text: str) -> tuple[str, str]:
    """解析 name/version 形式的安装请求（按第一个 / 切分）"""
    name, sep, version = text.partition("/")
    name, version = name.strip(), version.strip()
    if not sep or not name or not version:
        raise ValidationError(f"安装请求格式应为 name/version: {text!r}")
    return name, version


class PackageManager:
    """依赖包统一管理器"""

    def __init__(
        self,
        registry_path: str | None = None,
        root: str = ".",
        *,
        force: bool = False,
        strict: bool | None = None,
        config: Config | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        self.config = config or get_config()
        self.registry_path = registry_path
        self.root = Path(root)
        self.force = force
        self.strict = self.config.strict_lookup if strict is None else strict
        self.fetcher = GitFetcher(executor, timeout=self.config.fetch_timeout)
        self._registry: PackageRegistry | None = None

    @property
    def registry(self) -> PackageRegistry:
        if self._registry is None:
            self._registry = self._load_registry()
        return self._registry

    def _load_registry(self) -> PackageRegistry:
        if self.registry_path:
            return PackageRegistry.from_file(self.registry_path)

        checkout = self.root / self.config.registry_checkout_dir
        logger.info("未指定注册表，使用默认注册表: %s", self.config.default_registry_url)
        if checkout.exists():
            shutil.rmtree(checkout)
        self.fetcher.fetch(self.config.default_registry_url, "", checkout)
        return PackageRegistry.from_file(checkout / self.config.registry_file)

    def context(self) -> InstallContext:
        return InstallContext(
            root=self.root,
            packages_dir=self.config.packages_dir,
            interface_dir=self.config.interface_dir,
            framework_dir=self.config.framework_dir,
            base_runtime=self.config.base_runtime,
            force=self.force,
            strict=self.strict,
        )

    def list_catalog(self) -> list[str]:
        """列出注册表中所有包（不安装）"""
        return format_catalog(self.registry)

    def install(self, requests: list[tuple[str, str]]) -> list[ResolveOutcome]:
        """依次安装顶层请求，任一失败即中止"""
        ctx = self.context()
        ctx.packages.mkdir(parents=True, exist_ok=True)
        resolver = PackageResolver(
            self.registry, ctx, default_emitters(self.fetcher, ManifestStore()),
        )
        outcomes = []
        for name, version in requests:
            outcome = resolver.resolve(name, version)
            if not outcome.found:
                logger.info("未找到包: %s(%s)", name, version)
            outcomes.append(outcome)
        return outcomes

    def add(self, name: str, version: str) -> ResolveOutcome:
        """安装单个包"""
        return self.install([(name, version)])[0]
