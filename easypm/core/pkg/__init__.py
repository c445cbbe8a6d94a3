"""依赖包解析与安装

- models.py: 数据模型
- registry.py: 注册表加载与查找
- manifest.py: 安装清单
- fetcher.py: git 拉取
- emitters.py: 按类型安装并生成 make 片段
- resolver.py: 递归解析
- lister.py: 注册表展示
"""

from easypm.core.pkg.emitters import FragmentWriter
from easypm.core.pkg.fetcher import GitFetcher
from easypm.core.pkg.lister import format_catalog
from easypm.core.pkg.manifest import ManifestStore
from easypm.core.pkg.models import (
    DependencySet,
    InstallContext,
    LinkType,
    PackageType,
    ResolveOutcome,
)
from easypm.core.pkg.registry import PackageRegistry
from easypm.core.pkg.resolver import PackageResolver, default_emitters

__all__ = [
    "DependencySet",
    "FragmentWriter",
    "GitFetcher",
    "InstallContext",
    "LinkType",
    "ManifestStore",
    "PackageRegistry",
    "PackageResolver",
    "PackageType",
    "ResolveOutcome",
    "default_emitters",
    "format_catalog",
]
