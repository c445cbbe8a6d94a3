"""依赖包递归解析器

职责:
- 按 (包名, 版本) 查找注册表
- 深度优先解析声明的依赖，按链接方式归类
- 按包类型分派到对应的安装策略
- 检测循环依赖

查找不到的 (包名, 版本) 默认静默跳过（视为可选依赖），
严格模式下抛 PackageNotFoundError。
"""

from __future__ import annotations

import logging

from easypm.core.exceptions import CycleDetectedError, PackageNotFoundError
from easypm.core.pkg.emitters import (
    Emitter,
    FrameworkEmitter,
    InterfaceEmitter,
    LibraryEmitter,
)
from easypm.core.pkg.fetcher import GitFetcher
from easypm.core.pkg.manifest import ManifestStore
from easypm.core.pkg.models import (
    DependencySet,
    InstallContext,
    PackageType,
    ResolveOutcome,
    VersionRecord,
)
from easypm.core.pkg.registry import PackageRegistry

logger = logging.getLogger(__name__)


def default_emitters(
    fetcher: GitFetcher,
    manifests: ManifestStore | None = None,
) -> dict[PackageType, Emitter]:
    """每种包类型对应的安装策略"""
    manifests = manifests or ManifestStore()
    return {
        PackageType.LIB: LibraryEmitter(fetcher, manifests, is_app=False),
        PackageType.EXEC: LibraryEmitter(fetcher, manifests, is_app=True),
        PackageType.INTERFACE: InterfaceEmitter(fetcher, manifests),
        PackageType.FRAMEWORK: FrameworkEmitter(fetcher, manifests),
    }


class PackageResolver:
    """依赖包递归解析器"""

    def __init__(
        self,
        registry: PackageRegistry,
        ctx: InstallContext,
        emitters: dict[PackageType, Emitter],
    ) -> None:
        self.registry = registry
        self.ctx = ctx
        self.emitters = emitters

    def resolve(
        self,
        name: str,
        version: str,
        _chain: tuple[tuple[str, str], ...] = (),
    ) -> ResolveOutcome:
        """解析并安装一个包

        返回的 ResolveOutcome.deps 由调用方并入自己的依赖集合。
        """
        logger.info("查找包: %s(%s)", name, version)

        key = (name, version)
        if key in _chain:
            raise CycleDetectedError([*_chain, key])

        found = self.registry.find(name, version)
        if found is None:
            if self.ctx.strict:
                raise PackageNotFoundError(name, version)
            logger.debug("注册表中无此包，跳过: %s(%s)", name, version)
            return ResolveOutcome(found=False)

        entry, record = found
        emitter = self.emitters[entry.type]
        logger.info(
            "安装包(%s): %s(%s)", entry.type.label, name, version,
            extra={"package": f"{name}({version})"},
        )

        deps = DependencySet()
        if emitter.recurses:
            deps = self.collect_dependencies(record, (*_chain, key))

        return ResolveOutcome(
            found=True,
            deps=emitter.install(self.ctx, entry, record, deps),
        )

    def collect_dependencies(
        self,
        record: VersionRecord,
        chain: tuple[tuple[str, str], ...] = (),
    ) -> DependencySet:
        """按声明顺序深度优先解析依赖，返回本帧独有的依赖集合"""
        deps = DependencySet()
        for dep in record.dependencies:
            child = self.resolve(dep.name, dep.version, chain)
            deps.merge(child.deps)
            logger.debug("依赖: %s(%s) [%s]", dep.name, dep.version, dep.link_type.value)
            deps.add(dep.name, dep.link_type)
        return deps
