"""按包类型安装并生成构建片段

三种策略:
- LibraryEmitter:   Lib / Exec，安装到 Packages/[Platform/Linux/]<name>，生成完整 make 规则
- InterfaceEmitter: 安装到 Packages/Interface/<name>，只导出头文件路径和依赖顺序
- FrameworkEmitter: 基础运行时，直接安装到根目录下固定目录，不生成片段

共同的幂等逻辑（清单比对 → 删除旧目录 → 拉取 → 写清单）在 Emitter 基类。
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from easypm.core.pkg.fetcher import GitFetcher
from easypm.core.pkg.manifest import ManifestStore
from easypm.core.pkg.models import (
    PLATFORM_LINUX,
    DependencySet,
    InstallContext,
    RegistryEntry,
    VersionRecord,
)
from easypm.utils.file_io import atomic_write

logger = logging.getLogger(__name__)


# =========================================================================
# 片段渲染
# =========================================================================

def render_library_fragment(
    name: str,
    sub_path: str,
    deps: DependencySet,
    *,
    packages_dir: str = "Packages",
    base_runtime: str = "EasyCpp",
    is_app: bool = False,
) -> str:
    """生成库/可执行包的 make 片段

    sub_path 是包相对 Packages 目录的路径，如 "Foo" 或 "Platform/Linux/Foo"。
    """
    dlibs = [base_runtime] + [d for d in deps.dynamic if d != base_runtime]
    lines = [
        "export FLAGS += \\",
        f"  -I $(PACKAGES)/{sub_path}/Inc",
        "",
        f".PHONY: {name}",
        _phony_rule(name, deps),
        f"\t@$(MAKE) -f $(PACKAGES)/{sub_path}/Makefile \\",
        f"\t\tPKG_PATH={packages_dir}/{sub_path} \\",
        f"\t\tPKG_NAME={name} \\",
        f"\t\tSLIBS=\"{' '.join(deps.static)}\" \\",
        f"\t\tDLIBS=\"{' '.join(dlibs)}\" \\",
    ]
    if is_app:
        lines.append("\t\tI_AM_APP=y \\")
    lines.append("\t\tall")
    return "\n".join(lines) + "\n"


def render_interface_fragment(
    name: str,
    deps: DependencySet,
    *,
    interface_dir: str = "Interface",
) -> str:
    """生成接口包的 make 片段（无链接信息）"""
    lines = [
        "export FLAGS += \\",
        f"  -I $(PACKAGES)/{interface_dir}/{name}",
        "",
        f".PHONY: {name}",
        _phony_rule(name, deps),
    ]
    return "\n".join(lines) + "\n"


def _phony_rule(name: str, deps: DependencySet) -> str:
    return f"{name}:" + "".join(f" {d}" for d in deps.deps)


class FragmentWriter:
    """把生成的片段写入 <folder>/<name>.mk"""

    @staticmethod
    def path_for(folder: Path, name: str) -> Path:
        return folder / f"{name}.mk"

    def write(self, folder: Path, name: str, text: str) -> Path:
        path = self.path_for(folder, name)
        atomic_write(path, text)
        logger.debug("已生成构建片段: %s", path)
        return path


# =========================================================================
# 安装策略
# =========================================================================

class Emitter(ABC):
    """安装策略基类"""

    # 是否需要先解析声明的依赖
    recurses: bool = True

    def __init__(
        self,
        fetcher: GitFetcher,
        manifests: ManifestStore | None = None,
        writer: FragmentWriter | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.manifests = manifests or ManifestStore()
        self.writer = writer or FragmentWriter()

    @abstractmethod
    def install(
        self,
        ctx: InstallContext,
        entry: RegistryEntry,
        record: VersionRecord,
        deps: DependencySet,
    ) -> DependencySet:
        """安装包并返回需要并入调用方的依赖集合"""

    def update_package(
        self,
        ctx: InstallContext,
        folder: Path,
        name: str,
        record: VersionRecord,
        payload: str | None = None,
    ) -> bool:
        """幂等更新: 已是目标版本时跳过并返回 False，否则重新拉取并返回 True

        payload 是源码目录名，默认与包名相同。
        """
        if not ctx.force and self.manifests.is_installed(folder, name, record.version):
            logger.info(
                "%s 已是版本: %s", name, record.version,
                extra={"package": f"{name}({record.version})"},
            )
            return False

        target = folder / (payload or name)
        if target.exists():
            logger.info("  删除旧版本: %s", target)
            shutil.rmtree(target)

        self.fetcher.fetch(record.url, record.revision, target)
        self.manifests.write(folder, name, record.version)
        return True


class LibraryEmitter(Emitter):
    """库 / 可执行包"""

    def __init__(
        self,
        fetcher: GitFetcher,
        manifests: ManifestStore | None = None,
        writer: FragmentWriter | None = None,
        *,
        is_app: bool = False,
    ) -> None:
        super().__init__(fetcher, manifests, writer)
        self.is_app = is_app

    @staticmethod
    def sub_folder(record: VersionRecord) -> str:
        """平台子目录: 只区分 Linux 与其他"""
        if record.platform == PLATFORM_LINUX:
            return f"Platform/{PLATFORM_LINUX}"
        return ""

    def install(
        self,
        ctx: InstallContext,
        entry: RegistryEntry,
        record: VersionRecord,
        deps: DependencySet,
    ) -> DependencySet:
        sub = self.sub_folder(record)
        folder = ctx.packages / sub if sub else ctx.packages
        sub_path = f"{sub}/{entry.name}" if sub else entry.name

        if self.update_package(ctx, folder, entry.name, record):
            text = render_library_fragment(
                entry.name, sub_path, deps,
                packages_dir=ctx.packages_dir,
                base_runtime=ctx.base_runtime,
                is_app=self.is_app,
            )
            self.writer.write(folder, entry.name, text)

        # 库的依赖向上传递，应用最终链接全部传递依赖
        return deps


class InterfaceEmitter(Emitter):
    """接口（纯头文件）包，与平台无关"""

    def install(
        self,
        ctx: InstallContext,
        entry: RegistryEntry,
        record: VersionRecord,
        deps: DependencySet,
    ) -> DependencySet:
        folder = ctx.packages / ctx.interface_dir
        if self.update_package(ctx, folder, entry.name, record):
            text = render_interface_fragment(
                entry.name, deps, interface_dir=ctx.interface_dir,
            )
            self.writer.write(folder, entry.name, text)
        return DependencySet()


class FrameworkEmitter(Emitter):
    """基础运行时框架: 装在根目录的固定目录下，无依赖、无片段"""

    recurses = False

    def install(
        self,
        ctx: InstallContext,
        entry: RegistryEntry,
        record: VersionRecord,
        deps: DependencySet,
    ) -> DependencySet:
        self.update_package(ctx, ctx.root, entry.name, record, payload=ctx.framework_dir)
        return DependencySet()
