"""依赖包数据模型

枚举:
- PackageType: 包类型（库 / 可执行 / 接口 / 框架）
- LinkType: 依赖边的链接方式

数据类:
- DependencyDecl / VersionRecord / RegistryEntry: 注册表只读视图
- DependencySet: 单次解析调用收集到的依赖集合
- InstallContext: 整棵解析树共享的不可变安装上下文
- ResolveOutcome: 解析结果
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# 目前唯一识别的平台约束；其他取值一律按通用包处理
PLATFORM_LINUX = "Linux"


class PackageType(str, Enum):
    """包类型（取值与注册表 JSON 中的 Type 字段一致）"""
    LIB = "Lib"
    EXEC = "Exec"
    INTERFACE = "Interface"
    FRAMEWORK = "Framework"

    @property
    def label(self) -> str:
        """日志中展示的类型名"""
        return _TYPE_LABELS[self]


_TYPE_LABELS = {
    PackageType.LIB: "Library",
    PackageType.EXEC: "Executable",
    PackageType.INTERFACE: "Interface",
    PackageType.FRAMEWORK: "Framework",
}


class LinkType(str, Enum):
    """依赖边的链接方式，NONE 表示仅头文件依赖"""
    STATIC = "Static"
    DYNAMIC = "Dynamic"
    NONE = "None"

    @classmethod
    def parse(cls, value: object) -> LinkType:
        """缺省或无法识别的取值一律视为 NONE"""
        for member in (cls.STATIC, cls.DYNAMIC):
            if value == member.value:
                return member
        return cls.NONE


@dataclass(frozen=True)
class DependencyDecl:
    """某版本声明的一条依赖"""

    name: str
    version: str
    link_type: LinkType = LinkType.NONE


@dataclass(frozen=True)
class VersionRecord:
    """包的一个可构建版本"""

    version: str
    url: str = ""
    revision: str = ""
    platform: str | None = None
    dependencies: tuple[DependencyDecl, ...] = ()


@dataclass(frozen=True)
class RegistryEntry:
    """注册表中的一个包"""

    name: str
    type: PackageType
    versions: tuple[VersionRecord, ...] = ()

    def find_version(self, version: str) -> VersionRecord | None:
        """按字符串精确匹配查找版本，重复版本取第一条"""
        for record in self.versions:
            if record.version == version:
                return record
        return None


@dataclass
class DependencySet:
    """单次解析调用收集的依赖集合

    三个列表均保持插入顺序且不含重复。只属于构建它的调用帧，
    通过 merge() 按值并入调用方的集合。
    """

    deps: list[str] = field(default_factory=list)
    static: list[str] = field(default_factory=list)
    dynamic: list[str] = field(default_factory=list)

    def add(self, name: str, link_type: LinkType) -> None:
        _append_unique(self.deps, name)
        if link_type is LinkType.STATIC:
            _append_unique(self.static, name)
        elif link_type is LinkType.DYNAMIC:
            _append_unique(self.dynamic, name)

    def merge(self, other: DependencySet) -> None:
        for name in other.deps:
            _append_unique(self.deps, name)
        for name in other.static:
            _append_unique(self.static, name)
        for name in other.dynamic:
            _append_unique(self.dynamic, name)


def _append_unique(items: list[str], name: str) -> None:
    if name not in items:
        items.append(name)


@dataclass(frozen=True)
class InstallContext:
    """安装上下文，沿调用树显式传递，整个运行期间不变"""

    root: Path
    packages_dir: str = "Packages"
    interface_dir: str = "Interface"
    framework_dir: str = "EasyCpp"
    base_runtime: str = "EasyCpp"
    force: bool = False
    strict: bool = False

    @property
    def packages(self) -> Path:
        return self.root / self.packages_dir


@dataclass
class ResolveOutcome:
    """解析结果: found 为 False 表示注册表中无此 (包名, 版本)"""

    found: bool
    deps: DependencySet = field(default_factory=DependencySet)
