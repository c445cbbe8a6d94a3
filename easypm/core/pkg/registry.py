"""依赖包注册表

职责:
- 从 JSON 文档加载包定义（{"Packages": [...]} 或顶层数组）
- 按 (包名, 版本) 精确查找
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from easypm.core.exceptions import RegistryError
from easypm.core.pkg.models import (
    DependencyDecl,
    LinkType,
    PackageType,
    RegistryEntry,
    VersionRecord,
)
from easypm.utils.file_io import load_json

logger = logging.getLogger(__name__)


class PackageRegistry:
    """依赖包注册表 - 解析一次，运行期间只读"""

    def __init__(self, entries: list[RegistryEntry] | tuple[RegistryEntry, ...] = ()) -> None:
        self._entries = tuple(entries)

    @property
    def entries(self) -> tuple[RegistryEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def from_file(cls, path: str | Path) -> PackageRegistry:
        """从注册表 JSON 文件加载"""
        try:
            data = load_json(path)
        except FileNotFoundError as e:
            raise RegistryError(f"注册表文件不存在: {path}") from e
        except (OSError, ValueError) as e:
            raise RegistryError(f"注册表文件无法解析: {path}: {e}") from e
        registry = cls.from_data(data)
        logger.info("已加载 %d 个包: %s", len(registry), path)
        return registry

    @classmethod
    def from_data(cls, data: Any) -> PackageRegistry:
        """从已解析的 JSON 数据构建注册表"""
        if isinstance(data, dict):
            data = data.get("Packages")
        if not isinstance(data, list):
            raise RegistryError("注册表格式无效: 缺少 Packages 数组")
        return cls([_parse_entry(item) for item in data])

    def get(self, name: str) -> RegistryEntry | None:
        """按包名线性查找，重名取第一条"""
        for entry in self._entries:
            logger.debug("比较: %s vs %s", name, entry.name)
            if entry.name == name:
                return entry
        return None

    def find(self, name: str, version: str) -> tuple[RegistryEntry, VersionRecord] | None:
        """按 (包名, 版本) 查找，任一不匹配返回 None"""
        entry = self.get(name)
        if entry is None:
            return None
        record = entry.find_version(version)
        if record is None:
            return None
        return entry, record


def _require(obj: dict[str, Any], key: str, where: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str) or not value:
        raise RegistryError(f"{where} 缺少字段 {key}")
    return value


def _optional_str(value: Any) -> str:
    """null 与缺省都视为空串，数字版本号等转为字符串"""
    return "" if value is None else str(value)


def _parse_entry(item: Any) -> RegistryEntry:
    if not isinstance(item, dict):
        raise RegistryError(f"包定义必须是对象: {item!r}")
    name = _require(item, "Name", "包定义")
    type_str = _require(item, "Type", f"包 {name}")
    try:
        pkg_type = PackageType(type_str)
    except ValueError as e:
        raise RegistryError(f"包 {name} 类型无效: {type_str}") from e

    versions = tuple(
        _parse_version(name, v) for v in item.get("Versions") or []
    )
    return RegistryEntry(name=name, type=pkg_type, versions=versions)


def _parse_version(name: str, item: Any) -> VersionRecord:
    if not isinstance(item, dict):
        raise RegistryError(f"包 {name} 的版本定义必须是对象")
    version = _require(item, "Version", f"包 {name} 的版本")
    deps = tuple(
        _parse_dependency(f"{name}({version})", d)
        for d in item.get("Dependency") or []
    )
    platform = item.get("Platform")
    return VersionRecord(
        version=version,
        url=_optional_str(item.get("URL")),
        revision=_optional_str(item.get("Revision")),
        platform=platform if isinstance(platform, str) else None,
        dependencies=deps,
    )


def _parse_dependency(owner: str, item: Any) -> DependencyDecl:
    if not isinstance(item, dict):
        raise RegistryError(f"{owner} 的依赖定义必须是对象")
    return DependencyDecl(
        name=_require(item, "Name", f"{owner} 的依赖"),
        # 缺省版本不会匹配任何记录，解析时按查找不到处理
        version=_optional_str(item.get("Version")),
        link_type=LinkType.parse(item.get("LinkType")),
    )

