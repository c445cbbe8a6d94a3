"""注册表只读展示"""

from __future__ import annotations

from easypm.core.pkg.registry import PackageRegistry


def format_catalog(registry: PackageRegistry) -> list[str]:
    """把注册表格式化为树状文本行，不触发任何安装动作"""
    lines: list[str] = []
    for entry in registry.entries:
        lines.append(f"+ {entry.name}")
        lines.append(f"|    Type: {entry.type.value}")
        lines.append("|  + Version:")
        for record in entry.versions:
            lines.append(f"|  |  + {record.version}")
            for dep in record.dependencies:
                lines.append(f"|  |  |   Depends on: {dep.name}({dep.version})")
    return lines
