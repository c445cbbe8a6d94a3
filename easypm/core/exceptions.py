"""统一异常体系

所有业务异常继承 EasyPMError，CLI 层据此输出友好提示并以非零码退出。
清单文件损坏不在此列：由 ManifestStore 就地吸收，视为"未安装"。
"""

from __future__ import annotations


class EasyPMError(Exception):
    """包管理器基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(EasyPMError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class RegistryError(EasyPMError):
    """包注册表文件无法读取或格式无效"""

    code = "REGISTRY_ERROR"


class PackageNotFoundError(EasyPMError):
    """严格模式下请求的 (包名, 版本) 不在注册表中"""

    code = "PACKAGE_NOT_FOUND"

    def __init__(self, name: str, version: str) -> None:
        super().__init__(f"包不在注册表中: {name}({version})")
        self.name = name
        self.version = version


class FetchError(EasyPMError):
    """源码拉取失败（git clone / reset 非零退出）"""

    code = "FETCH_ERROR"


class CycleDetectedError(EasyPMError):
    """依赖图存在环"""

    code = "CYCLE_DETECTED"

    def __init__(self, chain: list[tuple[str, str]]) -> None:
        path = " -> ".join(f"{n}({v})" for n, v in chain)
        super().__init__(f"检测到循环依赖: {path}")
        self.chain = chain


class ValidationError(EasyPMError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []
