"""easypm 日志配置

人类可读格式用于终端，JSON 格式用于 CI 收集。安装过程中的日志可通过
extra={"package": "Foo(1.0)"} 附带当前包，两种格式都会输出该字段。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO

HUMAN_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(package_tag)s%(message)s"


class _PackageTagFilter(logging.Filter):
    """补齐 package_tag 字段，未附带包信息的记录为空串"""

    def filter(self, record: logging.LogRecord) -> bool:
        package = getattr(record, "package", None)
        record.package_tag = f"[{package}] " if package else ""
        return True


class JSONFormatter(logging.Formatter):
    """每条记录输出一行 JSON

    字段: timestamp / level / logger / message，附带包信息时加 package，
    有异常时加 exception。
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        package = getattr(record, "package", None)
        if package:
            entry["package"] = package
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """配置根日志器

    默认输出到 stderr，stdout 留给 --list 的清单输出。
    重复调用会先清掉已有 handlers。
    """
    reset_logging()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.addFilter(_PackageTagFilter())
        handler.setFormatter(logging.Formatter(HUMAN_FORMAT))
    root.addHandler(handler)


def reset_logging() -> None:
    """清理根日志器上所有已注册的 handlers"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
