"""文件统一读写工具

集中管理 YAML 配置与 JSON 注册表/安装清单的读写，
统一 encoding="utf-8"、大小限制、目录自动创建、原子写入。
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# 文件最大大小限制 (10MB)，防止异常大文件导致内存耗尽
MAX_FILE_SIZE = 10 * 1024 * 1024


def atomic_write(path: Path, content: str) -> None:
    """原子写入文件：先写临时文件再 rename，防止中途崩溃导致损坏"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(
        dir=str(path.parent), suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, str(path))
    except Exception:
        # 只捕获普通异常，不拦截 KeyboardInterrupt/SystemExit
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def _read_text(p: Path) -> str:
    file_size = p.stat().st_size
    if file_size > MAX_FILE_SIZE:
        raise ValueError(
            f"文件过大: {p} ({file_size} 字节), "
            f"超过限制 {MAX_FILE_SIZE} 字节"
        )
    return p.read_text(encoding="utf-8")


def load_yaml(path: str | Path) -> dict[str, Any]:
    """安全读取 YAML 文件

    返回:
        dict: 解析后的字典。文件不存在、为空、或内容不是字典时返回空字典

    异常:
        yaml.YAMLError: YAML 格式错误
        OSError: IO 错误
        ValueError: 文件过大
    """
    p = Path(path)
    if not p.exists():
        return {}

    try:
        result = yaml.safe_load(_read_text(p))
    except yaml.YAMLError as e:
        logger.error("解析 YAML 文件失败: %s, 错误: %s", path, e)
        raise

    if result is None:
        return {}
    if not isinstance(result, dict):
        logger.warning(
            "%s 内容不是字典类型 (实际类型: %s)，返回空字典",
            path, type(result).__name__,
        )
        return {}
    return result


def load_json(path: str | Path) -> Any:
    """读取 JSON 文件

    与 load_yaml 不同，文件不存在时直接抛出 FileNotFoundError，
    由调用方决定缺失是否致命。

    异常:
        FileNotFoundError: 文件不存在
        json.JSONDecodeError: JSON 格式错误
        ValueError: 文件过大
    """
    return json.loads(_read_text(Path(path)))


def save_json(path: str | Path, data: Any) -> None:
    """原子写入 JSON 文件（自动创建父目录）"""
    content = json.dumps(data, ensure_ascii=False, indent=2) + "\n"
    atomic_write(Path(path), content)
