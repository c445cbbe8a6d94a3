"""子进程执行 — git 拉取经由这一层

CommandExecutor 协议把"执行一条命令"与 subprocess 解耦，
测试注入假执行器即可观察到每条 git 命令，无需 patch subprocess。
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """命令退出码与输出"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandExecutor(Protocol):
    """命令执行器协议

    超时抛 subprocess.TimeoutExpired，命令不存在抛 OSError，
    由调用方决定如何转换。
    """

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        timeout: int | None = None,
    ) -> CommandResult:
        ...


class LocalExecutor:
    """在本机直接执行命令（默认实现）"""

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        timeout: int | None = None,
    ) -> CommandResult:
        logger.debug("执行: %s (cwd=%s, timeout=%s)", " ".join(cmd), cwd, timeout)
        r = subprocess.run(
            cmd, capture_output=True, text=True,
            cwd=cwd, check=False, timeout=timeout,
        )
        return CommandResult(r.returncode, r.stdout, r.stderr)


_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认命令执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor
