"""测试共享 fixture — 假 git 执行器 + 全局状态隔离

FakeExecutor 实现 CommandExecutor 协议:
  - 记录每次调用的命令和工作目录
  - git clone 时创建目标目录（模拟检出结果）
  - fail_on 命中的子命令返回非零退出码
  - raises 非空时直接抛出（模拟 git 不存在、超时）
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from easypm.core.config import reset_config
from easypm.utils.logger import reset_logging
from easypm.utils.shell import CommandResult


class FakeExecutor:
    def __init__(
        self,
        fail_on: str = "",
        on_clone: Callable[[Path], None] | None = None,
        raises: Exception | None = None,
    ) -> None:
        self.fail_on = fail_on
        self.on_clone = on_clone
        self.raises = raises
        self.calls: list[tuple[list[str], str]] = []
        self.timeouts: list[int | None] = []

    def execute(
        self,
        cmd: list[str],
        *,
        cwd: str = ".",
        timeout: int | None = None,
    ) -> CommandResult:
        args = list(cmd)
        self.calls.append((args, cwd))
        self.timeouts.append(timeout)
        if self.raises is not None:
            raise self.raises
        if self.fail_on and self.fail_on in args:
            return CommandResult(128, "", f"fatal: {self.fail_on} failed")
        if args[:2] == ["git", "clone"]:
            dest = Path(args[-1])
            dest.mkdir(parents=True, exist_ok=True)
            (dest / "Makefile").write_text("all:\n", encoding="utf-8")
            if self.on_clone:
                self.on_clone(dest)
        return CommandResult(0, "", "")

    @property
    def cloned(self) -> list[str]:
        """按顺序返回被 clone 的目标目录名"""
        return [Path(args[-1]).name for args, _ in self.calls if args[:2] == ["git", "clone"]]


@pytest.fixture()
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture(autouse=True)
def _isolate_globals() -> Iterator[None]:
    yield
    reset_config()
    reset_logging()


@pytest.fixture()
def make_executor() -> type[FakeExecutor]:
    """需要定制失败点或 clone 回调时使用"""
    return FakeExecutor
