"""源码拉取器

职责:
- git clone 到指定目录，再 hard reset 到指定版本
- 失败时抛 FetchError，不重试、不回滚
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from easypm.core.exceptions import FetchError
from easypm.utils.shell import CommandExecutor, get_executor

logger = logging.getLogger(__name__)


class GitFetcher:
    """基于 git 的源码拉取器

    timeout 作用于每条 git 命令，None 表示不限时。
    """

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        timeout: int | None = None,
    ) -> None:
        self.executor = executor or get_executor()
        self.timeout = timeout

    def fetch(self, url: str, revision: str, dest: Path) -> Path:
        """将 url 的 revision 版本检出到 dest（dest 须不存在或为空）"""
        if not url:
            raise FetchError(f"未定义源码地址: {dest.name}")

        dest.parent.mkdir(parents=True, exist_ok=True)
        logger.info("  拉取: %s -> %s", url, dest)
        self._run(["git", "clone", url, str(dest)], cwd=dest.parent, label="git clone")

        if revision:
            logger.info("  切换版本: %s", revision)
            self._run(["git", "reset", "--hard", revision], cwd=dest, label="git reset")
        return dest

    def _run(self, cmd: list[str], *, cwd: Path, label: str) -> None:
        try:
            r = self.executor.execute(cmd, cwd=str(cwd), timeout=self.timeout)
        except (OSError, subprocess.SubprocessError) as e:
            # git 不存在、无权限、超时
            raise FetchError(f"{label} 失败: {e}") from e
        if not r.success:
            raise FetchError(f"{label} 失败 (rc={r.returncode}): {r.stderr[:300]}")
