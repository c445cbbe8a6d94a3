"""git 拉取器单元测试"""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from easypm.core.exceptions import FetchError
from easypm.core.pkg.fetcher import GitFetcher


class TestGitFetcher:
    def test_clone_then_reset(self, tmp_path: Path, fake_executor) -> None:
        dest = tmp_path / "Packages" / "Foo"
        GitFetcher(fake_executor).fetch("https://example.com/foo.git", "abc123", dest)

        (clone, clone_cwd), (reset, reset_cwd) = fake_executor.calls
        assert clone == ["git", "clone", "https://example.com/foo.git", str(dest)]
        assert clone_cwd == str(tmp_path / "Packages")
        assert reset == ["git", "reset", "--hard", "abc123"]
        assert reset_cwd == str(dest)

    def test_no_revision_skips_reset(self, tmp_path: Path, fake_executor) -> None:
        GitFetcher(fake_executor).fetch("https://example.com/foo.git", "", tmp_path / "Foo")
        assert len(fake_executor.calls) == 1

    def test_empty_url_raises(self, tmp_path: Path, fake_executor) -> None:
        with pytest.raises(FetchError, match="未定义源码地址"):
            GitFetcher(fake_executor).fetch("", "abc", tmp_path / "Foo")
        assert fake_executor.calls == []

    @pytest.mark.parametrize(("fail_on", "label"), [("clone", "git clone"), ("reset", "git reset")])
    def test_failure_raises(
        self, tmp_path: Path, make_executor, fail_on: str, label: str,
    ) -> None:
        with pytest.raises(FetchError, match=f"{label} 失败 \\(rc=128\\)"):
            GitFetcher(make_executor(fail_on=fail_on)).fetch("u", "rev", tmp_path / "Foo")


class TestGitFetcherErrors:
    @pytest.mark.parametrize("error", [
        FileNotFoundError(2, "No such file or directory", "git"),
        PermissionError(13, "Permission denied", "git"),
        subprocess.TimeoutExpired(["git", "clone"], 30),
    ])
    def test_executor_exception_becomes_fetch_error(
        self, tmp_path: Path, make_executor, error: Exception,
    ) -> None:
        with pytest.raises(FetchError, match="git clone 失败") as exc_info:
            GitFetcher(make_executor(raises=error)).fetch("u", "rev", tmp_path / "Foo")
        assert exc_info.value.__cause__ is error

    def test_timeout_passed_to_every_command(self, tmp_path: Path, fake_executor) -> None:
        GitFetcher(fake_executor, timeout=30).fetch("u", "rev", tmp_path / "Foo")
        assert fake_executor.timeouts == [30, 30]

    def test_default_no_timeout(self, tmp_path: Path, fake_executor) -> None:
        GitFetcher(fake_executor).fetch("u", "rev", tmp_path / "Foo")
        assert fake_executor.timeouts == [None, None]
