"""CLI 系统测试 — 列表 / 安装 / 错误退出码"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from easypm.cli import main

_PACKAGES = [
    {"Name": "Foo", "Type": "Exec", "Versions": [{
        "Version": "1.0", "URL": "https://example.com/foo.git", "Revision": "r1",
        "Dependency": [{"Name": "Bar", "Version": "2.0", "LinkType": "Static"}],
    }]},
    {"Name": "Bar", "Type": "Lib", "Versions": [{
        "Version": "2.0", "URL": "https://example.com/bar.git", "Revision": "r2",
    }]},
]


@pytest.fixture()
def registry_file(tmp_path: Path) -> str:
    path = tmp_path / "Packages.json"
    path.write_text(json.dumps(_PACKAGES), encoding="utf-8")
    return str(path)


@pytest.fixture()
def use_executor(monkeypatch: pytest.MonkeyPatch):  # type: ignore[no-untyped-def]
    def _use(executor):  # type: ignore[no-untyped-def]
        monkeypatch.setattr("easypm.utils.shell._default_executor", executor)
        return executor
    return _use


def _invoke(tmp_path: Path, *args: str):  # type: ignore[no-untyped-def]
    return CliRunner().invoke(main, ["-c", str(tmp_path / "none.yml"), *args])


class TestCli:
    def test_help(self, tmp_path: Path) -> None:
        result = _invoke(tmp_path, "-h")
        assert result.exit_code == 0
        assert "--add" in result.output

    def test_no_action_prints_help(self, tmp_path: Path) -> None:
        result = _invoke(tmp_path)
        assert result.exit_code == 0
        assert "--list" in result.output

    def test_list(self, tmp_path: Path, registry_file: str, use_executor, fake_executor) -> None:
        use_executor(fake_executor)
        result = _invoke(tmp_path, "-i", registry_file, "-l")
        assert result.exit_code == 0
        assert "+ Foo" in result.output
        assert "|  |  |   Depends on: Bar(2.0)" in result.output
        assert fake_executor.calls == []

    def test_install(self, tmp_path: Path, registry_file: str, use_executor, fake_executor) -> None:
        use_executor(fake_executor)
        root = tmp_path / "out"
        result = _invoke(tmp_path, "-i", registry_file, "-p", str(root), "-a", "Foo/1.0")

        assert result.exit_code == 0, result.output
        assert fake_executor.cloned == ["Bar", "Foo"]
        foo = (root / "Packages" / "Foo.mk").read_text(encoding="utf-8")
        assert "Foo: Bar\n" in foo
        assert "I_AM_APP=y" in foo

    def test_force_flag(self, tmp_path: Path, registry_file: str, use_executor, make_executor) -> None:
        root = str(tmp_path / "out")
        use_executor(make_executor())
        assert _invoke(tmp_path, "-i", registry_file, "-p", root, "-a", "Bar/2.0").exit_code == 0

        second = use_executor(make_executor())
        assert _invoke(tmp_path, "-i", registry_file, "-p", root, "-a", "Bar/2.0").exit_code == 0
        assert second.calls == []

        third = use_executor(make_executor())
        assert _invoke(tmp_path, "-i", registry_file, "-p", root, "-f", "-a", "Bar/2.0").exit_code == 0
        assert third.cloned == ["Bar"]

    def test_unknown_package_is_silent(
        self, tmp_path: Path, registry_file: str, use_executor, fake_executor,
    ) -> None:
        use_executor(fake_executor)
        result = _invoke(tmp_path, "-i", registry_file, "-p", str(tmp_path), "-a", "Ghost/1.0")
        assert result.exit_code == 0
        assert fake_executor.calls == []

    def test_strict_unknown_package_fails(
        self, tmp_path: Path, registry_file: str, use_executor, fake_executor,
    ) -> None:
        use_executor(fake_executor)
        result = _invoke(
            tmp_path, "-i", registry_file, "-p", str(tmp_path), "--strict", "-a", "Ghost/1.0",
        )
        assert result.exit_code == 1
        assert "PACKAGE_NOT_FOUND" in result.output

    def test_malformed_request(self, tmp_path: Path, registry_file: str) -> None:
        result = _invoke(tmp_path, "-i", registry_file, "-a", "Foo")
        assert result.exit_code == 2
        assert "name/version" in result.output

    def test_fetch_failure_exit_code(
        self, tmp_path: Path, registry_file: str, use_executor, make_executor,
    ) -> None:
        use_executor(make_executor(fail_on="clone"))
        result = _invoke(tmp_path, "-i", registry_file, "-p", str(tmp_path), "-a", "Foo/1.0")
        assert result.exit_code == 1
        assert "FETCH_ERROR" in result.output

    def test_missing_git_reported_as_fetch_error(
        self, tmp_path: Path, registry_file: str, use_executor, make_executor,
    ) -> None:
        use_executor(make_executor(raises=FileNotFoundError(2, "No such file or directory", "git")))
        result = _invoke(tmp_path, "-i", registry_file, "-p", str(tmp_path), "-a", "Bar/2.0")
        assert result.exit_code == 1
        assert "FETCH_ERROR" in result.output
        assert not isinstance(result.exception, FileNotFoundError)

    def test_config_timeout_reaches_git(
        self, tmp_path: Path, registry_file: str, use_executor, fake_executor,
    ) -> None:
        cfg = tmp_path / "cfg.yml"
        cfg.write_text("fetch_timeout: 45\n", encoding="utf-8")
        use_executor(fake_executor)
        result = CliRunner().invoke(
            main, ["-c", str(cfg), "-i", registry_file, "-p", str(tmp_path), "-a", "Bar/2.0"],
        )
        assert result.exit_code == 0, result.output
        assert fake_executor.timeouts == [45, 45]
