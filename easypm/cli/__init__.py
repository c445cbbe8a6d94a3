"""easypm 命令行接口

    easypm -i Packages.json -p ./build -a Foo/1.0 -a Bar/2.0
    easypm -l
"""

from __future__ import annotations

import os

import click

from easypm import __version__
from easypm.core.config import DEFAULT_CONFIG_PATH, init_config
from easypm.core.exceptions import EasyPMError, ValidationError
from easypm.core.pkg_manager import PackageManager, parse_request
from easypm.utils.logger import setup_logging


def _parse_requests(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...],
) -> list[tuple[str, str]]:
    """校验 -a 参数，格式错误属于用法错误"""
    try:
        return [parse_request(v) for v in values]
    except ValidationError as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-i", "--registry", default=None, help="注册表 JSON 文件（默认克隆远程默认注册表）")
@click.option("-p", "--path", "root", default=".", show_default=True, help="安装根目录")
@click.option(
    "-a", "--add", "requests", multiple=True, callback=_parse_requests,
    help="安装指定包，格式: name/version（可多次指定）",
)
@click.option("-f", "--force", is_flag=True, help="强制重新拉取，忽略已安装版本")
@click.option("-l", "--list", "list_only", is_flag=True, help="列出注册表中所有包")
@click.option("--strict", is_flag=True, help="找不到请求的包时报错（默认静默跳过）")
@click.option("-c", "--config", "config_path", default=DEFAULT_CONFIG_PATH, help="配置文件路径")
@click.version_option(version=__version__)
@click.pass_context
def main(
    ctx: click.Context,
    registry: str | None,
    root: str,
    requests: list[tuple[str, str]],
    force: bool,
    list_only: bool,
    strict: bool,
    config_path: str,
) -> None:
    """easypm - 按注册表安装包及其传递依赖，并生成 make 片段"""
    setup_logging(
        level=os.getenv("EASYPM_LOG_LEVEL", "INFO"),
        json_output=os.getenv("EASYPM_LOG_JSON", "") == "1",
    )

    if not list_only and not requests:
        click.echo(ctx.get_help())
        return

    try:
        cfg = init_config(config_path)
        pm = PackageManager(
            registry_path=registry, root=root,
            force=force, strict=strict or cfg.strict_lookup, config=cfg,
        )
        if list_only:
            for line in pm.list_catalog():
                click.echo(line)
            return
        pm.install(requests)
    except EasyPMError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e
