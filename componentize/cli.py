"""componentize 命令行接口"""

from __future__ import annotations

import json

import click

from componentize import __version__
from componentize.core.config import DEFAULT_CONFIG_FILE, Config
from componentize.core.exceptions import ComponentizeError
from componentize.core.registry import RegistryClient
from componentize.core.serializers import Serializer
from componentize.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default="INFO", help="日志级别")
@click.option("--json-log", is_flag=True, help="输出 JSON 格式日志")
def main(log_level: str, json_log: bool) -> None:
    """componentize - 解析前端依赖并生成组件描述文件"""
    setup_logging(log_level, json_output=json_log)


@main.command()
@click.option("--config", "-c", "config_path", default=DEFAULT_CONFIG_FILE, help="配置文件路径")
@click.option("--bower-path", default=None, help="依赖清单路径")
@click.option("--dest", "-o", default=None, help="输出文件路径")
@click.option("--host-url", default=None, help="资源链接的 host")
@click.option(
    "--serializer", default=None,
    type=click.Choice([s.value for s in Serializer]), help="模板取值序列化方式",
)
@click.option("--template", default=None, help="自定义模板路径")
def build(
    config_path: str, bower_path: str | None, dest: str | None,
    host_url: str | None, serializer: str | None, template: str | None,
) -> None:
    """解析依赖并生成组件描述文件"""
    from componentize.services.componentize_service import ComponentizeService

    try:
        cfg = Config.from_file(config_path).with_overrides(
            bower_path=bower_path, dest=dest, host_url=host_url,
            serializer=serializer, template=template,
        )
        result = ComponentizeService(cfg).run()
    except ComponentizeError as exc:
        raise click.ClickException(f"[{exc.code}] {exc}") from exc

    c = result.catalog
    click.echo(f"已生成: {result.dest}")
    click.echo(f"  js: {len(c.js)}  css: {len(c.css)}  unknown: {len(c.unknown)}")
    if result.unresolved:
        click.echo(f"无法解析 {result.unresolved} 个依赖", err=True)


@main.command()
@click.argument("name")
@click.argument("version", default="*")
@click.option("--config", "-c", "config_path", default=DEFAULT_CONFIG_FILE, help="配置文件路径")
def info(name: str, version: str, config_path: str) -> None:
    """查询单个包在注册表中的元信息"""
    try:
        cfg = Config.from_file(config_path)
        client = RegistryClient(command=cfg.registry_cmd)
    except ComponentizeError as exc:
        raise click.ClickException(f"[{exc.code}] {exc}") from exc
    registry_info = client.lookup(name, version)
    if registry_info is None:
        raise click.ClickException(f"无法获取 {name}#{version} 的信息")
    click.echo(json.dumps(
        {"main": registry_info.main, "version": registry_info.version},
        indent=2, ensure_ascii=False,
    ))


if __name__ == "__main__":
    main()
