"""包注册表客户端

职责:
- 对单个 name#version 执行一次外部注册表查询（默认 `bower info ... --json`）
- 解析 JSON 元信息，通配版本时以 latest 子记录为准
- 任何失败都在此边界内消化，返回 None
"""

from __future__ import annotations

import json
import logging

from componentize.core.exceptions import ConfigError, RegistryError
from componentize.core.models import RegistryInfo
from componentize.utils.shell import CommandExecutor, build_argv, get_executor

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_CMD = "bower info {name}#{version} --json"


def check_command_template(template: str) -> None:
    """配置阶段校验注册表命令模板：可切分、只含 {name} / {version} 占位符"""
    try:
        argv = build_argv(template, name="pkg", version="*")
    except (ValueError, KeyError, IndexError, AttributeError) as exc:
        raise ConfigError(f"无效的注册表命令模板: {template!r} ({exc})") from None
    if not argv:
        raise ConfigError("注册表命令模板为空")


class RegistryClient:
    """注册表客户端 - 同步阻塞，每次查询完成后才返回"""

    def __init__(
        self,
        command: str = DEFAULT_REGISTRY_CMD,
        executor: CommandExecutor | None = None,
        cwd: str = ".",
    ) -> None:
        check_command_template(command)
        self.command = command
        self.executor = executor or get_executor()
        self.cwd = cwd
        self.calls = 0

    def lookup(self, name: str, version_range: str) -> RegistryInfo | None:
        """查询单个包的元信息，失败返回 None（不抛异常）"""
        self.calls += 1
        try:
            data = self._query(name, version_range)
        except RegistryError as exc:
            logger.warning(
                "无法从注册表获取 %s 的信息: %s", name, exc, extra={"dependency": name},
            )
            return None

        logger.info("已从注册表获取 %s 的信息", name, extra={"dependency": name})
        return RegistryInfo.from_dict(data).normalized(version_range)

    def _query(self, name: str, version_range: str) -> dict:
        argv = build_argv(self.command, name=name, version=version_range)
        try:
            result = self.executor.execute(argv, cwd=self.cwd)
        except OSError as exc:
            raise RegistryError(f"命令执行失败: {exc}", name=name) from exc

        if not result.success:
            raise RegistryError(
                f"rc={result.returncode}: {result.stderr.strip()[:200]}", name=name,
            )
        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as exc:
            raise RegistryError(f"返回内容不是合法 JSON: {exc}", name=name) from exc

        if not isinstance(data, dict) or not data:
            raise RegistryError("返回内容为空", name=name)
        return data
