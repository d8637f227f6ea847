"""注册表命令执行

命令模板先按 shell 规则切成 argv，再逐个参数替换 {name} / {version}，
因此版本范围里的空格、引号不会把一个参数拆成多个。
执行方式通过 CommandExecutor 协议注入，测试时替换为假实现。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


def build_argv(template: str, **fields: str) -> list[str]:
    """切分命令模板后再填充占位符，字段值始终落在单个参数内"""
    return [part.format(**fields) for part in shlex.split(template)]


class CommandExecutor(Protocol):
    """注册表命令执行器协议"""

    def execute(self, argv: list[str], *, cwd: str = ".") -> CommandResult:
        ...


class LocalExecutor:
    """本地子进程执行器，阻塞直至进程退出"""

    def execute(self, argv: list[str], *, cwd: str = ".") -> CommandResult:
        logger.debug("执行命令: %s (cwd=%s)", argv, cwd)
        r = subprocess.run(
            argv, capture_output=True, text=True, cwd=cwd, check=False,
        )
        return CommandResult(returncode=r.returncode, stdout=r.stdout, stderr=r.stderr)


_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor
