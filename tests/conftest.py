"""共享 fixture：假命令执行器 + 清单文件

FakeExecutor 按包名返回预置的注册表输出，并记录每次调用，
替代真实的 bower 子进程。
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from componentize.core.registry import RegistryClient
from componentize.utils.shell import CommandResult


def _package_of(argv: list[str]) -> str:
    # 约定第三个参数为 name#version，例如 bower info foo#1.0 --json
    return argv[2].split("#", 1)[0]


class FakeExecutor:
    """按包名应答的假执行器"""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        # 值为 dict/list: 以 JSON 输出；str: 原样输出；int: 作为非零返回码
        self.responses = responses or {}
        self.commands: list[list[str]] = []

    def execute(self, argv: list[str], *, cwd: str = ".") -> CommandResult:
        self.commands.append(list(argv))
        name = _package_of(argv)
        if name not in self.responses:
            return CommandResult(returncode=1, stdout="", stderr=f"ENOTFOUND {name}")
        resp = self.responses[name]
        if isinstance(resp, int):
            return CommandResult(returncode=resp, stdout="", stderr="boom")
        if isinstance(resp, str):
            return CommandResult(returncode=0, stdout=resp, stderr="")
        return CommandResult(returncode=0, stdout=json.dumps(resp), stderr="")

    def looked_up(self, name: str) -> int:
        return sum(1 for argv in self.commands if _package_of(argv) == name)


@pytest.fixture()
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture()
def registry(fake_executor: FakeExecutor) -> RegistryClient:
    return RegistryClient(executor=fake_executor)


@pytest.fixture()
def write_manifest(tmp_path: Path):
    def _write(dependencies: dict[str, str], name: str = "my-app") -> Path:
        path = tmp_path / "bower.json"
        path.write_text(
            json.dumps({"name": name, "dependencies": dependencies}), encoding="utf-8",
        )
        return path
    return _write
