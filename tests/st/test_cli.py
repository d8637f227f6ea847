"""CLI 集成测试（click CliRunner + 注入假执行器）"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from componentize import __version__
from componentize.cli import main
from componentize.utils import shell


@pytest.fixture(autouse=True)
def _patched_executor(fake_executor):
    original = shell.get_executor()
    root = logging.getLogger()
    saved_level = root.level
    shell.set_executor(fake_executor)
    yield
    shell.set_executor(original)
    root.setLevel(saved_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestBuild:
    def test_build(self, runner, tmp_path: Path, write_manifest, fake_executor) -> None:
        fake_executor.responses.update({
            "foo": {"main": "dist/foo.min.js", "version": "1.2.0"},
            "bar": {"main": ["bar.css", "bar.js"], "version": "0.1.0"},
        })
        manifest = write_manifest({"foo": "1.2.0", "bar": "0.1.0"})
        dest = tmp_path / "out" / "component.js"
        cfg = tmp_path / "componentize.yml"
        cfg.write_text(yaml.dump({"host_url": "https://cdn.example.com"}))

        result = runner.invoke(main, [
            "build", "-c", str(cfg), "--bower-path", str(manifest), "-o", str(dest),
        ])

        assert result.exit_code == 0, result.output
        assert "js: 1  css: 0  unknown: 1" in result.output
        assert "https://cdn.example.com/scripts/vendor/foo.min.js" in dest.read_text(encoding="utf-8")

    def test_missing_manifest(self, runner, tmp_path: Path) -> None:
        result = runner.invoke(main, [
            "build", "-c", str(tmp_path / "none.yml"), "--bower-path", str(tmp_path / "none.json"),
        ])
        assert result.exit_code != 0
        assert "CONFIG_ERROR" in result.output

    def test_invalid_serializer_choice(self, runner) -> None:
        result = runner.invoke(main, ["build", "--serializer", "jju"])
        assert result.exit_code == 2


class TestInfo:
    def test_info(self, runner, tmp_path: Path, fake_executor) -> None:
        fake_executor.responses["x"] = {"latest": {"main": "x.css", "version": "2.0.0"}}
        result = runner.invoke(main, ["--log-level", "ERROR", "info", "x", "-c", str(tmp_path / "none.yml")])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"main": "x.css", "version": "2.0.0"}
        assert fake_executor.commands == [["bower", "info", "x#*", "--json"]]

    def test_info_failure(self, runner, tmp_path: Path) -> None:
        result = runner.invoke(main, ["info", "missing", "1.0.0", "-c", str(tmp_path / "none.yml")])
        assert result.exit_code == 1
        assert "无法获取 missing#1.0.0" in result.output

    def test_info_bad_registry_cmd(self, runner, tmp_path: Path, fake_executor) -> None:
        cfg = tmp_path / "componentize.yml"
        cfg.write_text(yaml.dump({"registry_cmd": "bower info {package} --json"}))
        result = runner.invoke(main, ["info", "x", "-c", str(cfg)])
        assert result.exit_code == 1
        assert "CONFIG_ERROR" in result.output
        assert fake_executor.commands == []

    def test_info_range_with_spaces(self, runner, tmp_path: Path, fake_executor) -> None:
        fake_executor.responses["jquery"] = {"main": "dist/jquery.js", "version": "2.2.4"}
        result = runner.invoke(main, [
            "--log-level", "ERROR", "info", "jquery", ">=1.9.1 <3.0.0", "-c", str(tmp_path / "none.yml"),
        ])
        assert result.exit_code == 0, result.output
        assert fake_executor.commands == [["bower", "info", "jquery#>=1.9.1 <3.0.0", "--json"]]
