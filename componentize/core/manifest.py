"""依赖清单读取（bower.json 风格）

只读取根部 name 和 dependencies 映射，不处理传递依赖。
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from componentize.core.exceptions import ConfigError
from componentize.core.models import ManifestEntry

logger = logging.getLogger(__name__)


@dataclass
class Manifest:
    name: str = ""
    entries: list[ManifestEntry] = field(default_factory=list)


def parse_manifest(data: dict) -> Manifest:
    deps = data.get("dependencies") or {}
    if not isinstance(deps, dict):
        raise ConfigError("清单中的 dependencies 必须是映射")
    entries = [ManifestEntry(name=str(n), version_range=str(v)) for n, v in deps.items()]
    if entries:
        logger.info("清单中发现 %d 个依赖", len(entries))
    else:
        logger.warning("清单中没有依赖")
    return Manifest(name=str(data.get("name") or ""), entries=entries)


def load_manifest(path: str | Path) -> Manifest:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"清单文件不存在: {p}")
    try:
        with open(p, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"清单文件不是合法 JSON: {p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"清单文件根节点必须是对象: {p}")
    return parse_manifest(data)
