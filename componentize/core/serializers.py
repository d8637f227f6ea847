"""模板取值序列化策略

可选策略是封闭集合（Serializer 枚举），配置阶段即拒绝未知名称；
编程调用时也可直接传入 (obj, options) -> str 的函数。
"""

from __future__ import annotations

import json
import pprint
from collections.abc import Callable
from enum import Enum
from typing import Any

import yaml

from componentize.core.exceptions import ConfigError

SerializerFunc = Callable[[Any, dict[str, Any]], str]


class Serializer(str, Enum):
    JSON = "json"
    YAML = "yaml"
    SOURCE = "source"


def _json_serializer(obj: Any, options: dict[str, Any]) -> str:
    return json.dumps(
        obj,
        indent=options.get("indent"),
        sort_keys=bool(options.get("sort_keys", False)),
        ensure_ascii=False,
    )


def _yaml_serializer(obj: Any, options: dict[str, Any]) -> str:
    # flow 风格，输出可直接嵌入脚本的单行字面量
    return yaml.safe_dump(
        obj,
        default_flow_style=True,
        allow_unicode=True,
        sort_keys=bool(options.get("sort_keys", False)),
        width=options.get("width", 80),
    ).strip()


def _source_serializer(obj: Any, options: dict[str, Any]) -> str:
    return pprint.pformat(
        obj, width=options.get("width", 80), sort_dicts=bool(options.get("sort_keys", False)),
    )


_STRATEGIES: dict[Serializer, SerializerFunc] = {
    Serializer.JSON: _json_serializer,
    Serializer.YAML: _yaml_serializer,
    Serializer.SOURCE: _source_serializer,
}


def resolve_serializer(key: str | Serializer | SerializerFunc) -> SerializerFunc:
    """名称 / 枚举 / 函数 → 序列化函数，无法识别时抛 ConfigError"""
    if isinstance(key, str):
        try:
            return _STRATEGIES[Serializer(key)]
        except ValueError:
            raise ConfigError(
                f"无效的序列化器: {key}（可用: {[s.value for s in Serializer]}）",
            ) from None
    if callable(key):
        return key
    raise ConfigError(f"无效的序列化器: {key!r}，需要名称或函数")
