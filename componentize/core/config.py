"""集中配置管理

支持从 YAML 文件加载 + 编程式 / 命令行覆盖。
deps 段为预置依赖（按 js / css / unknown 分桶），命中的依赖不再查询注册表。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any
from urllib.parse import urlparse

import yaml

from componentize.core.exceptions import ConfigError
from componentize.core.models import (
    AssetLayout,
    AssetType,
    Buckets,
    make_record,
    new_buckets,
)
from componentize.core.registry import DEFAULT_REGISTRY_CMD, check_command_template
from componentize.core.serializers import SerializerFunc, resolve_serializer
from componentize.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "componentize.yml"

# 资源链接只允许 http/https，避免生成 file:// 等链接
_ALLOWED_SCHEMES = frozenset(("http", "https"))


def _default_deps() -> dict[str, list[dict[str, Any]]]:
    return {t.value: [] for t in AssetType}


@dataclass
class Config:
    """生成任务配置"""

    app_name: str = "fg_component"
    name: str = "fg_component"
    dest: str = "dist/componentize.js"
    template: str = ""  # 为空时使用内置模板

    # 资源链接
    host_url: str = "http://localhost:9000"
    js_path: str = "/scripts/vendor"
    css_path: str = "/styles/vendor"

    # 清单与注册表
    bower_path: str = "bower.json"
    registry_cmd: str = DEFAULT_REGISTRY_CMD

    # 序列化
    serializer: Any = "json"
    serializer_options: dict[str, Any] = field(default_factory=lambda: {"indent": None})

    deps: dict[str, list[dict[str, Any]]] = field(default_factory=_default_deps)

    # 自定义扩展（放不到字段里的配置项）
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        try:
            data = load_yaml(path)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"配置文件无效: {path}: {e}") from e
        if not data:
            return cls()
        known = {f.name for f in fields(cls)} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        logger.info("配置已加载: %s", path)
        return cfg

    def with_overrides(self, **overrides: Any) -> Config:
        """返回覆盖后的新配置，值为 None 的项忽略"""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"未知配置项: {sorted(unknown)}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> SerializerFunc:
        """配置阶段校验，返回解析后的序列化函数"""
        serializer = resolve_serializer(self.serializer)
        scheme = urlparse(self.host_url).scheme
        if scheme not in _ALLOWED_SCHEMES:
            raise ConfigError(
                f"host_url 不允许的 URL 协议 '{scheme}'，仅支持 http/https: {self.host_url}",
            )
        if not isinstance(self.serializer_options, dict):
            raise ConfigError("serializer_options 必须是映射")
        check_command_template(self.registry_cmd)
        return serializer

    def layout(self) -> AssetLayout:
        return AssetLayout(
            host_url=self.host_url,
            paths={AssetType.SCRIPT: self.js_path, AssetType.STYLE: self.css_path},
        )

    def seed_buckets(self) -> Buckets:
        """由 deps 段构造预置桶，每条记录都是新对象"""
        buckets = new_buckets()
        if not isinstance(self.deps, dict):
            raise ConfigError("deps 必须是映射")
        for key, stubs in self.deps.items():
            try:
                asset_type = AssetType(key)
            except ValueError:
                raise ConfigError(
                    f"deps 中未知的类型: {key}（可用: {[t.value for t in AssetType]}）",
                ) from None
            for stub in stubs or []:
                if not isinstance(stub, dict) or not stub.get("name"):
                    raise ConfigError(f"deps.{key} 中的条目缺少 name: {stub!r}")
                overrides = {k: v for k, v in stub.items() if k != "name"}
                buckets[asset_type].append(
                    make_record(str(stub["name"]), asset_type, **overrides),
                )
        return buckets

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if callable(self.serializer):
            data["serializer"] = getattr(self.serializer, "__name__", repr(self.serializer))
        return data
