"""核心数据模型

所有核心数据类集中定义:
- AssetType: 资源类型（js / css / unknown）
- ManifestEntry: 清单中声明的单个依赖
- RegistryInfo: 注册表返回的包元信息
- Resolved / Unresolved: 只解析一次的两态值
- DependencyRecord: 单个依赖的解析记录，负责派生字段（文件名、src、版本）
- Catalog: 按类型分桶的最终结果
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from componentize.core.exceptions import ConfigError

if TYPE_CHECKING:
    from componentize.core.registry import RegistryClient

logger = logging.getLogger(__name__)

WILDCARD_VERSION = "*"


class AssetType(str, Enum):
    """资源类型，值即输出结构中的桶名"""
    SCRIPT = "js"
    STYLE = "css"
    UNKNOWN = "unknown"

    @classmethod
    def from_extension(cls, extension: str) -> AssetType:
        """扩展名映射到资源类型，只有 js / css 被识别，其余一律 UNKNOWN"""
        ext = extension.lower().strip()
        for t in KNOWN_TYPES:
            if t.value == ext:
                return t
        return cls.UNKNOWN


KNOWN_TYPES: tuple[AssetType, ...] = (AssetType.SCRIPT, AssetType.STYLE)

Buckets = dict[AssetType, list["DependencyRecord"]]


def new_buckets() -> Buckets:
    return {t: [] for t in AssetType}


@dataclass(frozen=True)
class ManifestEntry:
    """清单中声明的单个依赖（name → 版本范围）"""

    name: str
    version_range: str


# =========================================================================
# 注册表元信息
# =========================================================================


@dataclass
class RegistryInfo:
    """注册表返回的包元信息

    main 可能是字符串、字符串列表或缺失；latest 仅在查询通配版本时出现。
    """

    main: str | list[str] | None = None
    version: str | None = None
    latest: RegistryInfo | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RegistryInfo:
        latest = data.get("latest")
        return cls(
            main=data.get("main"),
            version=data.get("version"),
            latest=cls.from_dict(latest) if isinstance(latest, dict) else None,
            raw=data,
        )

    def normalized(self, version_range: str) -> RegistryInfo:
        """通配版本查询时以 latest 子记录为准"""
        if version_range == WILDCARD_VERSION and self.latest is not None:
            return self.latest
        return self

    @property
    def has_main(self) -> bool:
        return self.main is not None

    def main_entry(self) -> str | None:
        """返回唯一的主入口路径

        列表形式只接受单元素；多元素视为歧义，返回 None 而不是取第一个。
        """
        main = self.main
        if isinstance(main, (list, tuple)):
            if len(main) != 1:
                return None
            main = main[0]
        if not isinstance(main, str) or not main.strip():
            return None
        return main


# =========================================================================
# 两态解析值
# =========================================================================


@dataclass(frozen=True)
class Unresolved:
    """尚未解析"""


@dataclass(frozen=True)
class Resolved:
    """已解析，值不再变化"""

    value: str


UNRESOLVED = Unresolved()
Resolution = Union[Unresolved, Resolved]


@dataclass
class AssetLayout:
    """资源链接布局：host_url + 各类型路径前缀"""

    host_url: str
    paths: dict[AssetType, str] = field(default_factory=dict)

    def prefix_for(self, asset_type: AssetType) -> str | None:
        return self.paths.get(asset_type)


# =========================================================================
# 依赖记录
# =========================================================================


@dataclass
class DependencyRecord:
    """单个依赖的解析记录

    字段在解析过程中就地补全；文件名一经解析即固定（Resolved），
    之后即使 registry_info 变化也不会重新计算。
    """

    name: str
    version: str = ""
    version_range: str = ""
    asset_type: AssetType = AssetType.UNKNOWN
    src: str = ""
    registry_info: RegistryInfo | None = None
    _filename: Resolution = field(default=UNRESOLVED, init=False, repr=False)

    @property
    def filename(self) -> str | None:
        if isinstance(self._filename, Resolved):
            return self._filename.value
        return None

    def seed_filename(self, filename: str) -> None:
        """以已知文件名直接进入 Resolved 状态（已解析时忽略）"""
        if isinstance(self._filename, Unresolved) and filename:
            self._filename = Resolved(filename.strip())

    def load_registry_info(self, registry: RegistryClient) -> RegistryInfo | None:
        """向注册表查询本依赖，成功时挂到记录上"""
        self.registry_info = registry.lookup(self.name, self.version_range)
        return self.registry_info

    def resolve_filename(self) -> str | None:
        if isinstance(self._filename, Resolved):
            return self._filename.value
        if self.registry_info is None:
            return None
        entry = self.registry_info.main_entry()
        filename = entry.split("/")[-1].strip() if entry else ""
        if not filename:
            logger.warning("无法确定文件名: %s", self.name)
            return None
        self._filename = Resolved(filename)
        return filename

    def resolve_source_url(self, layout: AssetLayout) -> str | None:
        """{host_url}{类型前缀}/{文件名}；UNKNOWN 类型没有前缀，返回 None"""
        prefix = layout.prefix_for(self.asset_type)
        if prefix is None:
            return None
        filename = self.resolve_filename()
        if not filename:
            return None
        return f"{layout.host_url}{prefix}/{filename}"

    def resolve_version(self) -> str | None:
        if self.version:
            return self.version
        if self.registry_info is not None and self.registry_info.version:
            return self.registry_info.version
        logger.warning("无法确定版本: %s", self.name)
        return None

    def is_valid(self) -> bool:
        return bool(self.src and self.version and self.name)

    def fulfill(self, layout: AssetLayout) -> None:
        """补全缺失的 src / version，可重复调用"""
        logger.info("补全依赖字段: %s", self.name)
        if not self.src:
            src = self.resolve_source_url(layout)
            if src:
                self.src = src
                logger.info("  * 确定 src: %s", src)
            else:
                logger.warning("  ! 无法确定 src: %s", self.name)
        if not self.version:
            version = self.resolve_version()
            if version:
                self.version = version
                logger.info("  * 确定版本: %s", version)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version or None,
            "src": self.src or None,
            "type": self.asset_type.value,
            "filename": self.filename,
        }


_RECORD_FIELDS = frozenset(("version", "version_range", "src", "filename"))


def make_record(
    name: str,
    asset_type: AssetType = AssetType.UNKNOWN,
    **overrides: Any,
) -> DependencyRecord:
    """构造一条全新的依赖记录

    overrides 仅允许 version / version_range / src / filename，
    每次调用都返回独立对象，记录之间不共享任何可变状态。
    """
    if not name:
        raise ConfigError("依赖记录缺少 name")
    unknown = set(overrides) - _RECORD_FIELDS
    if unknown:
        raise ConfigError(f"依赖 '{name}' 含未知字段: {sorted(unknown)}")

    record = DependencyRecord(
        name=name,
        version=str(overrides.get("version") or ""),
        version_range=str(overrides.get("version_range") or ""),
        asset_type=asset_type,
        src=str(overrides.get("src") or ""),
    )
    if overrides.get("filename"):
        record.seed_filename(str(overrides["filename"]))
    return record


# =========================================================================
# 输出目录
# =========================================================================


@dataclass
class Catalog:
    """按类型分桶的最终结果，顺序即输出顺序"""

    name: str
    js: list[DependencyRecord] = field(default_factory=list)
    css: list[DependencyRecord] = field(default_factory=list)
    unknown: list[DependencyRecord] = field(default_factory=list)

    @property
    def unresolved(self) -> int:
        return len(self.unknown)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "js": [r.to_dict() for r in self.js],
            "css": [r.to_dict() for r in self.css],
            "unknown": [r.to_dict() for r in self.unknown],
        }
