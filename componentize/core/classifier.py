"""依赖分类器

按清单顺序逐个确定依赖所属的资源桶:
  1. 在预置的 js / css 桶中按名字查找，命中则直接归档（可同时命中两个桶）
  2. 未命中则查询注册表，按主入口文件扩展名推断类型
  3. 注册表查询失败的依赖不进入任何桶；能查到但无法推断类型的进入 unknown

桶内顺序即输出顺序：命中的预置依赖按清单顺序排在最前，
未命中的预置依赖保持配置顺序，注册表发现的依赖追加在后。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from componentize.core.models import (
    KNOWN_TYPES,
    AssetType,
    Buckets,
    DependencyRecord,
    ManifestEntry,
    make_record,
)
from componentize.core.registry import RegistryClient

logger = logging.getLogger(__name__)


class Classifier:
    """依赖分类器 - 就地修改传入的 buckets"""

    def __init__(self, buckets: Buckets, registry: RegistryClient) -> None:
        self.buckets = buckets
        self.registry = registry

    def classify(self, entries: Iterable[ManifestEntry]) -> Buckets:
        seeded = {t: list(self.buckets[t]) for t in KNOWN_TYPES}
        matched: dict[str, int] = {}
        for entry in entries:
            logger.info("解析依赖类型: %s#%s", entry.name, entry.version_range)
            if self._match_preseeded(entry):
                matched.setdefault(entry.name, len(matched))
                continue
            self._discover(entry)
        self._reorder(seeded, matched)
        return self.buckets

    def _reorder(self, seeded: Buckets, matched: dict[str, int]) -> None:
        """桶内顺序: 命中的预置依赖（清单顺序）→ 未命中的预置依赖 → 注册表发现的依赖"""
        for asset_type, stubs in seeded.items():
            discovered = self.buckets[asset_type][len(stubs):]
            hits = sorted((r for r in stubs if r.name in matched), key=lambda r: matched[r.name])
            rest = [r for r in stubs if r.name not in matched]
            self.buckets[asset_type][:] = hits + rest + discovered

    def _match_preseeded(self, entry: ManifestEntry) -> bool:
        placed = False
        for asset_type in KNOWN_TYPES:
            for record in self.buckets[asset_type]:
                if record.name == entry.name:
                    record.version_range = entry.version_range
                    record.asset_type = asset_type
                    placed = True
        return placed

    def _discover(self, entry: ManifestEntry) -> None:
        extra = {"dependency": entry.name}
        logger.info("  ! 尝试从注册表查询类型: %s", entry.name)
        record = make_record(entry.name, version_range=entry.version_range)

        info = record.load_registry_info(self.registry)
        if info is None:
            logger.warning("  ^ 跳过无法查询的依赖: %s", entry.name, extra=extra)
            return

        if not info.has_main:
            logger.warning("  ^ 无法确定依赖类型: %s (缺少 main 字段)", entry.name, extra=extra)
            self._place(record, AssetType.UNKNOWN)
            return

        filename = record.resolve_filename()
        if not filename:
            logger.warning("  ^ 无法确定依赖类型: %s (main 为空或有多个值)", entry.name, extra=extra)
            self._place(record, AssetType.UNKNOWN)
            return

        asset_type = AssetType.UNKNOWN
        if "." in filename:
            asset_type = AssetType.from_extension(filename.rsplit(".", 1)[-1])
        if asset_type is AssetType.UNKNOWN:
            logger.warning("  ^ 无法确定依赖类型: %s (%s)", entry.name, filename, extra=extra)
        else:
            logger.info("  - 已确定 %s 为 %s", entry.name, asset_type.value.upper())
        self._place(record, asset_type)

    def _place(self, record: DependencyRecord, asset_type: AssetType) -> None:
        record.asset_type = asset_type
        self.buckets[asset_type].append(record)
