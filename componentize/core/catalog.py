"""补全与汇总

- complete_buckets: js / css 桶内无效记录逐个 fulfill（unknown 桶没有路径前缀，跳过）
- assemble_catalog: 各桶合并为交给模板的 Catalog
"""

from __future__ import annotations

import logging

from componentize.core.models import (
    KNOWN_TYPES,
    AssetLayout,
    AssetType,
    Buckets,
    Catalog,
)

logger = logging.getLogger(__name__)


def complete_buckets(buckets: Buckets, layout: AssetLayout) -> Buckets:
    logger.info("检查依赖有效性")
    for asset_type in KNOWN_TYPES:
        for record in buckets[asset_type]:
            if not record.is_valid():
                record.fulfill(layout)
        invalid = [r.name for r in buckets[asset_type] if not r.is_valid()]
        if invalid:
            logger.warning(
                "%s 依赖补全后仍不完整: %s",
                asset_type.value.upper(), ", ".join(invalid),
            )
        else:
            logger.info("全部 %s 依赖已就绪", asset_type.value.upper())
    return buckets


def assemble_catalog(name: str, buckets: Buckets) -> Catalog:
    return Catalog(
        name=name,
        js=list(buckets[AssetType.SCRIPT]),
        css=list(buckets[AssetType.STYLE]),
        unknown=list(buckets[AssetType.UNKNOWN]),
    )
