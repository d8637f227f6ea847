"""生成服务：CLI 和编程调用共享的完整流程

配置校验 → 读取清单 → 分类 → 补全 → 汇总 → 渲染 → 写出。
无法解析的依赖只告警，不中断生成。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from componentize.core.catalog import assemble_catalog, complete_buckets
from componentize.core.classifier import Classifier
from componentize.core.config import Config
from componentize.core.manifest import Manifest, load_manifest
from componentize.core.models import Buckets, Catalog
from componentize.core.registry import RegistryClient
from componentize.core.renderer import Renderer, module_name
from componentize.utils.yaml_io import atomic_write

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """一次生成的结果"""

    dest: Path
    catalog: Catalog

    @property
    def unresolved(self) -> int:
        return self.catalog.unresolved


class ComponentizeService:
    """组件描述生成服务"""

    def __init__(
        self,
        config: Config,
        registry: RegistryClient | None = None,
    ) -> None:
        self.config = config
        self.registry = registry or RegistryClient(command=config.registry_cmd)

    def resolve(self) -> Catalog:
        """只做解析，不渲染不写文件"""
        self.config.validate()
        return self._resolve(self.config.seed_buckets(), load_manifest(self.config.bower_path))

    def _resolve(self, buckets: Buckets, manifest: Manifest) -> Catalog:
        cfg = self.config
        Classifier(buckets, self.registry).classify(manifest.entries)
        complete_buckets(buckets, cfg.layout())
        return assemble_catalog(manifest.name or cfg.name, buckets)

    def run(self) -> RunResult:
        cfg = self.config
        # 配置、模板、清单都在查询注册表前确定，配置错误不会留下任何产物
        serializer = cfg.validate()
        buckets = cfg.seed_buckets()
        renderer = Renderer(serializer, cfg.serializer_options, template=cfg.template)
        manifest = load_manifest(cfg.bower_path)
        module_name(manifest.name or cfg.name)

        catalog = self._resolve(buckets, manifest)
        content = renderer.render(
            catalog,
            app_name=cfg.app_name,
            host_url=cfg.host_url,
            js_path=cfg.js_path,
            css_path=cfg.css_path,
        )

        dest = Path(cfg.dest)
        atomic_write(dest, content)
        logger.info("已写出: %s", dest)

        if catalog.unresolved:
            logger.warning("有 %d 个依赖无法解析类型", catalog.unresolved)
        return RunResult(dest=dest, catalog=catalog)
