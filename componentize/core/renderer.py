"""组件描述渲染（Jinja2）

模板通过 serialize 过滤器调用配置的序列化策略，把派生值写成字面量。
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
)

from componentize.core.exceptions import ConfigError, RenderError
from componentize.core.models import Catalog
from componentize.core.serializers import SerializerFunc

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
DEFAULT_TEMPLATE = "component.js.j2"

_NON_WORD = re.compile(r"\W+")


def module_name(name: str) -> str:
    """目录名 → 合法的 JS 标识符，如 @scope/my-app → scope_my_app"""
    ident = _NON_WORD.sub("_", name).strip("_")
    if not ident:
        raise ConfigError(f"无法由名称生成模块名: {name!r}")
    if ident[0].isdigit():
        ident = f"_{ident}"
    return ident


class Renderer:
    """模板渲染器"""

    def __init__(
        self,
        serializer: SerializerFunc,
        serializer_options: dict[str, Any] | None = None,
        template: str = "",
    ) -> None:
        self.serializer = serializer
        self.serializer_options = serializer_options or {}
        loader: BaseLoader
        if template:
            path = Path(template)
            if not path.is_file():
                raise ConfigError(f"模板文件不存在: {template}")
            loader = FileSystemLoader(str(path.parent))
            self.template_name = path.name
        else:
            loader = FileSystemLoader(str(TEMPLATES_DIR))
            self.template_name = DEFAULT_TEMPLATE

        self.env = Environment(
            loader=loader,
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.env.filters["serialize"] = self.serialize

    def serialize(self, value: Any) -> str:
        return self.serializer(value, self.serializer_options)

    def render(self, catalog: Catalog, **context: Any) -> str:
        data = {
            "module_name": module_name(catalog.name),
            "name": catalog.name,
            "deps": catalog.to_dict(),
            "catalog": catalog,
            **context,
        }
        logger.debug("渲染模板: %s", self.template_name)
        try:
            return self.env.get_template(self.template_name).render(**data)
        except TemplateError as exc:
            raise RenderError(f"模板渲染失败 ({self.template_name}): {exc}") from exc
