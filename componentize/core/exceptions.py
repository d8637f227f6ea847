"""统一异常体系

所有业务异常继承 ComponentizeError，替代散落的 ValueError / RuntimeError。
CLI 层可据此输出友好提示。
"""

from __future__ import annotations


class ComponentizeError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(ComponentizeError):
    """配置缺失或内容无效（致命，输出前中止）"""

    code = "CONFIG_ERROR"


class RegistryError(ComponentizeError):
    """包注册表查询失败（仅在 RegistryClient 内部抛出并消化）"""

    code = "REGISTRY_ERROR"

    def __init__(self, message: str, name: str = "") -> None:
        super().__init__(message)
        self.name = name


class RenderError(ComponentizeError):
    """模板编译或渲染失败"""

    code = "RENDER_ERROR"
