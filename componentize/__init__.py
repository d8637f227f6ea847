"""componentize - 前端依赖清单解析与组件描述生成"""

__version__ = "0.3.0"
