"""包级 __getattr__ 工厂。

promptreg 各子包在 __init__.py 中以 _SYMBOLS 声明 公开名 → (模块路径, 属性名)，
首次访问公开名时才导入所在模块。例如 `from promptreg.rendering import canonical_stringify`
不会触发 catalog 中 pydantic 模型的构建。
"""

from __future__ import annotations

import importlib
from collections.abc import Callable

__all__ = ["make_lazy_module_getattr"]


def make_lazy_module_getattr(
    symbols: dict[str, tuple[str, str]],
    module_name: str,
) -> Callable[[str], object]:
    """返回供 `__getattr__ = ...` 使用的查找函数；未声明的名字抛 AttributeError。"""

    def _resolve(name: str) -> object:
        try:
            target_module, attr = symbols[name]
        except KeyError:
            raise AttributeError(f"module {module_name!r} has no attribute {name!r}") from None
        return getattr(importlib.import_module(target_module), attr)

    return _resolve
