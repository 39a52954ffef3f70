"""
Provider 链：注册表按构造顺序依次查询，首个非 None 结果胜出。

模块概览：
- base.py      : PromptProvider — provider 契约
- static.py    : StaticPromptProvider — 编译期不可变目录
- overrides.py : OverridePromptProvider / PromptOverride — 租户/全局覆盖（整体替换发布）
- loader.py    : load_overrides — 从 YAML/JSON 文件加载覆盖条目
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from promptreg_utils.lazy_import import make_lazy_module_getattr

if TYPE_CHECKING:
    from promptreg.providers.base import PromptProvider
    from promptreg.providers.loader import load_overrides
    from promptreg.providers.overrides import OverridePromptProvider, PromptOverride
    from promptreg.providers.static import StaticPromptProvider

__all__ = [
    "PromptProvider",
    "StaticPromptProvider",
    "OverridePromptProvider",
    "PromptOverride",
    "load_overrides",
]

_SYMBOLS: dict[str, tuple[str, str]] = {
    "PromptProvider": ("promptreg.providers.base", "PromptProvider"),
    "StaticPromptProvider": ("promptreg.providers.static", "StaticPromptProvider"),
    "OverridePromptProvider": ("promptreg.providers.overrides", "OverridePromptProvider"),
    "PromptOverride": ("promptreg.providers.overrides", "PromptOverride"),
    "load_overrides": ("promptreg.providers.loader", "load_overrides"),
}
__getattr__ = make_lazy_module_getattr(_SYMBOLS, __name__)
