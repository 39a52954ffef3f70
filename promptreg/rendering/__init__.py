"""
渲染层：占位符扫描、模板渲染、内容哈希。

模块概览：
- placeholders.py : scan_placeholders — 显式扫描 {{KEY}} / {{{KEY}}}
- renderer.py     : render_template — 声明一致性 + schema 校验 + 按类型替换
- hashing.py      : canonical_stringify / template_hash / render_hash
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from promptreg_utils.lazy_import import make_lazy_module_getattr

if TYPE_CHECKING:
    from promptreg.rendering.hashing import canonical_stringify, render_hash, template_hash
    from promptreg.rendering.placeholders import PlaceholderOccurrence, scan_placeholders
    from promptreg.rendering.renderer import RenderedTemplate, render_template

__all__ = [
    "canonical_stringify",
    "template_hash",
    "render_hash",
    "PlaceholderOccurrence",
    "scan_placeholders",
    "RenderedTemplate",
    "render_template",
]

_SYMBOLS: dict[str, tuple[str, str]] = {
    "canonical_stringify": ("promptreg.rendering.hashing", "canonical_stringify"),
    "template_hash": ("promptreg.rendering.hashing", "template_hash"),
    "render_hash": ("promptreg.rendering.hashing", "render_hash"),
    "PlaceholderOccurrence": ("promptreg.rendering.placeholders", "PlaceholderOccurrence"),
    "scan_placeholders": ("promptreg.rendering.placeholders", "scan_placeholders"),
    "RenderedTemplate": ("promptreg.rendering.renderer", "RenderedTemplate"),
    "render_template": ("promptreg.rendering.renderer", "render_template"),
}
__getattr__ = make_lazy_module_getattr(_SYMBOLS, __name__)
