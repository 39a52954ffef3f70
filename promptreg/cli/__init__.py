"""CLI entrypoints for inspecting and rendering prompts."""

from __future__ import annotations

from typing import TYPE_CHECKING
from promptreg_utils.lazy_import import make_lazy_module_getattr

if TYPE_CHECKING:
    from promptreg.cli.runner import build_registry, main

__all__ = ["build_registry", "main"]

_SYMBOLS: dict[str, tuple[str, str]] = {
    "build_registry": ("promptreg.cli.runner", "build_registry"),
    "main": ("promptreg.cli.runner", "main"),
}

__getattr__ = make_lazy_module_getattr(_SYMBOLS, __name__)
