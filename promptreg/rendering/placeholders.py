"""占位符扫描器 — 显式状态扫描，而非正则替换。

两种占位符：
  {{KEY}}    文本形式（默认 text 类）
  {{{KEY}}}  区块形式（默认 block 类）

每个位置先判断三括号再判断双括号，避免把 {{{X}}} 误读为 "{{" + "{X" + "}}"。
KEY 必须匹配 [A-Za-z_][A-Za-z0-9_]*。以下情况视为模板格式错误（TemplateContractError）：
  - "{{" 开头但无法构成完整占位符（未闭合、键名非法、四重括号等）
  - 占位符闭合后紧跟多余的 "}"，或占位符之外的字面文本中出现 "}}"
  - 同一个 KEY 在同一模板中混用两种括号形式
单个 "{" / "}" 不受影响，模板中可以自由书写 {a,b} 之类的 JSON 结构说明。
"""

from __future__ import annotations

__all__ = [
    "PlaceholderOccurrence",
    "scan_placeholders",
    "placeholder_forms",
    "find_residual_placeholders",
]

import re
from dataclasses import dataclass

from promptreg.contracts.exceptions import TemplateContractError

_KEY_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
# 扫描器会识别为占位符的任意片段（两种形式）
_RESIDUAL_PATTERN = re.compile(r"\{\{\{?[A-Za-z_][A-Za-z0-9_]*\}\}\}?")


@dataclass(frozen=True, slots=True)
class PlaceholderOccurrence:
    """模板中一次占位符出现；start/end 为原模板中的切片边界。"""

    key: str
    is_block: bool
    start: int
    end: int

    @property
    def token(self) -> str:
        return "{{{" + self.key + "}}}" if self.is_block else "{{" + self.key + "}}"


def _check_literal(template: str, start: int, end: int) -> None:
    stray = template.find("}}", start, end)
    if stray >= 0:
        raise TemplateContractError(f"unbalanced closing braces at offset {stray}")


def scan_placeholders(template: str) -> list[PlaceholderOccurrence]:
    """从左到右扫描模板，返回按出现顺序排列的占位符列表。

    Raises
    ------
    TemplateContractError
        括号格式错误或同一键混用两种形式。
    """
    occurrences: list[PlaceholderOccurrence] = []
    forms: dict[str, bool] = {}
    pos = 0
    while True:
        start = template.find("{{", pos)
        _check_literal(template, pos, start if start >= 0 else len(template))
        if start < 0:
            break
        is_block = template.startswith("{{{", start)
        open_len = 3 if is_block else 2
        closer = "}" * open_len
        close_at = template.find(closer, start + open_len)
        if close_at < 0:
            raise TemplateContractError(f"unclosed placeholder at offset {start}")
        key = template[start + open_len:close_at]
        end = close_at + open_len
        if not _KEY_PATTERN.match(key):
            raise TemplateContractError(
                f"malformed placeholder {template[start:end]!r} at offset {start}"
            )
        if template.startswith("}", end):
            raise TemplateContractError(
                f"unbalanced braces after placeholder {template[start:end]!r} at offset {start}"
            )
        previous = forms.setdefault(key, is_block)
        if previous != is_block:
            raise TemplateContractError(
                f"placeholder '{key}' is used in both {{{{...}}}} and {{{{{{...}}}}}} forms"
            )
        occurrences.append(PlaceholderOccurrence(key=key, is_block=is_block, start=start, end=end))
        pos = end
    return occurrences


def placeholder_forms(occurrences: list[PlaceholderOccurrence]) -> dict[str, bool]:
    """key -> is_block，按首次出现顺序。"""
    forms: dict[str, bool] = {}
    for occ in occurrences:
        forms.setdefault(occ.key, occ.is_block)
    return forms


def find_residual_placeholders(text: str) -> list[str]:
    """返回文本中所有看起来像占位符的片段（用于渲染后的兜底检查）。"""
    return _RESIDUAL_PATTERN.findall(text)
