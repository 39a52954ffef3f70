"""模板渲染器 — 占位符契约检查、变量校验、按类型替换。

渲染管线（任一步失败即抛错，不存在降级渲染）：
  1. 扫描占位符（格式错误 → TemplateContractError）
  2. 声明一致性：声明的键集合必须与模板占位符键集合完全相同
  3. variables_schema 校验/默认值填充（失败 → SchemaValidationError，不做任何替换）
  4. 按 kind 渲染每个变量值：
       text  → 字符串化，换行序列折叠为单个空格，去首尾空白
       block → 原样字符串化，包裹为 <<KEY>>\\n值\\n<<END:KEY>>
       json  → 字符串原样透传，其他值走 canonical_stringify
  5. 基于扫描结果单次拼接输出（替换进去的值不会被再次替换）
  6. 兜底检查：输出中残留任何占位符形态的片段 → TemplateContractError
     注意：调用方变量值本身包含 {{X}} 形态文本时同样会触发此检查。
"""

from __future__ import annotations

__all__ = ["RenderedTemplate", "render_template", "render_value", "resolve_kind"]

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from promptreg.contracts.constants import BLOCK_END_TEMPLATE, BLOCK_START_TEMPLATE
from promptreg.contracts.exceptions import SchemaValidationError, TemplateContractError
from promptreg.contracts.types import PromptVersion, VariableDeclaration, VariableKind
from promptreg.rendering.hashing import canonical_stringify
from promptreg.rendering.placeholders import (
    PlaceholderOccurrence,
    find_residual_placeholders,
    placeholder_forms,
    scan_placeholders,
)

logger = logging.getLogger(__name__)

_NEWLINE_RUN = re.compile(r"[\r\n]+")


@dataclass(frozen=True, slots=True)
class RenderedTemplate:
    content: str
    variables: dict[str, Any]


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return canonical_stringify(value)
    return str(value)


def resolve_kind(declaration: VariableDeclaration, is_block_form: bool) -> VariableKind:
    """显式 kind 优先；否则按占位符形式推断（三括号 → block，双括号 → text）。"""
    if declaration.kind is not None:
        return declaration.kind
    return "block" if is_block_form else "text"


def render_value(key: str, value: Any, kind: VariableKind) -> str:
    """按变量类型把值渲染为最终插入模板的文本。"""
    if kind == "text":
        return _NEWLINE_RUN.sub(" ", _stringify(value)).strip()
    if kind == "block":
        start = BLOCK_START_TEMPLATE.format(key=key)
        end = BLOCK_END_TEMPLATE.format(key=key)
        return f"{start}\n{_stringify(value)}\n{end}"
    if kind == "json":
        if isinstance(value, str):
            return value
        return canonical_stringify(value)
    raise TemplateContractError(f"unknown variable kind '{kind}' for '{key}'")


def _check_declarations(
    declarations: tuple[VariableDeclaration, ...],
    forms: dict[str, bool],
) -> None:
    declared: list[str] = [d.key for d in declarations]
    duplicates = sorted({k for k in declared if declared.count(k) > 1})
    if duplicates:
        raise TemplateContractError(f"variables declared more than once: {duplicates}")
    declared_set = set(declared)
    placeholder_set = set(forms)
    undeclared = sorted(placeholder_set - declared_set)
    unused = sorted(declared_set - placeholder_set)
    if undeclared or unused:
        parts = []
        if undeclared:
            parts.append(f"placeholders without declaration: {undeclared}")
        if unused:
            parts.append(f"declared variables without placeholder: {unused}")
        raise TemplateContractError("; ".join(parts))


def _validate_variables(
    schema: type[BaseModel],
    raw_variables: Mapping[str, Any] | None,
) -> dict[str, Any]:
    if raw_variables is None:
        raw_variables = {}
    if not isinstance(raw_variables, Mapping):
        raise SchemaValidationError(
            f"variables must be a mapping, got {type(raw_variables).__name__}",
            issues=[{"loc": [], "msg": "Input should be a valid dictionary", "type": "dict_type"}],
        )
    try:
        parsed = schema.model_validate(dict(raw_variables))
    except ValidationError as exc:
        issues = [
            {"loc": [str(part) for part in err["loc"]], "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        summary = "; ".join(f"{'.'.join(i['loc']) or '<root>'}: {i['msg']}" for i in issues)
        raise SchemaValidationError(summary, issues=issues) from exc
    return parsed.model_dump(mode="json")


def _substitute(
    template: str,
    occurrences: list[PlaceholderOccurrence],
    rendered: dict[str, str],
) -> str:
    parts: list[str] = []
    cursor = 0
    for occ in occurrences:
        parts.append(template[cursor:occ.start])
        parts.append(rendered[occ.key])
        cursor = occ.end
    parts.append(template[cursor:])
    return "".join(parts)


def render_template(
    version: PromptVersion,
    raw_variables: Mapping[str, Any] | None,
    *,
    prompt_id: str | None = None,
) -> RenderedTemplate:
    """对单个 prompt 版本执行完整渲染管线。

    Parameters
    ----------
    version : PromptVersion
        已由选择器选中的版本。
    raw_variables : Mapping | None
        调用方原始变量，先经 variables_schema 校验。
    prompt_id : str | None
        仅用于错误信息与异常元数据。

    Raises
    ------
    TemplateContractError
        占位符格式错误、声明不一致或渲染后残留占位符。
    SchemaValidationError
        变量未通过 schema 校验。
    """
    try:
        occurrences = scan_placeholders(version.template)
        forms = placeholder_forms(occurrences)
        _check_declarations(version.variables, forms)
        validated = _validate_variables(version.variables_schema, raw_variables)

        rendered: dict[str, str] = {}
        for declaration in version.variables:
            if declaration.key not in validated:
                raise TemplateContractError(
                    f"declared variable '{declaration.key}' is not produced by variables_schema"
                )
            kind = resolve_kind(declaration, forms[declaration.key])
            rendered[declaration.key] = render_value(declaration.key, validated[declaration.key], kind)

        content = _substitute(version.template, occurrences, rendered)
        residual = find_residual_placeholders(content)
        if residual:
            raise TemplateContractError(
                f"unresolved placeholder-shaped tokens after substitution: {sorted(set(residual))}"
            )
    except (TemplateContractError, SchemaValidationError) as exc:
        if exc.prompt_id is None:
            exc.prompt_id = prompt_id
        raise

    logger.debug(
        "rendered prompt %s@%s (placeholders=%d, chars=%d)",
        prompt_id, version.version, len(occurrences), len(content),
    )
    return RenderedTemplate(content=content, variables=validated)
