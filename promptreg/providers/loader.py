"""覆盖定义文件加载器（YAML / JSON）。

文件结构：
  overrides:
    - prompt_id: crm.extract_party
      tenant_id: tenant-a          # 可选；省略表示全局覆盖
      definition:
        description: "..."
        default_version: v2
        tags: [crm]
        selection:                 # 可选
          - version: v2
            priority: 10
            when: {environments: [production], workspace_kinds: [COMPANY]}
        versions:
          - version: v2
            template: "Text:\\n{{{SOURCE_TEXT}}}"
            variables:
              - {key: SOURCE_TEXT, kind: block}
            schema:                # 可选；省略时每个声明变量均为必填字符串
              SOURCE_TEXT: {type: string, min_length: 1}

schema 字段规格：type(string|integer|number|boolean|object|array，默认 string)、
required（有 default 时默认 false，否则 true）、default、min_length、max_length、description。
规格通过 pydantic.create_model 编译为 variables_schema 模型类。

结构错误统一抛出 PromptConfigurationError；文件在加载时一次性完成校验，
得到的 PromptOverride 列表可直接交给 OverridePromptProvider.replace_entries()。
"""

from __future__ import annotations

__all__ = ["build_variables_schema", "parse_definition", "load_overrides"]

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, create_model

from promptreg.config import load_json, load_yaml
from promptreg.contracts.constants import VARIABLE_KINDS
from promptreg.contracts.exceptions import PromptConfigurationError
from promptreg.contracts.types import (
    PromptDefinition,
    PromptVersion,
    SelectionRule,
    SelectionWhen,
    VariableDeclaration,
)
from promptreg.providers.overrides import PromptOverride

logger = logging.getLogger(__name__)

_TYPE_MAP: dict[str, Any] = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
    "object": dict[str, Any],
    "array": list[Any],
}
_SIZED_TYPES = {"string", "object", "array"}


def _schema_model_name(prompt_id: str, version: str) -> str:
    cleaned = "".join(ch if ch.isalnum() else "_" for ch in f"{prompt_id}_{version}")
    return f"Vars_{cleaned}"


def build_variables_schema(
    fields: dict[str, dict[str, Any]],
    *,
    model_name: str = "PromptVariables",
) -> type[BaseModel]:
    """把字段规格字典编译为 pydantic 模型类。"""
    definitions: dict[str, Any] = {}
    for name, spec in fields.items():
        spec = dict(spec or {})
        if name.startswith("_"):
            raise PromptConfigurationError(f"schema field '{name}' must not start with '_'")
        type_name = str(spec.get("type", "string"))
        if type_name not in _TYPE_MAP:
            raise PromptConfigurationError(
                f"schema field '{name}' has unknown type '{type_name}'. Expected one of {sorted(_TYPE_MAP)}"
            )
        has_default = "default" in spec
        required = bool(spec.get("required", not has_default))
        constraints: dict[str, Any] = {}
        for bound in ("min_length", "max_length"):
            if spec.get(bound) is not None:
                if type_name not in _SIZED_TYPES:
                    raise PromptConfigurationError(f"schema field '{name}': {bound} requires a sized type")
                constraints[bound] = int(spec[bound])
        if spec.get("description"):
            constraints["description"] = str(spec["description"])

        annotation = _TYPE_MAP[type_name]
        if required:
            definitions[name] = (annotation, Field(..., **constraints))
        else:
            definitions[name] = (Optional[annotation], Field(spec.get("default"), **constraints))
    return create_model(
        model_name,
        __config__=ConfigDict(protected_namespaces=()),
        **definitions,
    )


def _require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise PromptConfigurationError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _require_list(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise PromptConfigurationError(f"{where} must be a list, got {type(value).__name__}")
    return value


def _parse_version(prompt_id: str, raw: Any, index: int) -> PromptVersion:
    raw = _require_mapping(raw, f"version #{index} of '{prompt_id}'")
    version_id = str(raw["version"])
    where = f"{prompt_id}@{version_id}"
    declarations: list[VariableDeclaration] = []
    for item in _require_list(raw.get("variables"), f"variables of {where}"):
        if isinstance(item, str):
            item = {"key": item}
        item = _require_mapping(item, f"variable entry of {where}")
        kind = item.get("kind")
        if kind is not None and kind not in VARIABLE_KINDS:
            raise PromptConfigurationError(
                f"variable '{item.get('key')}' of {where} has unknown kind '{kind}'",
                prompt_id=prompt_id,
            )
        declarations.append(
            VariableDeclaration(key=str(item["key"]), kind=kind, description=str(item.get("description", "")))
        )
    schema_fields = raw.get("schema")
    if schema_fields is None:
        schema_fields = {d.key: {"type": "string"} for d in declarations}
    schema_fields = _require_mapping(schema_fields, f"schema of {where}")
    for name, field_spec in schema_fields.items():
        if field_spec is not None:
            _require_mapping(field_spec, f"schema field '{name}' of {where}")
    schema = build_variables_schema(dict(schema_fields), model_name=_schema_model_name(prompt_id, version_id))
    return PromptVersion(
        version=version_id,
        template=str(raw["template"]),
        variables_schema=schema,
        variables=tuple(declarations),
        description=str(raw.get("description", "")),
        tags=tuple(_require_list(raw.get("tags"), f"tags of {where}")),
    )


def _parse_rule(prompt_id: str, raw: Any, index: int) -> SelectionRule:
    raw = _require_mapping(raw, f"selection rule #{index} of '{prompt_id}'")
    when = _require_mapping(raw.get("when") or {}, f"'when' of selection rule #{index} of '{prompt_id}'")
    unknown = set(when) - {"environments", "workspace_kinds", "tenant_ids"}
    if unknown:
        raise PromptConfigurationError(f"selection rule has unknown conditions: {sorted(unknown)}")
    return SelectionRule(
        version=str(raw["version"]),
        priority=int(raw.get("priority", 0)),
        when=SelectionWhen(
            environments=when.get("environments"),
            workspace_kinds=when.get("workspace_kinds"),
            tenant_ids=when.get("tenant_ids"),
        ),
    )


def parse_definition(prompt_id: str, raw: Any) -> PromptDefinition:
    """从映射构建 PromptDefinition（纯函数，不修改输入）。

    任何结构问题（节点类型不符、缺少字段、取值无法转换）都以
    PromptConfigurationError 抛出，并带上 prompt_id。
    """
    try:
        raw = _require_mapping(raw, f"definition of '{prompt_id}'")
        declared_id = raw.get("id", prompt_id)
        if declared_id != prompt_id:
            raise PromptConfigurationError(
                f"definition id '{declared_id}' does not match override prompt_id '{prompt_id}'"
            )
        versions = tuple(
            _parse_version(prompt_id, v, idx)
            for idx, v in enumerate(_require_list(raw["versions"], f"versions of '{prompt_id}'"))
        )
        if not versions:
            raise PromptConfigurationError(f"prompt '{prompt_id}' has no versions")
        return PromptDefinition(
            id=prompt_id,
            description=str(raw.get("description", "")),
            default_version=str(raw.get("default_version", versions[0].version)),
            versions=versions,
            selection=tuple(
                _parse_rule(prompt_id, r, idx)
                for idx, r in enumerate(_require_list(raw.get("selection"), f"selection of '{prompt_id}'"))
            ),
            tags=tuple(_require_list(raw.get("tags"), f"tags of '{prompt_id}'")),
        )
    except PromptConfigurationError as exc:
        if exc.prompt_id is None:
            exc.prompt_id = prompt_id
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise PromptConfigurationError(
            f"invalid definition for '{prompt_id}': {type(exc).__name__}: {exc}",
            prompt_id=prompt_id,
        ) from exc


def _read_document(path: Path) -> dict[str, Any]:
    # YAML 语法错误与 JSON 解析错误（ValueError 子类）统一归入配置错误
    try:
        if path.suffix.lower() == ".json":
            return load_json(path)
        return load_yaml(path)
    except (ValueError, yaml.YAMLError) as exc:
        raise PromptConfigurationError(f"unreadable overrides file {path}: {exc}") from exc


def load_overrides(path: str | Path) -> list[PromptOverride]:
    """从 YAML/JSON 文件加载覆盖条目。

    Raises
    ------
    FileNotFoundError
        文件不存在。
    PromptConfigurationError
        文件无法解析或结构不合法。
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Overrides file not found: {file_path}")
    document = _read_document(file_path)

    entries: list[PromptOverride] = []
    for idx, item in enumerate(_require_list(document.get("overrides"), f"'overrides' in {file_path}")):
        if not isinstance(item, Mapping) or "prompt_id" not in item or "definition" not in item:
            raise PromptConfigurationError(
                f"override #{idx} in {file_path} must contain 'prompt_id' and 'definition'"
            )
        prompt_id = str(item["prompt_id"])
        tenant_id = item.get("tenant_id")
        entries.append(
            PromptOverride(
                prompt_id=prompt_id,
                tenant_id=str(tenant_id) if tenant_id is not None else None,
                definition=parse_definition(prompt_id, item["definition"]),
            )
        )
    logger.info("loaded %d prompt overrides from %s", len(entries), file_path)
    return entries
