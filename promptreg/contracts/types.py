"""Prompt 注册表核心数据契约。

本模块定义注册表内跨模块传递的全部值对象：
- PromptDefinition / PromptVersion / VariableDeclaration：prompt 目录数据
- SelectionWhen / SelectionRule：按运行上下文选择版本的规则
- PromptContext：调用方运行时上下文（环境 / 工作区类型 / 租户）
- ResolvedPrompt / RenderResult：get() 与 render() 的返回结构

设计原则：全部为 frozen dataclass，构造后不可变；
序列类字段在构造时统一转为 tuple，保证 provider 持有的目录可被多线程安全共享。
"""

from __future__ import annotations

__all__ = [
    "VariableKind",
    "VariableDeclaration",
    "PromptVersion",
    "SelectionWhen",
    "SelectionRule",
    "PromptDefinition",
    "PromptContext",
    "ResolvedPrompt",
    "RenderResult",
]

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from pydantic import BaseModel

from promptreg.contracts.exceptions import PromptConfigurationError

VariableKind = Literal["text", "block", "json"]


def _as_tuple(value: Sequence[Any] | None) -> tuple[Any, ...] | None:
    if value is None:
        return None
    if isinstance(value, str):
        # 单个字符串按一项处理，避免被拆成字符元组
        return (value,)
    return tuple(value)


@dataclass(frozen=True, slots=True)
class VariableDeclaration:
    """模板变量声明。kind 缺省时由模板中的占位符形式推断。"""

    key: str
    kind: VariableKind | None = None
    description: str = ""


@dataclass(frozen=True, slots=True)
class PromptVersion:
    """单个 prompt 版本：模板正文 + 变量 schema + 变量声明。"""

    version: str
    template: str
    variables_schema: type[BaseModel]
    variables: tuple[VariableDeclaration, ...] = ()
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", _as_tuple(self.variables) or ())
        object.__setattr__(self, "tags", _as_tuple(self.tags) or ())


@dataclass(frozen=True, slots=True)
class SelectionWhen:
    """规则条件；每个字段都是包含列表，None 表示通配。"""

    environments: tuple[str, ...] | None = None
    workspace_kinds: tuple[str, ...] | None = None
    tenant_ids: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "environments", _as_tuple(self.environments))
        object.__setattr__(self, "workspace_kinds", _as_tuple(self.workspace_kinds))
        object.__setattr__(self, "tenant_ids", _as_tuple(self.tenant_ids))


@dataclass(frozen=True, slots=True)
class SelectionRule:
    """(条件, 目标版本, 优先级) 三元组；priority 越大越优先。"""

    version: str
    when: SelectionWhen = field(default_factory=SelectionWhen)
    priority: int = 0


@dataclass(frozen=True, slots=True)
class PromptDefinition:
    """一个命名 prompt 的完整版本化定义。

    不变量（构造时检查）：版本号在同一定义内唯一。
    default_version 与 selection 目标是否存在由选择器在解析时检查，
    以便数据错误在实际使用该 prompt 时以 PromptConfigurationError 暴露。
    """

    id: str
    description: str
    default_version: str
    versions: tuple[PromptVersion, ...]
    selection: tuple[SelectionRule, ...] = ()
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "versions", _as_tuple(self.versions) or ())
        object.__setattr__(self, "selection", _as_tuple(self.selection) or ())
        object.__setattr__(self, "tags", _as_tuple(self.tags) or ())
        seen: set[str] = set()
        for entry in self.versions:
            if entry.version in seen:
                raise PromptConfigurationError(
                    f"duplicate version '{entry.version}' in prompt '{self.id}'",
                    prompt_id=self.id,
                )
            seen.add(entry.version)

    def get_version(self, version: str) -> PromptVersion | None:
        """按版本号查找；不存在返回 None。"""
        for entry in self.versions:
            if entry.version == version:
                return entry
        return None

    def version_ids(self) -> list[str]:
        return [entry.version for entry in self.versions]


@dataclass(frozen=True, slots=True)
class PromptContext:
    """调用方运行时上下文，用于版本选择与租户级覆盖。"""

    environment: str
    workspace_kind: str | None = None
    tenant_id: str | None = None


@dataclass(frozen=True, slots=True)
class ResolvedPrompt:
    """get() 的返回：定义 + 选中的版本 + 模板哈希。"""

    definition: PromptDefinition
    version: PromptVersion
    prompt_hash: str


@dataclass(frozen=True, slots=True)
class RenderResult:
    """render() 的返回，字段全部对调用方可见。

    prompt_hash 只依赖版本号、模板原文与引擎版本；
    render_hash 额外包含规范化后的变量，可用于整次渲染的去重/缓存。
    """

    prompt_id: str
    prompt_version: str
    prompt_hash: str
    render_engine_version: str
    template: str
    content: str
    variables: dict[str, Any]
    render_hash: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
