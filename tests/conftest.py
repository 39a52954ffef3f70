import sys
from pathlib import Path

import pytest
from pydantic import create_model

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from promptreg.contracts.types import (  # noqa: E402
    PromptContext,
    PromptDefinition,
    PromptVersion,
    SelectionRule,
    VariableDeclaration,
)

# ── 共享 helper ──────────────────────────────────────────────────────


def make_version(
    template: str,
    keys: list[str] | tuple[str, ...] = (),
    *,
    version: str = "v1",
    kinds: dict[str, str] | None = None,
    schema=None,
) -> PromptVersion:
    """构造测试用 PromptVersion；schema 缺省时每个 key 都是必填字符串。"""
    kinds = kinds or {}
    if schema is None:
        schema = create_model(f"Vars_{version}", **{k: (str, ...) for k in keys})
    return PromptVersion(
        version=version,
        template=template,
        variables_schema=schema,
        variables=tuple(VariableDeclaration(key=k, kind=kinds.get(k)) for k in keys),
    )


def make_definition(
    prompt_id: str = "test.prompt",
    *,
    versions: list[PromptVersion] | None = None,
    default_version: str = "v1",
    selection: list[SelectionRule] | None = None,
) -> PromptDefinition:
    return PromptDefinition(
        id=prompt_id,
        description="test prompt",
        default_version=default_version,
        versions=tuple(versions or [make_version("Hello {{NAME}}", ["NAME"])]),
        selection=tuple(selection or ()),
        tags=("test",),
    )


# ── 共享 fixture ──────────────────────────────────────────────────────


@pytest.fixture
def ctx() -> PromptContext:
    return PromptContext(environment="test")


@pytest.fixture
def default_registry():
    from promptreg.catalog import create_default_registry

    return create_default_registry()
