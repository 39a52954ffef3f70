"""注册表端到端测试：provider 链、版本选择、渲染、哈希、列举。"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import make_definition, make_version
from promptreg.contracts.constants import RENDER_ENGINE_VERSION
from promptreg.contracts.exceptions import (
    PromptConfigurationError,
    PromptNotFoundError,
    SchemaValidationError,
    TemplateContractError,
)
from promptreg.contracts.types import PromptContext
from promptreg.providers.base import PromptProvider
from promptreg.providers.overrides import OverridePromptProvider, PromptOverride
from promptreg.providers.static import StaticPromptProvider
from promptreg.registry import PromptRegistry
from promptreg.rendering.hashing import render_hash, template_hash

INVENTORY_ID = "inventory.extract_product_proposal"
EXPECTED_INVENTORY_CONTENT = (
    "Extract a product proposal from this text.\n\n"
    "Text:\n<<SOURCE_TEXT>>\nNew SKU: Demo\n<<END:SOURCE_TEXT>>"
)


class _NonListingProvider(PromptProvider):
    name = "remote"
    supports_listing = False

    def __init__(self, definition):
        self._definition = definition

    def get(self, prompt_id, context):
        return self._definition if prompt_id == self._definition.id else None


# ── 端到端 ────────────────────────────────────────────────────────────

def test_render_inventory_prompt_end_to_end(default_registry, ctx) -> None:
    result = default_registry.render(INVENTORY_ID, ctx, {"SOURCE_TEXT": "New SKU: Demo"})
    assert result.content == EXPECTED_INVENTORY_CONTENT
    assert result.prompt_id == INVENTORY_ID
    assert result.prompt_version == "v1"
    assert result.render_engine_version == RENDER_ENGINE_VERSION
    assert result.variables == {"SOURCE_TEXT": "New SKU: Demo"}
    assert result.prompt_hash == template_hash("v1", result.template)
    assert result.render_hash == render_hash(result.prompt_hash, result.variables)


def test_prompt_hash_is_stable_across_renders(default_registry, ctx) -> None:
    first = default_registry.render(INVENTORY_ID, ctx, {"SOURCE_TEXT": "New SKU: Demo"})
    second = default_registry.render(INVENTORY_ID, ctx, {"SOURCE_TEXT": "something else"})
    assert first.prompt_hash == second.prompt_hash
    assert first.render_hash != second.render_hash
    assert default_registry.get(INVENTORY_ID, ctx).prompt_hash == first.prompt_hash


def test_render_is_deterministic(default_registry, ctx) -> None:
    runs = [default_registry.render(INVENTORY_ID, ctx, {"SOURCE_TEXT": "x"}) for _ in range(3)]
    assert len({(r.content, r.prompt_hash, r.render_hash) for r in runs}) == 1


def test_empty_source_text_fails_schema_validation(default_registry, ctx) -> None:
    with pytest.raises(SchemaValidationError) as exc_info:
        default_registry.render(INVENTORY_ID, ctx, {"SOURCE_TEXT": ""})
    assert exc_info.value.prompt_id == INVENTORY_ID
    assert exc_info.value.error_stage == "validate"


def test_render_without_variables_fails_schema_validation(default_registry, ctx) -> None:
    with pytest.raises(SchemaValidationError):
        default_registry.render(INVENTORY_ID, ctx)


def test_unknown_prompt_raises_not_found(default_registry, ctx) -> None:
    with pytest.raises(PromptNotFoundError) as exc_info:
        default_registry.get("does.not.exist", ctx)
    assert exc_info.value.prompt_id == "does.not.exist"
    assert exc_info.value.error_code == "prompt_not_found"


def test_result_to_dict(default_registry, ctx) -> None:
    payload = default_registry.render(INVENTORY_ID, ctx, {"SOURCE_TEXT": "abc"}).to_dict()
    assert payload["prompt_id"] == INVENTORY_ID
    assert payload["prompt_version"] == "v1"
    assert payload["render_engine_version"] == RENDER_ENGINE_VERSION
    assert payload["variables"] == {"SOURCE_TEXT": "abc"}


# ── provider 链 ───────────────────────────────────────────────────────

def test_registry_requires_providers() -> None:
    with pytest.raises(ValueError):
        PromptRegistry([])


def test_first_provider_that_answers_wins(ctx) -> None:
    override = make_definition("demo.prompt", versions=[make_version("override {{NAME}}", ["NAME"])])
    static = make_definition("demo.prompt", versions=[make_version("static {{NAME}}", ["NAME"])])
    overrides = OverridePromptProvider([PromptOverride(prompt_id="demo.prompt", definition=override)])
    catalog = StaticPromptProvider([static])

    first = PromptRegistry([overrides, catalog]).render("demo.prompt", ctx, {"NAME": "x"})
    assert first.content == "override x"
    second = PromptRegistry([catalog, overrides]).render("demo.prompt", ctx, {"NAME": "x"})
    assert second.content == "static x"


def test_falls_through_to_next_provider(ctx) -> None:
    overrides = OverridePromptProvider()
    catalog = StaticPromptProvider([make_definition("demo.prompt")])
    result = PromptRegistry([overrides, catalog]).render("demo.prompt", ctx, {"NAME": "Ada"})
    assert result.content == "Hello Ada"


def test_tenant_override_scoped_by_context() -> None:
    tenant_def = make_definition("demo.prompt", versions=[make_version("tenant {{NAME}}", ["NAME"])])
    overrides = OverridePromptProvider(
        [PromptOverride(prompt_id="demo.prompt", definition=tenant_def, tenant_id="t1")]
    )
    registry = PromptRegistry([overrides, StaticPromptProvider([make_definition("demo.prompt")])])
    t1 = registry.render("demo.prompt", PromptContext(environment="test", tenant_id="t1"), {"NAME": "x"})
    t2 = registry.render("demo.prompt", PromptContext(environment="test", tenant_id="t2"), {"NAME": "x"})
    assert t1.content == "tenant x"
    assert t2.content == "Hello x"
    assert t1.prompt_hash != t2.prompt_hash


def test_configuration_error_propagates(ctx) -> None:
    registry = PromptRegistry([StaticPromptProvider([make_definition(default_version="v5")])])
    with pytest.raises(PromptConfigurationError):
        registry.render("test.prompt", ctx, {"NAME": "x"})


def test_contract_error_propagates_with_prompt_id(ctx) -> None:
    broken = make_definition("broken.prompt", versions=[make_version("{{A}}", ["A", "B"])])
    registry = PromptRegistry([StaticPromptProvider([broken])])
    with pytest.raises(TemplateContractError) as exc_info:
        registry.render("broken.prompt", ctx, {"A": "x", "B": "y"})
    assert exc_info.value.prompt_id == "broken.prompt"


# ── 列举 ─────────────────────────────────────────────────────────────

def test_list_merges_providers_first_reporter_wins(ctx) -> None:
    override = make_definition("a.prompt", versions=[make_version("override {{NAME}}", ["NAME"])])
    overrides = OverridePromptProvider([PromptOverride(prompt_id="a.prompt", definition=override)])
    catalog = StaticPromptProvider([make_definition("a.prompt"), make_definition("b.prompt")])
    listed = PromptRegistry([overrides, catalog]).list(ctx)
    assert [d.id for d in listed] == ["a.prompt", "b.prompt"]
    assert listed[0] is override


class _GetOnlyProvider(PromptProvider):
    """只实现必需的 get()，不声明列举能力。"""

    def __init__(self, definition):
        self._definition = definition

    def get(self, prompt_id, context):
        return self._definition if prompt_id == self._definition.id else None


def test_list_ignores_get_only_provider(ctx) -> None:
    get_only = _GetOnlyProvider(make_definition("remote.prompt"))
    assert get_only.supports_listing is False
    assert get_only.list(ctx) == []
    registry = PromptRegistry([get_only, StaticPromptProvider([make_definition("b.prompt")])])
    assert [d.id for d in registry.list(ctx)] == ["b.prompt"]
    assert registry.get("remote.prompt", ctx).definition.id == "remote.prompt"


def test_list_skips_non_listing_providers(ctx) -> None:
    remote = _NonListingProvider(make_definition("remote.prompt"))
    registry = PromptRegistry([remote, StaticPromptProvider([make_definition("b.prompt")])])
    assert [d.id for d in registry.list(ctx)] == ["b.prompt"]
    # 不支持列举的 provider 仍然可以被 get/render 命中
    assert registry.render("remote.prompt", ctx, {"NAME": "x"}).content == "Hello x"


def test_default_registry_lists_whole_catalog(default_registry) -> None:
    ids = {d.id for d in default_registry.list()}
    assert {INVENTORY_ID, "crm.extract_party", "copilot.chat_system"} <= ids


# ── 并发 ─────────────────────────────────────────────────────────────

def test_concurrent_renders_share_registry(default_registry, ctx) -> None:
    def _render(i: int) -> str:
        return default_registry.render(INVENTORY_ID, ctx, {"SOURCE_TEXT": f"item {i}"}).content

    with ThreadPoolExecutor(max_workers=8) as pool:
        contents = list(pool.map(_render, range(64)))
    for i, content in enumerate(contents):
        assert f"<<SOURCE_TEXT>>\nitem {i}\n<<END:SOURCE_TEXT>>" in content
