"""静态目录测试：每个版本都满足声明一致性，代表性 prompt 的渲染结果。"""

import json

import pytest

from promptreg.catalog import build_default_catalog, create_default_registry
from promptreg.contracts.exceptions import SchemaValidationError
from promptreg.contracts.types import PromptContext
from promptreg.providers.overrides import OverridePromptProvider, PromptOverride
from promptreg.rendering.placeholders import placeholder_forms, scan_placeholders

CATALOG = build_default_catalog()


@pytest.mark.parametrize(
    "definition, version",
    [(d, v) for d in CATALOG for v in d.versions],
    ids=[f"{d.id}@{v.version}" for d in CATALOG for v in d.versions],
)
def test_catalog_versions_declare_exactly_their_placeholders(definition, version) -> None:
    forms = placeholder_forms(scan_placeholders(version.template))
    declared = [v.key for v in version.variables]
    assert len(declared) == len(set(declared))
    assert set(forms) == set(declared)
    schema_fields = set(version.variables_schema.model_fields)
    assert set(declared) <= schema_fields


def test_catalog_ids_are_unique() -> None:
    ids = [d.id for d in CATALOG]
    assert len(ids) == len(set(ids))


def test_catalog_default_versions_exist() -> None:
    for definition in CATALOG:
        assert definition.get_version(definition.default_version) is not None
        for rule in definition.selection:
            assert definition.get_version(rule.version) is not None


# ── CRM ──────────────────────────────────────────────────────────────

def test_extract_party_optional_line_defaults_to_empty(default_registry, ctx) -> None:
    result = default_registry.render("crm.extract_party", ctx, {"SOURCE_TEXT": "ACME GmbH, Berlin"})
    assert result.variables == {"SOURCE_TEXT": "ACME GmbH, Berlin", "SUGGESTED_ROLES_LINE": ""}
    assert result.content.endswith("Text:\n<<SOURCE_TEXT>>\nACME GmbH, Berlin\n<<END:SOURCE_TEXT>>")


def test_extract_party_suggested_roles_is_single_line(default_registry, ctx) -> None:
    result = default_registry.render(
        "crm.extract_party",
        ctx,
        {"SOURCE_TEXT": "x", "SUGGESTED_ROLES_LINE": "Suggested roles:\nCUSTOMER\nSUPPLIER"},
    )
    assert "Suggested roles: CUSTOMER SUPPLIER\n" in result.content


def test_activity_parse_requires_language(default_registry, ctx) -> None:
    with pytest.raises(SchemaValidationError):
        default_registry.render("crm.ai.activity_parse", ctx, {"USER_TEXT": "called Bob"})


# ── 发票 ──────────────────────────────────────────────────────────────

def test_reminder_email_system_defaults(default_registry, ctx) -> None:
    result = default_registry.render("invoices.reminder_email.system", ctx, {})
    assert "Language: en\n" in result.content
    assert "Tone: normal\n" in result.content


def test_reminder_email_system_rejects_unknown_tone(default_registry, ctx) -> None:
    with pytest.raises(SchemaValidationError) as exc_info:
        default_registry.render("invoices.reminder_email.system", ctx, {"TONE": "angry"})
    assert exc_info.value.issues[0]["loc"] == ["TONE"]


def test_reminder_email_user_canonicalizes_facts(default_registry, ctx) -> None:
    facts = {"invoiceNumber": "INV-7", "amountDue": 120.5, "customer": {"name": "Ada"}}
    result = default_registry.render("invoices.reminder_email.user", ctx, {"FACTS_JSON": facts})
    expected = json.dumps(facts, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    assert result.content == f"Invoice facts (JSON):\n{expected}\n\nDraft the reminder email."


def test_reminder_email_user_accepts_serialized_json(default_registry, ctx) -> None:
    result = default_registry.render("invoices.reminder_email.user", ctx, {"FACTS_JSON": '{"x": 1}'})
    assert '\n{"x": 1}\n' in result.content


# ── Copilot 版本选择 ──────────────────────────────────────────────────

def test_copilot_company_workspace_gets_v2(default_registry) -> None:
    ctx = PromptContext(environment="production", workspace_kind="COMPANY")
    result = default_registry.render(
        "copilot.chat_system",
        ctx,
        {"WORKSPACE_NAME": "ACME", "ENABLED_MODULES": "crm\ninvoices"},
    )
    assert result.prompt_version == "v2"
    assert result.content.endswith("<<ENABLED_MODULES>>\ncrm\ninvoices\n<<END:ENABLED_MODULES>>")


def test_copilot_personal_workspace_falls_back_to_v1(default_registry) -> None:
    ctx = PromptContext(environment="production", workspace_kind="PERSONAL")
    result = default_registry.render("copilot.chat_system", ctx, {"WORKSPACE_NAME": "Home"})
    assert result.prompt_version == "v1"
    assert result.variables == {"WORKSPACE_NAME": "Home", "LANGUAGE": "en"}


def test_copilot_v2_requires_enabled_modules(default_registry) -> None:
    ctx = PromptContext(environment="production", workspace_kind="COMPANY")
    with pytest.raises(SchemaValidationError):
        default_registry.render("copilot.chat_system", ctx, {"WORKSPACE_NAME": "ACME"})


# ── 默认注册表装配 ────────────────────────────────────────────────────

def test_create_default_registry_override_ordering(ctx) -> None:
    catalog_def = next(d for d in CATALOG if d.id == "crm.extract_party")
    overrides = OverridePromptProvider([PromptOverride(prompt_id="crm.extract_party", definition=catalog_def)])

    first = create_default_registry(overrides)
    assert first.providers[0] is overrides
    static_first = create_default_registry(overrides, overrides_first=False)
    assert static_first.providers[1] is overrides
    assert len(create_default_registry().providers) == 1
