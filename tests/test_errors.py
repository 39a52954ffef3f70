import pytest

from promptreg.contracts.error import classify_error, describe_error
from promptreg.contracts.exceptions import (
    PromptConfigurationError,
    PromptNotFoundError,
    PromptRegistryError,
    SchemaValidationError,
    TemplateContractError,
)


@pytest.mark.parametrize(
    "exc, expected",
    [
        (PromptNotFoundError("a.b"), ("not_found", "lookup", "prompt_not_found")),
        (PromptConfigurationError("bad"), ("configuration_failure", "select", "prompt_configuration_error")),
        (SchemaValidationError("bad"), ("schema_failure", "validate", "schema_validation_error")),
        (TemplateContractError("bad"), ("template_contract_failure", "template", "template_contract_error")),
    ],
)
def test_exception_metadata(exc, expected) -> None:
    assert isinstance(exc, PromptRegistryError)
    assert (exc.error_type, exc.error_stage, exc.error_code) == expected
    # 消息前缀与 classify_error 的关键词一致，序列化后仍可还原分类
    assert classify_error(str(exc)) == expected


def test_classify_error_empty_and_unknown() -> None:
    assert classify_error("") == ("", "", "")
    assert classify_error("connection reset") == ("unknown_error", "unknown", "unknown_error")


def test_describe_schema_error_includes_issues() -> None:
    issues = [{"loc": ["SOURCE_TEXT"], "msg": "too short", "type": "string_too_short"}]
    fields = describe_error(SchemaValidationError("invalid", prompt_id="x.y", issues=issues))
    assert fields["error_code"] == "schema_validation_error"
    assert fields["prompt_id"] == "x.y"
    assert fields["issues"] == issues


def test_describe_registry_error_without_issues_key() -> None:
    fields = describe_error(PromptNotFoundError("x.y"))
    assert "issues" not in fields
    assert fields["error_detail"].startswith("prompt_not_found:")


def test_describe_foreign_exception() -> None:
    fields = describe_error(RuntimeError("boom"))
    assert fields == {
        "error_type": "unknown_error",
        "error_stage": "unknown",
        "error_code": "unknown_error",
        "error_detail": "RuntimeError: boom",
        "prompt_id": None,
    }
