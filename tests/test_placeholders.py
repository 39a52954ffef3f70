"""占位符扫描器测试：两种形式、顺序、重复出现与格式错误。"""

import pytest

from promptreg.contracts.exceptions import TemplateContractError
from promptreg.rendering.placeholders import (
    find_residual_placeholders,
    placeholder_forms,
    scan_placeholders,
)


def test_scan_detects_both_forms_in_order() -> None:
    occ = scan_placeholders("A {{X}} B {{{Y}}} C {{X}}")
    assert [(o.key, o.is_block) for o in occ] == [("X", False), ("Y", True), ("X", False)]
    assert occ[1].token == "{{{Y}}}"
    assert occ[0].token == "{{X}}"


def test_triple_brace_is_not_misread_as_double() -> None:
    occ = scan_placeholders("{{{SOURCE_TEXT}}}")
    assert len(occ) == 1
    assert occ[0].key == "SOURCE_TEXT"
    assert occ[0].is_block is True
    assert (occ[0].start, occ[0].end) == (0, len("{{{SOURCE_TEXT}}}"))


def test_adjacent_placeholders() -> None:
    occ = scan_placeholders("{{A}}{{{B}}}{{C}}")
    assert [o.key for o in occ] == ["A", "B", "C"]


def test_template_without_placeholders() -> None:
    assert scan_placeholders("plain text") == []


def test_single_braces_are_literal_text() -> None:
    template = "summary = {situation,lastInteraction}\nkeyEntities[] = {kind,value,confidence?}"
    assert scan_placeholders(template) == []


def test_placeholder_forms_first_occurrence_order() -> None:
    occ = scan_placeholders("{{{B}}} {{A}} {{{B}}}")
    assert list(placeholder_forms(occ).items()) == [("B", True), ("A", False)]


@pytest.mark.parametrize(
    "template",
    [
        "Hello {{NAME}",          # 未闭合
        "Hello {{ NAME }}",       # 键名含空白
        "Hello {{}}",             # 空键名
        "Hello {{{{NAME}}}}",     # 四重括号
        "Hello {{NAME}}}",        # 多余右括号
        "Hello {{1ABC}}",         # 数字开头
        "Hello {{{NAME}} x",      # 三括号开头、双括号闭合
    ],
)
def test_malformed_placeholders_raise(template: str) -> None:
    with pytest.raises(TemplateContractError):
        scan_placeholders(template)


def test_mixed_forms_for_same_key_raise() -> None:
    with pytest.raises(TemplateContractError, match="both"):
        scan_placeholders("{{X}} and {{{X}}}")


def test_find_residual_placeholders() -> None:
    assert find_residual_placeholders("no tokens <<X>> {x}") == []
    assert find_residual_placeholders("left {{A}} and {{{B}}}") == ["{{A}}", "{{{B}}}"]


@pytest.mark.parametrize(
    "template",
    [
        "a }} {{A}}",              # 占位符之前
        "{{A}} b }}",              # 占位符之后
        "{{A}} }} {{{B}}}",        # 两个占位符之间
        "no placeholders }}",
        'nested {"a": {"b": 1}}',  # 字面 JSON 中的 "}}" 同样不允许
    ],
)
def test_stray_closing_braces_in_literal_text_raise(template: str) -> None:
    with pytest.raises(TemplateContractError, match="unbalanced closing braces"):
        scan_placeholders(template)


def test_single_closing_brace_next_to_placeholder_is_literal() -> None:
    occ = scan_placeholders("{x} {{A}} {y}")
    assert [o.key for o in occ] == ["A"]
