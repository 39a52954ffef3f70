"""Prompt 注册表结构化异常层级。

所有注册表异常都继承自 PromptRegistryError，每个异常自带
error_type / error_stage / error_code 三个元数据字段，
供调用方在边界处记录日志（不直接展示给终端用户）。

异常层级：
  PromptRegistryError (base)
  ├── PromptNotFoundError       → lookup 阶段：没有 provider 能解析 prompt_id
  ├── PromptConfigurationError  → select 阶段：规则/默认版本指向不存在的版本等数据错误
  ├── SchemaValidationError     → validate 阶段：变量未通过 variables_schema
  └── TemplateContractError     → template 阶段：占位符与变量声明不一致、格式错误

所有异常都是不可恢复的：同步抛出、不重试、不做降级渲染。
"""

from __future__ import annotations

__all__ = [
    "PromptRegistryError",
    "PromptNotFoundError",
    "PromptConfigurationError",
    "SchemaValidationError",
    "TemplateContractError",
]

from typing import Any


class PromptRegistryError(Exception):
    """注册表基础异常，携带稳定的错误元数据 (type/stage/code)。"""

    def __init__(
        self,
        message: str,
        *,
        error_type: str,
        error_stage: str,
        error_code: str,
        prompt_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.error_stage = error_stage
        self.error_code = error_code
        self.prompt_id = prompt_id


class PromptNotFoundError(PromptRegistryError):
    """所有 provider 都无法解析请求的 prompt_id。"""

    def __init__(self, prompt_id: str) -> None:
        super().__init__(
            f"prompt_not_found: no provider resolves prompt '{prompt_id}'",
            error_type="not_found",
            error_stage="lookup",
            error_code="prompt_not_found",
            prompt_id=prompt_id,
        )


class PromptConfigurationError(PromptRegistryError):
    """目录数据编写错误：selection 规则或 default_version 引用了不存在的版本等。"""

    def __init__(self, message: str, *, prompt_id: str | None = None) -> None:
        super().__init__(
            f"prompt_configuration_error: {message}",
            error_type="configuration_failure",
            error_stage="select",
            error_code="prompt_configuration_error",
            prompt_id=prompt_id,
        )


class SchemaValidationError(PromptRegistryError):
    """调用方变量未通过 variables_schema 校验。

    issues 为结构化问题列表，每项含 loc / msg / type，
    直接来自 pydantic ValidationError.errors()。
    """

    def __init__(
        self,
        message: str,
        *,
        prompt_id: str | None = None,
        issues: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(
            f"schema_validation_error: {message}",
            error_type="schema_failure",
            error_stage="validate",
            error_code="schema_validation_error",
            prompt_id=prompt_id,
        )
        self.issues = list(issues or [])


class TemplateContractError(PromptRegistryError):
    """模板占位符契约被破坏：声明不一致、括号格式错误或渲染后残留占位符。"""

    def __init__(self, message: str, *, prompt_id: str | None = None) -> None:
        super().__init__(
            f"template_contract_error: {message}",
            error_type="template_contract_failure",
            error_stage="template",
            error_code="template_contract_error",
            prompt_id=prompt_id,
        )
