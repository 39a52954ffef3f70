"""从进程设置与调用方身份构建 PromptContext。"""

from __future__ import annotations

__all__ = ["build_prompt_context"]

from promptreg.config import RegistrySettings
from promptreg.contracts.types import PromptContext


def build_prompt_context(
    settings: RegistrySettings,
    *,
    tenant_id: str | None = None,
    workspace_kind: str | None = None,
) -> PromptContext:
    """environment 取自设置；workspace_kind 未显式传入时回退到设置中的默认值。"""
    return PromptContext(
        environment=settings.environment,
        workspace_kind=workspace_kind if workspace_kind is not None else settings.workspace_kind,
        tenant_id=tenant_id,
    )
