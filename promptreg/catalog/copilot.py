"""Copilot 对话 prompt 目录。

copilot.chat_system 演示基于上下文的版本选择：
COMPANY 工作区使用 v2（附带已启用模块清单），其余情况回退到 v1。
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from promptreg.contracts.types import (
    PromptDefinition,
    PromptVersion,
    SelectionRule,
    SelectionWhen,
    VariableDeclaration,
)


class ChatSystemV1Vars(BaseModel):
    WORKSPACE_NAME: str = Field(min_length=1)
    LANGUAGE: str = Field(default="en", min_length=2)


class ChatSystemV2Vars(BaseModel):
    WORKSPACE_NAME: str = Field(min_length=1)
    LANGUAGE: str = Field(default="en", min_length=2)
    ENABLED_MODULES: str = Field(min_length=1)


COPILOT_PROMPTS: tuple[PromptDefinition, ...] = (
    PromptDefinition(
        id="copilot.chat_system",
        description="System prompt for the in-app assistant chat.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "You are the assistant for {{WORKSPACE_NAME}}.\n"
                    "Answer in {{LANGUAGE}}. Be concise and only use tools you are given."
                ),
                variables_schema=ChatSystemV1Vars,
                variables=(
                    VariableDeclaration(key="WORKSPACE_NAME"),
                    VariableDeclaration(key="LANGUAGE"),
                ),
            ),
            PromptVersion(
                version="v2",
                template=(
                    "You are the business assistant for the company {{WORKSPACE_NAME}}.\n"
                    "Answer in {{LANGUAGE}}. Be concise and only use tools you are given.\n\n"
                    "Enabled modules:\n{{{ENABLED_MODULES}}}"
                ),
                variables_schema=ChatSystemV2Vars,
                variables=(
                    VariableDeclaration(key="WORKSPACE_NAME"),
                    VariableDeclaration(key="LANGUAGE"),
                    VariableDeclaration(key="ENABLED_MODULES"),
                ),
                description="Company workspaces get module-aware instructions.",
            ),
        ),
        selection=(
            SelectionRule(version="v2", when=SelectionWhen(workspace_kinds=("COMPANY",)), priority=10),
        ),
        tags=("copilot", "chat"),
    ),
)
