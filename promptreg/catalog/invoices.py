"""发票 prompt 目录：催款邮件草稿（system + user 两段）。"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, StringConstraints

from promptreg.contracts.types import PromptDefinition, PromptVersion, VariableDeclaration


class ReminderEmailSystemVars(BaseModel):
    LANGUAGE: str = Field(default="en", min_length=2)
    TONE: Literal["polite", "normal", "firm"] = "normal"


class ReminderEmailUserVars(BaseModel):
    # 调用方可以传已序列化的 JSON 字符串，也可以直接传对象
    FACTS_JSON: dict[str, Any] | Annotated[str, StringConstraints(min_length=2)]


INVOICE_PROMPTS: tuple[PromptDefinition, ...] = (
    PromptDefinition(
        id="invoices.reminder_email.system",
        description="System instructions for drafting an overdue-invoice reminder email.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "You draft payment reminder emails for a small business.\n"
                    "Language: {{LANGUAGE}}\n"
                    "Tone: {{TONE}}\n"
                    "Only use the facts provided. Never invent amounts, dates or bank details.\n"
                    "Return strict JSON with keys: subject, body. No markdown."
                ),
                variables_schema=ReminderEmailSystemVars,
                variables=(
                    VariableDeclaration(key="LANGUAGE", kind="text"),
                    VariableDeclaration(key="TONE", kind="text"),
                ),
            ),
        ),
        tags=("invoices", "copilot", "email"),
    ),
    PromptDefinition(
        id="invoices.reminder_email.user",
        description="Invoice facts for the reminder email draft.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template="Invoice facts (JSON):\n{{FACTS_JSON}}\n\nDraft the reminder email.",
                variables_schema=ReminderEmailUserVars,
                variables=(
                    VariableDeclaration(
                        key="FACTS_JSON",
                        kind="json",
                        description="Invoice number, amounts due, due date, customer name.",
                    ),
                ),
            ),
        ),
        tags=("invoices", "copilot", "email"),
    ),
)
