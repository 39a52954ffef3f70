"""库存 prompt 目录。"""

from __future__ import annotations

from pydantic import BaseModel, Field

from promptreg.contracts.types import PromptDefinition, PromptVersion, VariableDeclaration


class ExtractProductProposalVars(BaseModel):
    SOURCE_TEXT: str = Field(min_length=1)


INVENTORY_PROMPTS: tuple[PromptDefinition, ...] = (
    PromptDefinition(
        id="inventory.extract_product_proposal",
        description="Extract a product proposal (name, SKU, pricing hints) from free text.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template="Extract a product proposal from this text.\n\nText:\n{{{SOURCE_TEXT}}}",
                variables_schema=ExtractProductProposalVars,
                variables=(VariableDeclaration(key="SOURCE_TEXT", kind="block"),),
            ),
        ),
        tags=("inventory", "extraction"),
    ),
)
