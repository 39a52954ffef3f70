"""CRM prompt 目录：抽取、跟进建议、交易洞察、消息草稿、活动解析、沟通摘要。"""

from __future__ import annotations

from pydantic import BaseModel, Field

from promptreg.contracts.types import PromptDefinition, PromptVersion, VariableDeclaration


class ExtractPartyVars(BaseModel):
    SOURCE_TEXT: str = Field(min_length=1)
    SUGGESTED_ROLES_LINE: str = ""


class ExtractDealVars(BaseModel):
    SOURCE_TEXT: str = Field(min_length=1)
    ASSOCIATED_PARTY_LINE: str = ""


class FollowUpSuggestionsVars(BaseModel):
    DEAL_TITLE: str = Field(min_length=1)
    DEAL_STAGE: str = Field(min_length=1)
    DEAL_AMOUNT: str = Field(min_length=1)
    DEAL_EXPECTED_CLOSE: str = Field(min_length=1)
    DEAL_NOTES: str = Field(min_length=1)
    EXISTING_ACTIVITIES: str = Field(min_length=1)
    CONTEXT_SECTION: str = Field(min_length=1)


class DealInsightsVars(BaseModel):
    LANGUAGE: str = Field(min_length=2)
    DEAL_JSON: str = Field(min_length=2)
    TIMELINE_CONTEXT: str = Field(min_length=1)
    MISSING_HINTS_JSON: str = Field(min_length=2)


class DealMessageDraftVars(BaseModel):
    CHANNEL: str = Field(min_length=2)
    LANGUAGE: str = Field(min_length=2)
    PERSONALIZE_WITH_TIMELINE: str = Field(min_length=1)
    DEAL_JSON: str = Field(min_length=2)
    TIMELINE_CONTEXT: str = Field(min_length=1)


class ActivityParseVars(BaseModel):
    LANGUAGE: str = Field(min_length=2)
    USER_TEXT: str = Field(min_length=1)


class ActivityExtractVars(BaseModel):
    LANGUAGE: str = Field(min_length=2)
    NOTES_TEXT: str = Field(min_length=1)


class MessageBodyVars(BaseModel):
    LANGUAGE: str = Field(min_length=2)
    MESSAGE_BODY: str = Field(min_length=1)


def _text(key: str) -> VariableDeclaration:
    return VariableDeclaration(key=key, kind="text")


def _block(key: str) -> VariableDeclaration:
    return VariableDeclaration(key=key, kind="block")


CRM_PROMPTS: tuple[PromptDefinition, ...] = (
    PromptDefinition(
        id="crm.extract_party",
        description="Extract party information from unstructured text.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "Extract party information from this text.\n"
                    "{{SUGGESTED_ROLES_LINE}}\n\n"
                    "Text:\n{{{SOURCE_TEXT}}}"
                ),
                variables_schema=ExtractPartyVars,
                variables=(_text("SUGGESTED_ROLES_LINE"), _block("SOURCE_TEXT")),
            ),
        ),
        tags=("crm", "extraction"),
    ),
    PromptDefinition(
        id="crm.extract_deal",
        description="Extract deal/opportunity information from text.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "Extract deal/opportunity information from this text.\n"
                    "{{ASSOCIATED_PARTY_LINE}}\n\n"
                    "Text:\n{{{SOURCE_TEXT}}}"
                ),
                variables_schema=ExtractDealVars,
                variables=(_text("ASSOCIATED_PARTY_LINE"), _block("SOURCE_TEXT")),
            ),
        ),
        tags=("crm", "extraction"),
    ),
    PromptDefinition(
        id="crm.follow_up_suggestions",
        description="Generate suggested follow-up activities for a deal.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "Generate 2-4 suggested follow-up activities for this deal:\n\n"
                    "Deal: {{DEAL_TITLE}}\n"
                    "Stage: {{DEAL_STAGE}}\n"
                    "Amount: {{DEAL_AMOUNT}}\n"
                    "Expected Close: {{DEAL_EXPECTED_CLOSE}}\n"
                    "Notes: {{DEAL_NOTES}}\n\n"
                    "Existing Activities:\n{{{EXISTING_ACTIVITIES}}}\n\n"
                    "{{{CONTEXT_SECTION}}}\n\n"
                    "Suggest practical next steps to move this deal forward."
                ),
                variables_schema=FollowUpSuggestionsVars,
                variables=(
                    _text("DEAL_TITLE"),
                    _text("DEAL_STAGE"),
                    _text("DEAL_AMOUNT"),
                    _text("DEAL_EXPECTED_CLOSE"),
                    _text("DEAL_NOTES"),
                    _block("EXISTING_ACTIVITIES"),
                    _block("CONTEXT_SECTION"),
                ),
            ),
        ),
        tags=("crm", "suggestions"),
    ),
    PromptDefinition(
        id="crm.ai.deal_insights",
        description="Generate structured AI insights for a CRM deal object page.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "Generate strict JSON only for deal insights.\n"
                    "Language: {{LANGUAGE}}\n\n"
                    "Deal:\n{{{DEAL_JSON}}}\n\n"
                    "Timeline:\n{{{TIMELINE_CONTEXT}}}\n\n"
                    "Missing hints:\n{{{MISSING_HINTS_JSON}}}\n\n"
                    "Return JSON with keys: summary, whatMissing, keyEntities, confidence.\n"
                    "summary = {situation,lastInteraction,keyStakeholders,needs,objections,nextStep}\n"
                    "whatMissing[] = {code,label,reason?,severity}\n"
                    "keyEntities[] = {kind,value,confidence?}\n"
                    "If unknown, use 'Unknown' or empty arrays. No markdown."
                ),
                variables_schema=DealInsightsVars,
                variables=(
                    _text("LANGUAGE"),
                    _block("DEAL_JSON"),
                    _block("TIMELINE_CONTEXT"),
                    _block("MISSING_HINTS_JSON"),
                ),
            ),
        ),
        tags=("crm", "ai", "insights"),
    ),
    PromptDefinition(
        id="crm.ai.deal_message_draft",
        description="Generate channel-specific message variants for a deal follow-up.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "Return strict JSON only.\n"
                    "Channel: {{CHANNEL}}\n"
                    "Language: {{LANGUAGE}}\n"
                    "PersonalizeWithTimeline: {{PERSONALIZE_WITH_TIMELINE}}\n\n"
                    "Deal:\n{{{DEAL_JSON}}}\n\n"
                    "Timeline:\n{{{TIMELINE_CONTEXT}}}\n\n"
                    "Output keys: channel, language, variants, personalizeWithTimeline, "
                    "translateToWorkspaceLanguage, placeholdersUsed.\n"
                    "variants must include styles short, normal, assertive with body and optional subject.\n"
                    "placeholdersUsed[] = {key,value,fallback}. No markdown."
                ),
                variables_schema=DealMessageDraftVars,
                variables=(
                    _text("CHANNEL"),
                    _text("LANGUAGE"),
                    _text("PERSONALIZE_WITH_TIMELINE"),
                    _block("DEAL_JSON"),
                    _block("TIMELINE_CONTEXT"),
                ),
            ),
        ),
        tags=("crm", "ai", "messages"),
    ),
    PromptDefinition(
        id="crm.ai.activity_parse",
        description="Parse a natural-language activity description into structured fields.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "Parse this text into a CRM activity JSON object.\n"
                    "Language: {{LANGUAGE}}\n\n"
                    "Text:\n{{{USER_TEXT}}}\n\n"
                    "Return strict JSON keys: activityType, subject, dueAt, notesTemplate, confidence.\n"
                    "activityType must be NOTE|TASK|CALL|MEETING|COMMUNICATION.\n"
                    "dueAt must be ISO datetime or null.\n"
                    "Use null/empty when unknown. No markdown."
                ),
                variables_schema=ActivityParseVars,
                variables=(_text("LANGUAGE"), _block("USER_TEXT")),
            ),
        ),
        tags=("crm", "ai", "activities"),
    ),
    PromptDefinition(
        id="crm.ai.activity_extract",
        description="Summarize notes and extract follow-up action items.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "Summarize CRM notes and extract action items.\n"
                    "Language: {{LANGUAGE}}\n\n"
                    "Notes:\n{{{NOTES_TEXT}}}\n\n"
                    "Return strict JSON keys: summary, actionItems, confidence.\n"
                    "actionItems[] = {subject,details?,suggestedType,dueAt?,confidence}.\n"
                    "suggestedType must be TASK|CALL|MEETING|NOTE|COMMUNICATION.\n"
                    "If no actions, return empty array. No markdown."
                ),
                variables_schema=ActivityExtractVars,
                variables=(_text("LANGUAGE"), _block("NOTES_TEXT")),
            ),
        ),
        tags=("crm", "ai", "activities"),
    ),
    PromptDefinition(
        id="crm.ai.communication_summarize",
        description="Summarize communication and extract follow-up actions.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "Summarize this communication for CRM timeline.\n"
                    "Language: {{LANGUAGE}}\n\n"
                    "Message:\n{{{MESSAGE_BODY}}}\n\n"
                    "Return strict JSON keys: summary, actionItems, confidence.\n"
                    "actionItems[] = {subject,details?,suggestedType,dueAt?,confidence}. No markdown."
                ),
                variables_schema=MessageBodyVars,
                variables=(_text("LANGUAGE"), _block("MESSAGE_BODY")),
            ),
        ),
        tags=("crm", "ai", "communications"),
    ),
    PromptDefinition(
        id="crm.ai.intent_sentiment",
        description="Classify intent and sentiment labels for inbound CRM messages.",
        default_version="v1",
        versions=(
            PromptVersion(
                version="v1",
                template=(
                    "Classify intent and sentiment for this inbound message.\n"
                    "Language: {{LANGUAGE}}\n\n"
                    "Message:\n{{{MESSAGE_BODY}}}\n\n"
                    "Return strict JSON keys: enabled, intentLabels, sentiment, confidence.\n"
                    "intentLabels must only use: question, interested, pricing, negotiation, "
                    "objection, support, unknown.\n"
                    "sentiment must be positive|neutral|negative|mixed. No markdown."
                ),
                variables_schema=MessageBodyVars,
                variables=(_text("LANGUAGE"), _block("MESSAGE_BODY")),
            ),
        ),
        tags=("crm", "ai", "communications"),
    ),
)
