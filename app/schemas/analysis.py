"""
Schemas for computed scores and LLM-generated assessment insights.

The insight contract mirrors the JSON schema sent to the LLM provider
(camelCase on the wire); the API returns snake_case field names.
"""

from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.schemas.base import RecordRead


class CriterionScoreRead(RecordRead):
    """Schema for reading a stored criterion score."""

    assessment_id: int
    criterion_number: int
    criterion_name: str
    average_score: float
    total_questions: int
    answered_questions: int


class InsightActionItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    priority: str
    title: str
    description: str
    criterion: str
    estimated_impact: str = Field(validation_alias=AliasChoices("estimatedImpact", "estimated_impact"))


class InsightTimeline(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    immediate: List[str] = Field(default_factory=list)
    short_term: List[str] = Field(default_factory=list, validation_alias=AliasChoices("shortTerm", "short_term"))
    long_term: List[str] = Field(default_factory=list, validation_alias=AliasChoices("longTerm", "long_term"))


class AssessmentInsights(BaseModel):
    """Narrative analysis returned by insight generation. Never persisted."""

    model_config = ConfigDict(populate_by_name=True)

    executive_summary: str = Field(validation_alias=AliasChoices("executiveSummary", "executive_summary"))
    key_strengths: List[str] = Field(validation_alias=AliasChoices("keyStrengths", "key_strengths"))
    critical_gaps: List[str] = Field(validation_alias=AliasChoices("criticalGaps", "critical_gaps"))
    action_items: List[InsightActionItem] = Field(validation_alias=AliasChoices("actionItems", "action_items"))
    implementation_timeline: InsightTimeline = Field(
        validation_alias=AliasChoices("implementationTimeline", "implementation_timeline")
    )


# JSON schema the provider is constrained to (OpenAI "json_schema" response format)
ASSESSMENT_ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "executiveSummary": {"type": "string"},
        "keyStrengths": {"type": "array", "items": {"type": "string"}},
        "criticalGaps": {"type": "array", "items": {"type": "string"}},
        "actionItems": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "priority": {"type": "string"},
                    "title": {"type": "string"},
                    "description": {"type": "string"},
                    "criterion": {"type": "string"},
                    "estimatedImpact": {"type": "string"},
                },
                "required": ["priority", "title", "description", "criterion", "estimatedImpact"],
                "additionalProperties": False,
            },
        },
        "implementationTimeline": {
            "type": "object",
            "properties": {
                "immediate": {"type": "array", "items": {"type": "string"}},
                "shortTerm": {"type": "array", "items": {"type": "string"}},
                "longTerm": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["immediate", "shortTerm", "longTerm"],
            "additionalProperties": False,
        },
    },
    "required": ["executiveSummary", "keyStrengths", "criticalGaps", "actionItems", "implementationTimeline"],
    "additionalProperties": False,
}
