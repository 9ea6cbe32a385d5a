"""
Typed inputs and outputs of the research pipeline.

Requests double as HTTP bodies, so their JSON keys follow the camelCase used
by the web client (``fileContent``, ``actionSteps``...). Result models
validate model output without coercion: strings must be strings and
required sequences must be present and non-empty.
"""

from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from pydantic.alias_generators import to_camel


class Feature(str, Enum):
    PLANNING = "planning"
    ANALYSIS = "analysis"
    CITATION = "citation"
    SYNTHESIS = "synthesis"


class _Payload(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class PlanningRequest(_Payload):
    feature: Literal[Feature.PLANNING] = Feature.PLANNING
    topic: str = ""


class AnalysisRequest(_Payload):
    feature: Literal[Feature.ANALYSIS] = Feature.ANALYSIS
    topic: str = ""


class CitationRequest(_Payload):
    feature: Literal[Feature.CITATION] = Feature.CITATION
    topic: str = ""
    style: str = "APA"
    file_content: Optional[str] = None
    file_name: Optional[str] = None


class SynthesisRequest(_Payload):
    feature: Literal[Feature.SYNTHESIS] = Feature.SYNTHESIS
    context: str = ""


FeatureRequest = Annotated[
    Union[PlanningRequest, AnalysisRequest, CitationRequest, SynthesisRequest],
    Field(discriminator="feature"),
]


class PromptSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    system_prompt: str
    user_prompt: str
    model: str
    temperature: Optional[float] = None

    def to_payload(self) -> dict:
        """Chat-completions request body for the gateway."""
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": self.user_prompt},
            ],
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        return payload


# ---------------------------------------------------------------------------
# Validated results
# ---------------------------------------------------------------------------

Text = Annotated[str, StringConstraints(strict=True)]
NonEmptyText = Annotated[str, StringConstraints(strict=True, min_length=1)]


class _Output(_Payload):
    # Model output must use the camelCase keys named in the prompt.
    model_config = ConfigDict(extra="ignore", populate_by_name=False)


class Subtopic(_Output):
    title: NonEmptyText
    description: NonEmptyText
    importance: NonEmptyText
    category: NonEmptyText
    action_steps: Annotated[List[Text], Field(min_length=1)]


class SubtopicsResult(_Output):
    subtopics: Annotated[List[Subtopic], Field(min_length=1)]


class Insight(_Output):
    title: Text
    summary: Text


class Comparison(_Output):
    aspect: Text
    options: List[Text]
    details: List[Text]

    @model_validator(mode="after")
    def _options_match_details(self) -> "Comparison":
        if len(self.options) != len(self.details):
            raise ValueError(
                f"options has {len(self.options)} entries but details has {len(self.details)}"
            )
        return self


class Visualization(_Output):
    type: Text
    description: Text
    purpose: Text


class AnalysisResult(_Output):
    insights: Annotated[List[Insight], Field(min_length=1)]
    comparisons: Annotated[List[Comparison], Field(min_length=1)]
    visualizations: Annotated[List[Visualization], Field(min_length=1)]


class Citation(_Output):
    reference: Text
    style: Text


class CitationResult(_Output):
    citations: Annotated[List[Citation], Field(min_length=1)]
    # Only meaningful for file uploads; never required.
    summary: Optional[Text] = None
    chart_suggestion: Optional[Text] = None


class KeyInsight(_Output):
    title: Text
    content: Text
    visual: Text


class SynthesisResult(_Output):
    executive_summary: NonEmptyText
    key_insights: Annotated[List[KeyInsight], Field(min_length=1)]
    implications: NonEmptyText
    recommendations: Annotated[List[NonEmptyText], Field(min_length=1)]


ValidatedResult = Union[SubtopicsResult, AnalysisResult, CitationResult, SynthesisResult]
