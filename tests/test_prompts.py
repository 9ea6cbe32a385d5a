"""Prompt rendering and input checks."""

import pytest

from research_assistant.errors import ClassifiedError, ErrorKind
from research_assistant.models import (
    AnalysisRequest,
    CitationRequest,
    PlanningRequest,
    PromptSpec,
    SynthesisRequest,
)
from research_assistant.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    CITATION_SYSTEM_PROMPT,
    PLANNING_SYSTEM_PROMPT,
    SYNTHESIS_SYSTEM_PROMPT,
    build_prompt,
)


def test_planning_prompt_uses_fixed_temperature():
    spec = build_prompt(PlanningRequest(topic="quantum computing"), model="m")
    assert isinstance(spec, PromptSpec)
    assert spec.system_prompt == PLANNING_SYSTEM_PROMPT
    assert spec.user_prompt.startswith("Research topic: quantum computing\n\n")
    assert spec.temperature == 0.7
    assert spec.model == "m"


@pytest.mark.parametrize(
    "request_, system_prompt, user_prompt",
    [
        (AnalysisRequest(topic="LLM evals"), ANALYSIS_SYSTEM_PROMPT, "Analyze this research topic: LLM evals"),
        (SynthesisRequest(context="notes"), SYNTHESIS_SYSTEM_PROMPT, "Synthesize this research: notes"),
    ],
)
def test_other_features_omit_temperature(request_, system_prompt, user_prompt):
    spec = build_prompt(request_)
    assert spec.system_prompt == system_prompt
    assert spec.user_prompt == user_prompt
    assert spec.temperature is None
    assert "temperature" not in spec.to_payload()


def test_prompt_is_deterministic():
    request = CitationRequest(topic="climate finance", style="MLA")
    assert build_prompt(request) == build_prompt(request)


def test_citation_prompt_from_topic():
    spec = build_prompt(CitationRequest(topic="climate finance", style="MLA"))
    assert spec.system_prompt == CITATION_SYSTEM_PROMPT
    assert spec.user_prompt == "Generate properly formatted citations in MLA style for research on: climate finance"


def test_citation_prompt_from_file_content():
    request = CitationRequest(topic="", style="Chicago", file_content="year,value\n2020,3", file_name="data.csv")
    spec = build_prompt(request)
    assert spec.user_prompt.startswith("File uploaded: data.csv\n\nFile content:\nyear,value\n2020,3\n\n")
    assert "generate Chicago style citations" in spec.user_prompt


def test_payload_shape():
    payload = build_prompt(PlanningRequest(topic="x"), model="m").to_payload()
    assert payload["model"] == "m"
    assert [m["role"] for m in payload["messages"]] == ["system", "user"]
    assert payload["temperature"] == 0.7


@pytest.mark.parametrize(
    "request_",
    [
        PlanningRequest(topic=""),
        PlanningRequest(topic="   "),
        AnalysisRequest(topic="\n\t"),
        CitationRequest(topic="", file_content=None),
        CitationRequest(topic=" ", file_content=""),
        SynthesisRequest(context=""),
    ],
)
def test_missing_input_is_classified(request_):
    outcome = build_prompt(request_)
    assert isinstance(outcome, ClassifiedError)
    assert outcome.kind is ErrorKind.INPUT_MISSING
    assert not outcome.retryable
    assert outcome.status_code == 500


def test_citation_accepts_file_without_topic():
    assert isinstance(build_prompt(CitationRequest(file_content="abstract text")), PromptSpec)


def test_requests_accept_camel_case_keys():
    request = CitationRequest.model_validate({"topic": "t", "fileContent": "c", "fileName": "f.txt"})
    assert request.file_content == "c"
    assert request.file_name == "f.txt"
    assert request.style == "APA"


def test_whitespace_file_content_still_uses_file_branch():
    spec = build_prompt(CitationRequest(topic="climate finance", file_content="  \n", file_name="blank.txt"))
    assert spec.user_prompt.startswith("File uploaded: blank.txt")
