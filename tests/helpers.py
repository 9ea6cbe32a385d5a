"""
Builders for model replies and pipelines used across the test suite.

The AI gateway is never contacted: every pipeline here runs over
``httpx.MockTransport``.
"""

import json
from typing import Callable, List

import httpx

from research_assistant.config import Settings
from research_assistant.gateway import ModelGateway
from research_assistant.pipeline import ResearchPipeline


TEST_SETTINGS = Settings(
    gateway_url="https://gateway.test/v1/chat/completions",
    api_key="test-key",
    model="test/model",
)


def chat_reply(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def fenced(document: dict, tag: str = "json") -> str:
    return f"Here is your result:\n```{tag}\n{json.dumps(document, indent=2)}\n```\nGood luck!"


def subtopics_document(count: int = 5, steps: int = 3) -> dict:
    return {
        "subtopics": [
            {
                "title": f"Subtopic {i}",
                "description": f"Description {i}",
                "importance": f"Importance {i}",
                "category": "Technical Framework",
                "actionSteps": [f"Step {i}.{j}" for j in range(steps)],
            }
            for i in range(count)
        ]
    }


def analysis_document() -> dict:
    return {
        "insights": [{"title": "Qubits scale", "summary": "Error rates are falling."}],
        "comparisons": [
            {"aspect": "Hardware", "options": ["Superconducting", "Trapped ion"], "details": ["Fast gates", "Long coherence"]}
        ],
        "visualizations": [{"type": "Line chart", "description": "Qubit counts per year", "purpose": "Show growth"}],
    }


def citation_document(with_file_fields: bool = False) -> dict:
    document = {
        "citations": [
            {"reference": "Preskill, J. (2018). Quantum Computing in the NISQ era and beyond. Quantum, 2, 79.", "style": "APA"}
        ]
    }
    if with_file_fields:
        document["summary"] = "The file reports quarterly adoption figures."
        document["chartSuggestion"] = "Bar chart"
    return document


def synthesis_document() -> dict:
    return {
        "executiveSummary": "Quantum advantage remains narrow but is growing.",
        "keyInsights": [{"title": "Error correction", "content": "Logical qubits arrived.", "visual": "Timeline"}],
        "implications": "Cryptography must migrate to post-quantum schemes.",
        "recommendations": ["Inventory RSA usage", "Fund error-correction research"],
    }


class RecordingTransport:
    """Callable for ``httpx.MockTransport`` that records every request."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


def reply_with(content: str, status: int = 200) -> RecordingTransport:
    if status >= 300:
        return RecordingTransport(lambda request: httpx.Response(status, text=content))
    return RecordingTransport(lambda request: httpx.Response(status, json=chat_reply(content)))


def make_pipeline(transport: RecordingTransport, settings: Settings = TEST_SETTINGS) -> ResearchPipeline:
    client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
    return ResearchPipeline(gateway=ModelGateway(settings, client=client))
