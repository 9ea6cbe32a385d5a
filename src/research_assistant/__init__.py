"""
Research Assistant package.

Turns a research request (subtopic planning, analysis, citations or
synthesis) into a prompt, calls the AI gateway and returns a validated,
typed result or a classified error.
"""

from .errors import ClassifiedError, ErrorKind
from .models import (
    AnalysisRequest,
    CitationRequest,
    Feature,
    PlanningRequest,
    SynthesisRequest,
)
from .pipeline import PipelineRun, PipelineState, ResearchPipeline, run_with_retry

__all__ = [
    "AnalysisRequest",
    "CitationRequest",
    "ClassifiedError",
    "ErrorKind",
    "Feature",
    "PipelineRun",
    "PipelineState",
    "PlanningRequest",
    "ResearchPipeline",
    "SynthesisRequest",
    "run_with_retry",
]
