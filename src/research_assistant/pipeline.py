"""
The research pipeline shared by all four features.

One invocation is a single linear pass:

    idle -> building -> awaiting_model -> extracting -> validating -> done

with ``failed`` reachable from every stage after ``idle``. The pipeline keeps
no state between invocations and never retries on its own; callers that want
retries opt in through `run_with_retry`.
"""

import asyncio
import logging
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .classifier import upstream_failure
from .config import Settings, settings as default_settings
from .errors import ClassifiedError, ErrorKind, Result
from .extraction import extract_candidate
from .gateway import ModelGateway
from .models import (
    AnalysisResult,
    CitationResult,
    Feature,
    FeatureRequest,
    PromptSpec,
    SubtopicsResult,
    SynthesisResult,
    ValidatedResult,
)
from .prompts import build_prompt
from .validation import validate_candidate


logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    BUILDING = "building"
    AWAITING_MODEL = "awaiting_model"
    EXTRACTING = "extracting"
    VALIDATING = "validating"
    DONE = "done"
    FAILED = "failed"


class PipelineRun(BaseModel):
    """Outcome of one invocation: a result or a classified error, never both."""

    model_config = ConfigDict(frozen=True)

    feature: Feature
    state: PipelineState
    transitions: Tuple[PipelineState, ...]
    result: Optional[ValidatedResult] = None
    error: Optional[ClassifiedError] = None

    @property
    def ok(self) -> bool:
        return self.state is PipelineState.DONE

    @property
    def failure_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None


def describe_result(result: ValidatedResult) -> str:
    if isinstance(result, SubtopicsResult):
        return f"{len(result.subtopics)} subtopics"
    if isinstance(result, AnalysisResult):
        return (
            f"{len(result.insights)} insights, {len(result.comparisons)} comparisons, "
            f"{len(result.visualizations)} visualizations"
        )
    if isinstance(result, CitationResult):
        return f"{len(result.citations)} citations"
    if isinstance(result, SynthesisResult):
        return f"{len(result.key_insights)} key insights, {len(result.recommendations)} recommendations"
    return type(result).__name__


def _describe_request(request: FeatureRequest) -> str:
    text = getattr(request, "topic", "") or getattr(request, "context", "")
    return f"{Feature(request.feature).value} request ({len(text)} chars of input)"


class ResearchPipeline:
    """
    Orchestrates prompt building, the model call, extraction and validation.

    The pipeline never talks to the model directly; the `ModelGateway` owns
    the HTTP client.
    """

    def __init__(
        self,
        gateway: Optional[ModelGateway] = None,
        config: Optional[Settings] = None,
    ) -> None:
        self.config = config or (gateway.config if gateway is not None else default_settings)
        self.gateway = gateway or ModelGateway(self.config)

    async def aclose(self) -> None:
        await self.gateway.aclose()

    async def run(self, request: FeatureRequest, timeout: Optional[float] = None) -> PipelineRun:
        """Run one invocation. ``timeout`` bounds only the model call."""
        feature = Feature(request.feature)
        transitions: List[PipelineState] = [PipelineState.IDLE]

        def advance(state: PipelineState) -> None:
            logger.debug("%s: %s -> %s", feature.value, transitions[-1].value, state.value)
            transitions.append(state)

        def fail(error: ClassifiedError) -> PipelineRun:
            advance(PipelineState.FAILED)
            if error.is_model_output:
                logger.warning("%s: model output rejected (%s): %s", feature.value, error.kind.value, error.message)
            else:
                logger.info("%s: failed with %s: %s", feature.value, error.kind.value, error.message)
            return PipelineRun(
                feature=feature,
                state=PipelineState.FAILED,
                transitions=tuple(transitions),
                error=error,
            )

        logger.info("Handling %s", _describe_request(request))

        advance(PipelineState.BUILDING)
        prompt = build_prompt(request, model=self.config.model)
        if isinstance(prompt, ClassifiedError):
            return fail(prompt)

        advance(PipelineState.AWAITING_MODEL)
        text = await self._call_model(prompt, timeout)
        if isinstance(text, ClassifiedError):
            return fail(text)

        advance(PipelineState.EXTRACTING)
        candidate = extract_candidate(text)
        if isinstance(candidate, ClassifiedError):
            return fail(candidate)

        advance(PipelineState.VALIDATING)
        result = validate_candidate(candidate, feature)
        if isinstance(result, ClassifiedError):
            return fail(result)

        advance(PipelineState.DONE)
        logger.info("%s: completed with %s", feature.value, describe_result(result))
        return PipelineRun(
            feature=feature,
            state=PipelineState.DONE,
            transitions=tuple(transitions),
            result=result,
        )

    async def _call_model(self, prompt: PromptSpec, timeout: Optional[float]) -> Result[str]:
        if timeout is None:
            return await self.gateway.complete(prompt)
        try:
            return await asyncio.wait_for(self.gateway.complete(prompt), timeout=timeout)
        except asyncio.TimeoutError:
            logger.error("AI gateway call exceeded the %.1fs deadline", timeout)
            return upstream_failure(f"AI request exceeded the {timeout:g}s deadline")


async def run_with_retry(
    pipeline: ResearchPipeline,
    request: FeatureRequest,
    attempts: int = 3,
    delay: float = 5.0,
    timeout: Optional[float] = None,
) -> PipelineRun:
    """
    Re-issue the whole invocation while the failure is retryable.

    Waits ``delay * attempt`` seconds between tries. Non-retryable failures
    (bad input, missing config, exhausted quota, upstream errors) are
    returned immediately.
    """
    run = await pipeline.run(request, timeout=timeout)
    for attempt in range(1, max(attempts, 1)):
        if run.ok or run.error is None or not run.error.retryable:
            break
        logger.warning(
            "%s attempt %d failed with %s, retrying in %.1fs",
            run.feature.value, attempt, run.error.kind.value, delay * attempt,
        )
        await asyncio.sleep(delay * attempt)
        run = await pipeline.run(request, timeout=timeout)
    return run
