"""
Parse a candidate payload and check it against the feature's result schema.
"""

import json
import logging
from typing import Dict, Type

from pydantic import BaseModel, ValidationError

from .classifier import parse_failed, schema_failed
from .errors import Result
from .models import (
    AnalysisResult,
    CitationResult,
    Feature,
    SubtopicsResult,
    SynthesisResult,
    ValidatedResult,
)


logger = logging.getLogger(__name__)


RESULT_SCHEMAS: Dict[Feature, Type[BaseModel]] = {
    Feature.PLANNING: SubtopicsResult,
    Feature.ANALYSIS: AnalysisResult,
    Feature.CITATION: CitationResult,
    Feature.SYNTHESIS: SynthesisResult,
}


def _reason(error: dict) -> str:
    message = error.get("msg", "invalid value")
    # pydantic prefixes errors raised from validators with "Value error, "
    return message.replace("Value error, ", "", 1)


def validate_candidate(candidate: str, feature: Feature) -> Result[ValidatedResult]:
    """Parse ``candidate`` and validate it as ``feature``'s result.

    Returns the typed result, a ParseError when the text is not JSON, or a
    SchemaError listing every violated field. No partial result is built.
    """
    try:
        document = json.loads(candidate)
    except json.JSONDecodeError as exc:
        return parse_failed(f"{exc.msg} at line {exc.lineno} column {exc.colno}")
    except RecursionError:
        return parse_failed("document is nested too deeply")

    schema = RESULT_SCHEMAS[feature]
    try:
        return schema.model_validate(document)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        logger.debug("%s schema rejected %d field(s)", schema.__name__, len(errors))
        return schema_failed((error["loc"], _reason(error)) for error in errors)
