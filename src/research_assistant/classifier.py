"""
Maps failures from any pipeline stage onto the `ErrorKind` taxonomy.
"""

from typing import Iterable, Optional, Sequence, Tuple, Union

from .errors import ClassifiedError, ErrorKind


RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."
QUOTA_MESSAGE = "AI credits exhausted. Please add credits to your workspace."

# Upstream bodies can be large HTML error pages.
_MAX_BODY_CHARS = 500


def input_missing(message: str) -> ClassifiedError:
    return ClassifiedError(kind=ErrorKind.INPUT_MISSING, message=message, retryable=False)


def config_missing(name: str) -> ClassifiedError:
    return ClassifiedError(
        kind=ErrorKind.CONFIG_ERROR,
        message=f"{name} is not configured",
        retryable=False,
    )


def classify_status(status: int, body: str = "") -> ClassifiedError:
    """Classify a non-2xx gateway reply."""
    if status == 429:
        return ClassifiedError(
            kind=ErrorKind.RATE_LIMITED,
            message=RATE_LIMIT_MESSAGE,
            retryable=True,
            http_status=status,
        )
    if status == 402:
        return ClassifiedError(
            kind=ErrorKind.QUOTA_EXHAUSTED,
            message=QUOTA_MESSAGE,
            retryable=False,
            http_status=status,
        )
    detail = (body or "").strip()[:_MAX_BODY_CHARS]
    return ClassifiedError(
        kind=ErrorKind.UPSTREAM_ERROR,
        message=f"AI API request failed: {status} {detail}".rstrip(),
        retryable=False,
        http_status=status,
    )


def upstream_failure(message: str, status: Optional[int] = None) -> ClassifiedError:
    """Transport failures, timeouts and malformed gateway envelopes."""
    return ClassifiedError(
        kind=ErrorKind.UPSTREAM_ERROR,
        message=message,
        retryable=False,
        http_status=status,
    )


def extraction_failed() -> ClassifiedError:
    return ClassifiedError(
        kind=ErrorKind.EXTRACTION_ERROR,
        message="Invalid response format from AI: no JSON object found",
        retryable=True,
    )


def parse_failed(reason: str) -> ClassifiedError:
    return ClassifiedError(
        kind=ErrorKind.PARSE_ERROR,
        message=f"AI response was not valid JSON: {reason}",
        retryable=True,
    )


Loc = Sequence[Union[str, int]]


def format_path(loc: Loc) -> str:
    """Render a validation location, e.g. ``("subtopics", 0, "actionSteps")``
    becomes ``subtopics[0].actionSteps``. The document root is ``$``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "$"


def schema_failed(violations: Iterable[Tuple[Loc, str]]) -> ClassifiedError:
    """Build a SchemaError naming every offending field path."""
    paths = []
    problems = []
    for loc, reason in violations:
        path = format_path(loc)
        if path not in paths:
            paths.append(path)
        problems.append(f"{path}: {reason}")
    return ClassifiedError(
        kind=ErrorKind.SCHEMA_ERROR,
        message="AI response did not match the expected schema: " + "; ".join(problems),
        retryable=True,
        paths=tuple(paths),
    )
