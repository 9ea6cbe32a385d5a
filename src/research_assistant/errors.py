"""
Failure taxonomy shared by every pipeline stage.

Stages never let library exceptions escape: each one returns either its
product or a `ClassifiedError`, so a caller can always branch on
``isinstance(value, ClassifiedError)``.
"""

from enum import Enum
from typing import Optional, Tuple, TypeVar, Union

from pydantic import BaseModel, ConfigDict


T = TypeVar("T")


class ErrorKind(str, Enum):
    INPUT_MISSING = "InputMissing"
    CONFIG_ERROR = "ConfigError"
    RATE_LIMITED = "RateLimited"
    QUOTA_EXHAUSTED = "QuotaExhausted"
    UPSTREAM_ERROR = "UpstreamError"
    # ModelOutputError family
    EXTRACTION_ERROR = "ExtractionError"
    PARSE_ERROR = "ParseError"
    SCHEMA_ERROR = "SchemaError"


MODEL_OUTPUT_KINDS = frozenset(
    {ErrorKind.EXTRACTION_ERROR, ErrorKind.PARSE_ERROR, ErrorKind.SCHEMA_ERROR}
)

_STATUS_CODES = {
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.QUOTA_EXHAUSTED: 402,
}


class ClassifiedError(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    retryable: bool
    http_status: Optional[int] = None
    # Offending field paths, populated for SchemaError.
    paths: Tuple[str, ...] = ()

    @property
    def is_model_output(self) -> bool:
        return self.kind in MODEL_OUTPUT_KINDS

    @property
    def status_code(self) -> int:
        """Status used when the error is returned over HTTP."""
        return _STATUS_CODES.get(self.kind, 500)


Result = Union[T, ClassifiedError]
