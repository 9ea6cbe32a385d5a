"""
Locate the JSON payload inside a model's free-form reply.

Models often wrap the object in a Markdown fence or surround it with prose.
Candidates are tried in a fixed order and the first hit is returned as-is:

1. a fence tagged ``json``
2. any other fence
3. everything from the first ``{`` to the last ``}``

Fence bodies without a ``{`` are not candidates. Nothing is repaired; a
broken fragment is left for the JSON parser to reject.
"""

import re
from typing import Optional

from .classifier import extraction_failed
from .errors import Result


_JSON_FENCE = re.compile(r"```[ \t]*json[ \t]*\r?\n(.*?)```", re.DOTALL | re.IGNORECASE)
# Any fence at all, including ones tagged with another language.
_ANY_FENCE = re.compile(r"```[^\n`]*\r?\n(.*?)```", re.DOTALL)


def _first_fenced(pattern: "re.Pattern[str]", text: str) -> Optional[str]:
    for match in pattern.finditer(text):
        body = match.group(1).strip()
        if "{" in body:
            return body
    return None


def _bracket_span(text: str) -> Optional[str]:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start : end + 1]


def find_candidate(text: str) -> Optional[str]:
    for candidate in (
        _first_fenced(_JSON_FENCE, text),
        _first_fenced(_ANY_FENCE, text),
        _bracket_span(text),
    ):
        if candidate is not None:
            return candidate
    return None


def extract_candidate(text: str) -> Result[str]:
    """Return the candidate JSON substring, or an ExtractionError."""
    candidate = find_candidate(text or "")
    if candidate is None:
        return extraction_failed()
    return candidate
