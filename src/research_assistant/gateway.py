"""
HTTP client for the AI gateway (an OpenAI-compatible chat completions API).

The gateway is the pipeline's only I/O. Every transport problem is turned
into a `ClassifiedError` here so that callers never see httpx exceptions.
"""

import logging
from typing import Optional

import httpx

from .classifier import classify_status, config_missing, upstream_failure
from .config import Settings, settings as default_settings
from .errors import ClassifiedError, Result
from .models import PromptSpec


logger = logging.getLogger(__name__)


class ModelGateway:
    """Sends a rendered prompt to the model and returns the assistant text."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config or default_settings
        self._client = client or httpx.AsyncClient(timeout=self.config.request_timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    def check_config(self) -> Optional[ClassifiedError]:
        if not self.config.api_key:
            return config_missing("AI_GATEWAY_API_KEY")
        return None

    async def complete(self, prompt: PromptSpec) -> Result[str]:
        missing = self.check_config()
        if missing is not None:
            return missing

        try:
            resp = await self._client.post(
                self.config.gateway_url,
                headers={
                    "Authorization": f"Bearer {self.config.api_key}",
                    "Content-Type": "application/json",
                },
                json=prompt.to_payload(),
            )
        except httpx.TimeoutException as exc:
            logger.error("AI gateway timed out: %r", exc)
            return upstream_failure(f"AI request timed out: {exc}")
        except httpx.HTTPError as exc:
            logger.error("AI gateway request failed: %r", exc)
            return upstream_failure(f"AI request failed: {exc}")

        if not resp.is_success:
            logger.error("AI API error: %s %s", resp.status_code, resp.text[:500])
            return classify_status(resp.status_code, resp.text)

        try:
            # Non-streaming chat completions return a single choice
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            return upstream_failure(
                f"Unexpected AI gateway response: {resp.text[:200]}", resp.status_code
            )
        if not isinstance(content, str):
            return upstream_failure("AI gateway response carried no text content", resp.status_code)

        logger.debug("AI response content: %s", content)
        return content
