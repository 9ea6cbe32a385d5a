"""
Configuration utilities for the Research Assistant service.

Central place to configure:
- AI gateway endpoint, credential and model (used by the pipeline)
- HTTP server binding and CORS origins
- Log level

Values come from the environment (a local `.env` file is honoured but never
overrides real environment variables).
"""

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv(override=False)


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Settings(BaseModel):
    # OpenAI-compatible chat completions endpoint wrapping the model.
    gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    api_key: Optional[str] = None
    model: str = "google/gemini-2.5-flash"
    request_timeout: float = 60.0

    # Where the FastAPI app is served.
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_allow_origins: List[str] = ["*"]

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        origins = [
            origin.strip()
            for origin in (os.getenv("CORS_ALLOW_ORIGINS") or "").split(",")
            if origin.strip()
        ]
        return cls(
            gateway_url=os.getenv("AI_GATEWAY_URL") or defaults.gateway_url,
            api_key=os.getenv("AI_GATEWAY_API_KEY") or os.getenv("LOVABLE_API_KEY") or None,
            model=os.getenv("AI_GATEWAY_MODEL") or defaults.model,
            request_timeout=_env_float("AI_GATEWAY_TIMEOUT", defaults.request_timeout),
            api_host=os.getenv("API_HOST") or defaults.api_host,
            api_port=_env_int("API_PORT", defaults.api_port),
            cors_allow_origins=origins or defaults.cors_allow_origins,
            log_level=(os.getenv("LOG_LEVEL") or defaults.log_level).upper(),
        )


settings = Settings.from_env()
