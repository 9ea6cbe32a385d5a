"""
Entry point to run the Research Assistant backend with one command.

Usage:
    python main.py

Configure the gateway credential first, e.g. in a `.env` file:
    AI_GATEWAY_API_KEY=...
"""

import logging

import uvicorn

from research_assistant.backend import app
from research_assistant.config import settings


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
