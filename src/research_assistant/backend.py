"""
FastAPI backend for the Research Assistant.

Exposes one POST route per research feature, each a thin wrapper over the
shared `ResearchPipeline`:
- /generate-subtopics   {topic}
- /analyze-research     {topic}
- /generate-citations   {topic, style, fileContent?, fileName?}
- /synthesize-research  {context}

Failures are returned as ``{"error": message}`` with status 429 (rate
limited), 402 (credits exhausted) or 500 (everything else).
"""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import Settings, settings as default_settings
from .models import AnalysisRequest, CitationRequest, FeatureRequest, PlanningRequest, SynthesisRequest
from .pipeline import PipelineRun, ResearchPipeline


logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"


def _render(run: PipelineRun) -> JSONResponse:
    if run.error is not None:
        return JSONResponse(status_code=run.error.status_code, content={"error": run.error.message})
    return JSONResponse(
        status_code=200,
        content=run.result.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def create_app(
    pipeline: Optional[ResearchPipeline] = None,
    config: Optional[Settings] = None,
) -> FastAPI:
    config = config or (pipeline.config if pipeline is not None else default_settings)
    owns_pipeline = pipeline is None
    pipeline = pipeline or ResearchPipeline(config=config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_pipeline:
            await pipeline.aclose()

    app = FastAPI(title="Research Assistant", version="0.1.0", lifespan=lifespan)
    app.state.pipeline = pipeline

    # Allow browser clients on other origins to call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def answer_preflight(request: Request, call_next):
        # Any OPTIONS request succeeds with an empty body, before routing.
        if request.method != "OPTIONS":
            return await call_next(request)
        headers = {
            "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
            "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
        }
        origin = request.headers.get("origin")
        if "*" in config.cors_allow_origins:
            headers["Access-Control-Allow-Origin"] = "*"
        elif origin and origin in config.cors_allow_origins:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
        return Response(status_code=200, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed body on %s: %s", request.url.path, exc.errors())
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Request body is invalid")
        return JSONResponse(
            status_code=500,
            content={"error": f"{field}: {message}" if field else message},
        )

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    async def handle(request: FeatureRequest) -> JSONResponse:
        return _render(await pipeline.run(request))

    @app.post("/generate-subtopics")
    async def generate_subtopics(payload: PlanningRequest) -> JSONResponse:
        """Break a research topic into 4-6 actionable subtopics."""
        return await handle(payload)

    @app.post("/analyze-research")
    async def analyze_research(payload: AnalysisRequest) -> JSONResponse:
        """Insights, comparisons and chart suggestions for a topic."""
        return await handle(payload)

    @app.post("/generate-citations")
    async def generate_citations(payload: CitationRequest) -> JSONResponse:
        return await handle(payload)

    @app.post("/synthesize-research")
    async def synthesize_research(payload: SynthesisRequest) -> JSONResponse:
        return await handle(payload)

    return app


app = create_app()
