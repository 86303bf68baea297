"""
FastAPI application for the SEO analysis endpoint.

POST /analyze-seo runs the analysis pipeline for one URL; GET / is a liveness check.
Run with: uvicorn seo_audit_agent.server:create_app --factory --port 3000
"""

from __future__ import annotations

from typing import Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from seo_audit_agent.config import AgentConfig
from seo_audit_agent.models import AnalysisResponse
from seo_audit_agent.workflow import run_analysis

LIVENESS_MESSAGE = "Success! Your AI Analyzer server is running."
MISSING_URL_MESSAGE = "URL is required"
GENERIC_FAILURE_MESSAGE = "Failed to generate SEO analysis."

Analyzer = Callable[[str, AgentConfig], AnalysisResponse]


class AnalyzeRequest(BaseModel):
    """POST /analyze-seo body."""

    url: str | None = Field(None, description="Site or page URL to analyze")


def create_app(config: AgentConfig | None = None, analyzer: Analyzer = run_analysis) -> FastAPI:
    """Build the app around an explicit config so tests can inject credentials and endpoints."""
    app_config = config or AgentConfig.from_env()

    app = FastAPI(title="SEO Audit Agent", description="Multi-source SEO analysis API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(app_config.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.config = app_config

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed bodies and non-string urls are answered like a missing url, without echoing input.
        kinds = ",".join(sorted({str(error.get("type", "")) for error in exc.errors()}))
        print(f"Rejected request: {request.url.path} | {kinds}")
        return JSONResponse(status_code=400, content={"error": MISSING_URL_MESSAGE})

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": LIVENESS_MESSAGE}

    @app.post("/analyze-seo")
    def analyze_seo(body: AnalyzeRequest | None = None) -> JSONResponse:
        url = ((body.url if body else None) or "").strip()
        if not url:
            return JSONResponse(status_code=400, content={"error": MISSING_URL_MESSAGE})

        try:
            result = analyzer(url, app_config)
        except Exception as exc:  # noqa: BLE001
            print(f"Analysis failed: {url} | {type(exc).__name__}: {exc}")
            return JSONResponse(status_code=500, content={"error": GENERIC_FAILURE_MESSAGE})

        return JSONResponse(status_code=200, content=result.to_dict())

    return app
