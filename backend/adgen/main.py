"""
AdGen Studio Backend API
FastAPI application: a script-writing chat plus Veo/Gemini media generation

This is the main entry point that wires together all routes and services.
"""

import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .config import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
    MAX_REQUEST_BODY_BYTES,
    GCP_LOCATION,
    GCP_PROJECT_ID,
    USE_VERTEX_AI,
    list_models,
)
from .routes import auth_router, chat_router, generation_router
from .core import (
    setup_logging,
    get_logger,
    set_request_id,
    clear_context,
    parse_bool_env,
)
from .services.container import Studio, build_studio

# Initialize logging
log_level = os.getenv("LOG_LEVEL", "INFO")
log_file = os.getenv("LOG_FILE")
use_json_logs = parse_bool_env(os.getenv("JSON_LOGS"), default=False)

setup_logging(
    level=log_level,
    log_file=Path(log_file) if log_file else None,
    use_json=use_json_logs,
)

logger = get_logger(__name__, service="api")


def create_app(studio: Optional[Studio] = None) -> FastAPI:
    """
    Build the API.

    Args:
        studio: Pre-wired services (tests). Built from the environment when omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.studio = studio or build_studio()
        logger.info("Starting AdGen Studio API", extra={
            "log_level": log_level,
            "json_logs": use_json_logs,
        })
        try:
            yield
        finally:
            app.state.studio.orchestrator.reset()
            logger.info("AdGen Studio API stopped")

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def add_request_correlation(request: Request, call_next):
        """Add correlation ID, enforce the body size limit, and attach security headers."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        set_request_id(request_id)
        path = request.url.path

        logger.info(f"{request.method} {path}", extra={
            "method": request.method,
            "path": path,
            "client": request.client.host if request.client else "unknown",
        })

        try:
            content_length = request.headers.get("content-length")
            if content_length:
                try:
                    size = int(content_length)
                except ValueError:
                    return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length header"})
                if size > MAX_REQUEST_BODY_BYTES:
                    return JSONResponse(
                        status_code=413,
                        content={
                            "detail": (
                                f"Request body too large. Max allowed: "
                                f"{MAX_REQUEST_BODY_BYTES // (1024 * 1024)}MB"
                            )
                        },
                    )

            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            response.headers.setdefault("X-Content-Type-Options", "nosniff")
            response.headers.setdefault("Referrer-Policy", "no-referrer")
            response.headers.setdefault("X-Frame-Options", "DENY")

            logger.info(f"Response: {response.status_code}", extra={
                "status_code": response.status_code,
                "method": request.method,
                "path": path,
            })
            return response
        finally:
            clear_context()

    # CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Message-ID"],
    )

    app.include_router(chat_router)
    app.include_router(generation_router)
    app.include_router(auth_router)

    @app.get("/")
    async def root():
        """Root endpoint - API info"""
        return {
            "message": "AdGen Studio API - Turn a conversation into a marketing video",
            "version": API_VERSION,
            "models": list_models(),
        }

    @app.get("/health")
    async def health_check(request: Request):
        """
        Health check endpoint.

        Validates the backend credentials (a Gemini API key OR Vertex AI
        project config). Returns 200 if healthy, 503 otherwise.
        """
        checks = {
            "status": "healthy",
            "checks": {
                "llm_backend": {
                    "use_vertex_ai": USE_VERTEX_AI,
                    "backend": "vertex_ai" if USE_VERTEX_AI else "gemini_api",
                },
            },
        }
        all_healthy = True

        if USE_VERTEX_AI:
            checks["checks"]["vertex_ai"] = {
                "project_id_configured": bool(GCP_PROJECT_ID),
                "location": GCP_LOCATION,
            }
            if not GCP_PROJECT_ID:
                all_healthy = False
                logger.warning("Health check: GCP_PROJECT_ID not configured (USE_VERTEX_AI=true)")
        else:
            studio = request.app.state.studio
            key_available = studio.auth_gate.current_key() is not None
            checks["checks"]["gemini_api_key"] = {"configured": key_available}
            if not key_available:
                all_healthy = False
                logger.warning("Health check: no Gemini API key configured or selected")

        checks["checks"]["generation"] = {
            "status": request.app.state.studio.orchestrator.status.value,
        }

        if not all_healthy:
            checks["status"] = "unhealthy"
            raise HTTPException(status_code=503, detail=checks)

        return checks

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "adgen.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=parse_bool_env(os.getenv("RELOAD"), default=True),
    )
