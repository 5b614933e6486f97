"""
FastAPI Application Entry Point

Integrates:
  - Word-help endpoints (/api/word-help, /api/define-word, /api/generate-image-prompt)
  - Health check (/health) and diagnostic probe (/test)
  - Startup model resolution
  - Middleware for logging & error handling

Run: uvicorn main:app --reload --host 0.0.0.0 --port 3001
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.word_help import router as word_help_router, word_required_response
from config import KindredConfig
from inference import GeminiModelBackend, ModelBackend
from kindred.errors import ResolutionExhausted
from kindred.health import HealthChecker, run_diagnostic
from kindred.orchestrator import WordHelpOrchestrator
from kindred.resolver import ModelResolver
from kindred.service import WordHelpService

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def _resolve_in_background(resolver: ModelResolver) -> None:
    try:
        model = await resolver.resolve()
        logger.info(f"Server ready with model: {model}")
    except ResolutionExhausted as e:
        logger.error(f"Could not find a working Gemini model: {e.message}")
        logger.error("Please check your API key at: https://aistudio.google.com/app/apikey")


def create_app(
    config: Optional[KindredConfig] = None,
    backend: Optional[ModelBackend] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config:  Defaults to KindredConfig.from_env() at startup.
        backend: Defaults to GeminiModelBackend; tests inject a stub.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan: startup and shutdown handlers.

        Startup fails (ConfigurationError / ResolutionExhausted) in blocking
        mode so the process never advertises readiness without a model.
        """
        cfg = config or KindredConfig.from_env()
        cfg.validate()
        logging.getLogger().setLevel(cfg.log_level)

        model_backend = backend or GeminiModelBackend(api_key=cfg.gemini_api_key)
        resolver = ModelResolver(model_backend, cfg.model_candidates, cfg.probe_timeout_s)
        orchestrator = WordHelpOrchestrator(model_backend, cfg.generation_timeout_s)

        app.state.config = cfg
        app.state.backend = model_backend
        app.state.resolver = resolver
        app.state.word_help_service = WordHelpService(resolver, orchestrator)
        app.state.health_checker = HealthChecker(resolver, cfg.credential_present)

        # Startup
        logger.info("=" * 60)
        logger.info("Kindred backend starting up...")
        logger.info(f"API Key loaded: {'YES' if cfg.credential_present else 'NO'}")
        logger.info(f"Model candidates: {len(cfg.model_candidates)}")
        logger.info(f"Startup resolution: {cfg.startup_resolution}")
        logger.info("=" * 60)

        background: Optional[asyncio.Task] = None
        if cfg.startup_resolution == "blocking":
            model = await resolver.resolve()
            logger.info(f"Server ready with model: {model}")
        else:
            background = asyncio.create_task(_resolve_in_background(resolver))

        yield

        # Shutdown
        if background is not None and not background.done():
            background.cancel()
        resolver.cancel_inflight()
        logger.info("Kindred backend shutting down...")

    app = FastAPI(
        title="Kindred API",
        description="Word help for young readers: definitions and picture prompts",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware for logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        logger.debug(f"{request.method} {request.url.path}")
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.error(f"Request error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error"},
            )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Unparseable word bodies are reported like a missing word."""
        if request.url.path.startswith("/api/"):
            return word_required_response()
        return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})

    # Include routers
    app.include_router(word_help_router)

    @app.get("/health")
    async def health(request: Request):
        """Readiness snapshot; model is "initializing" until resolved."""
        checker: HealthChecker = request.app.state.health_checker
        return checker.to_dict(checker.check())

    @app.get("/test")
    async def diagnostic(request: Request, reprobe: bool = False):
        """Operator troubleshooting: resolve if needed, then one trivial model call."""
        state = request.app.state
        status_code, body = await run_diagnostic(
            state.resolver,
            state.backend,
            timeout_s=state.config.probe_timeout_s,
            reprobe=reprobe,
        )
        return JSONResponse(status_code=status_code, content=body)

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Kindred API",
            "version": "1.0.0",
            "status": "running",
            "endpoints": {
                "word_help": "POST /api/word-help",
                "define_word": "POST /api/define-word",
                "image_prompt": "POST /api/generate-image-prompt",
                "health": "GET /health",
                "diagnostic": "GET /test",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=KindredConfig.from_env().port)
