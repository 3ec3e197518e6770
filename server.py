"""
Practice Server - Board exam practice sessions

FastAPI server with:
- Question bank loaded once at startup
- One session engine per user (header or guest cookie)
- Preferences persisted in a key-value store and mirrored in a cookie
- CORS and structured error responses
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import app_state
from config import get_config
from practice.exceptions import InternalConsistencyError, PracticeError
from practice.router import router as practice_router

config = get_config()

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# FASTAPI APP
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    repository = app_state.get_repository(config)
    logger.info(f"🚀 Starting Practice Server ({len(repository.get_all())} questoes)")
    yield
    await app_state.cleanup()
    logger.info("👋 Practice Server stopped")


app = FastAPI(
    title="Practice Server",
    description="Board exam practice sessions",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ERROR HANDLERS
# =============================================================================


@app.exception_handler(InternalConsistencyError)
async def internal_consistency_handler(request: Request, exc: InternalConsistencyError):
    logger.error(f"Invariante violada em {request.url.path}: {exc.message} {exc.details}")
    return JSONResponse(status_code=500, content=exc.to_dict())


@app.exception_handler(PracticeError)
async def practice_error_handler(request: Request, exc: PracticeError):
    logger.warning(f"Requisicao rejeitada em {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content=exc.to_dict())


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/")
async def root():
    """Health check."""
    return {
        "status": "ok",
        "message": "Practice Server",
        "active_sessions": len(app_state.engines),
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    repository = app_state.get_repository(config)
    return {
        "status": "healthy",
        "environment": config.environment,
        "question_bank": {
            "questions": len(repository.get_all()),
            "categories": len(repository.categories()),
        },
        "active_sessions": len(app_state.engines),
    }


app.include_router(practice_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
