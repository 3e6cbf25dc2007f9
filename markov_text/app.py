"""
Markov Text Microservice
Main application entry point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from markov_text.config import settings
from markov_text.utils.logger import setup_logger

# Setup logging
logger = setup_logger("markov_text")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for service initialization"""
    logger.info("[BOOT] Starting Markov text service...")
    logger.info(
        f"[BOOT] Defaults: state_size={settings.MARKOV_STATE_SIZE}, "
        f"tries={settings.MARKOV_TRIES}, words={settings.MARKOV_MIN_WORDS}-{settings.MARKOV_MAX_WORDS}"
    )
    try:
        yield
    finally:
        logger.info(f"[SHUTDOWN] Dropping {len(markov_router.MODEL_CACHE)} cached models")
        markov_router.MODEL_CACHE.clear()
        logger.info("[SHUTDOWN] Markov text service stopped")


# Create FastAPI app
app = FastAPI(
    title="Markov Text Service",
    description="Markov chain sentence generation with corpus-overlap rejection",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"[ERR] Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error": {
                "code": "MARKOV_SERVICE_ERROR",
                "message": "Internal server error occurred",
                "details": {"type": type(exc).__name__},
            },
        },
    )


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "ok": True,
        "data": {
            "status": "healthy",
            "models": len(markov_router.MODEL_CACHE),
        },
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "endpoints": {
            "health": "/health",
            "docs": "/docs",
            "markov": "/markov/*",
        },
    }


from markov_text.api.routers import markov_router

app.include_router(markov_router.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "markov_text.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
