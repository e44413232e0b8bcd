from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__, config
from .routers.score import router as score_router


config.configure_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup
    print("Starting Hotel Site Health Scoring Service")
    config.log_config_status()
    print("   Ready to score hotel websites!")

    yield

    print("Shutting down Hotel Site Health Scoring Service")


app = FastAPI(
    title="Hotel Site Health Scoring Service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],  # Allow all HTTP methods
    allow_headers=["*"],  # Allow all headers
)

app.include_router(score_router)

@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Hotel Site Health",
        "version": __version__,
        "description": "Performance, SEO and mobile-readiness score for hotel websites",
        "docs": "/docs",
        "endpoints": {
            "score": "POST /score - Normalize and score a raw measurement record",
            "score_inputs": "POST /score/inputs - Score canonical BasicInputs",
            "health": "GET /score/health - Service health check"
        }
    }


@app.get(
    "/health",
    summary="Global Health Check",
    description="Check if the API server is running",
    tags=["General"]
)
async def health():
    """Global health check endpoint."""
    return {
        "status": "healthy",
        "service": "hotel-site-health",
        "version": __version__
    }

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if config.DEBUG else "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "site_health.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.DEBUG,
    )
