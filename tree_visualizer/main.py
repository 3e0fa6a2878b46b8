"""
FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tree_visualizer import __version__
from tree_visualizer.config import settings
from tree_visualizer.middleware.logging import RequestLoggingMiddleware
from tree_visualizer.api import parse
from tree_visualizer.utils.logging import setup_logging, get_logger

# Configure structured logging
setup_logging(settings.log_level)

logger = get_logger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Syntax Tree Visualizer",
    description="Position-annotated syntax trees for interactive tree views",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "version": __version__}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Syntax Tree Visualizer API",
        "version": __version__,
        "docs": "/docs"
    }


# Include API routers
app.include_router(parse.router)


@app.on_event("startup")
async def startup_event():
    """Load language plugins on application startup."""
    logger.info("Starting Syntax Tree Visualizer API")
    
    manager = parse.get_plugin_manager()
    logger.info(f"Language plugins loaded: {manager.list_supported_languages()}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
