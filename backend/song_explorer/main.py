from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api.endpoints import recommendations, search, songs, health
from .core.config import PROJECT_NAME, API_PREFIX, settings
from .core.catalog import catalog
from .core.logging import setup_logging
import logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=PROJECT_NAME,
    description="Chatbot API that recommends songs using fuzzy search, metadata similarity and sentence embeddings",
    version=settings.VERSION
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=settings.CORS_METHODS,
    allow_headers=settings.CORS_HEADERS,
)

# Include routers
app.include_router(health.router, prefix=API_PREFIX, tags=["health"])
app.include_router(songs.router, prefix=API_PREFIX, tags=["songs"])
app.include_router(search.router, prefix=API_PREFIX, tags=["search"])
app.include_router(recommendations.router, prefix=API_PREFIX, tags=["recommendations"])

@app.on_event("startup")
def startup_event():
    """Load the dataset and build indices before accepting traffic"""
    if catalog.is_ready:
        logger.info("Song catalog already initialized")
        return
    try:
        catalog.initialize()
    except Exception as e:
        logger.error(f"Error during startup: {e}")
        raise
    logger.info(f"🎧 {PROJECT_NAME} running on http://{settings.HOST}:{settings.PORT}")

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to the {PROJECT_NAME} API",
        "docs_url": "/docs",
        "redoc_url": "/redoc"
    }
