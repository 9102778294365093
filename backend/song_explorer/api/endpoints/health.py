from fastapi import APIRouter
import logging

from song_explorer.core.catalog import catalog

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health_check():
    """Report dataset size and whether semantic recommendations are active"""
    if not catalog.is_ready:
        logger.warning("Health check requested before the catalog was initialized")
        return {"status": "starting", "songs": 0, "embeddings": False}

    return {
        "status": "healthy",
        "songs": len(catalog.songs),
        "embeddings": catalog.embeddings is not None,
    }
