from fastapi import APIRouter
from fastapi.responses import JSONResponse
import logging

from song_explorer.core.search import searcher
from song_explorer.models.recommendation import SearchRequest, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search", response_model=SearchResponse, response_model_exclude_none=True)
def search_songs(request: SearchRequest):
    """
    Free-text search with optional language and mood filters detected in the query
    """
    try:
        result = searcher.search(request.query)
    except Exception:
        logger.exception("Error in search")
        return JSONResponse(status_code=500, content={"success": False, "message": "Search failed"})

    return SearchResponse(
        success=True,
        results=result.songs,
        language_filter=result.language_filter,
        mood_filter=result.mood_filter,
    )
