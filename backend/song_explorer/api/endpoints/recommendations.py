from fastapi import APIRouter
from fastapi.responses import JSONResponse
import logging

from song_explorer.core.exceptions import SongNotFoundError
from song_explorer.core.recommender import recommender
from song_explorer.models.recommendation import RecommendRequest, RecommendResponse, TargetSong

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_MESSAGE = "🎵 I couldn't find that song! Try being more specific or check the spelling."
FAILURE_MESSAGE = "🎸 Oops! Something went wrong. Let me try again!"


@router.post("/recommend", response_model=RecommendResponse, response_model_exclude_none=True)
def recommend_songs(request: RecommendRequest):
    """Find the song the user is talking about and recommend similar ones."""
    try:
        target, recommendations = recommender.recommend(query=request.query, song_title=request.song_title)
    except SongNotFoundError as e:
        logger.info(f"No target song for query {e.query!r}")
        return RecommendResponse(success=False, message=NOT_FOUND_MESSAGE, suggestions=e.suggestions)
    except Exception:
        logger.exception("Error in recommendation")
        return JSONResponse(status_code=500, content={"success": False, "message": FAILURE_MESSAGE})

    return RecommendResponse(
        success=True,
        target_song=TargetSong(title=target.title, artist=target.artist, mood=target.mood),
        recommendations=recommendations,
    )
