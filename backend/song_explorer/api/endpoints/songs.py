from fastapi import APIRouter

from song_explorer.core.catalog import catalog
from song_explorer.models.recommendation import RandomSongResponse, SongsResponse

router = APIRouter()


@router.get("/songs", response_model=SongsResponse)
def get_songs():
    """Return the full dataset."""
    return SongsResponse(success=True, songs=list(catalog.songs))


@router.get("/random", response_model=RandomSongResponse)
def get_random_song():
    return RandomSongResponse(success=True, song=catalog.random_song())
