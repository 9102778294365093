from typing import List, Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from .song import Song, RecommendedSong


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RecommendRequest(CamelModel):
    query: Optional[str] = None
    song_title: Optional[str] = None


class TargetSong(CamelModel):
    title: str
    artist: str
    mood: str


class RecommendResponse(CamelModel):
    success: bool
    target_song: Optional[TargetSong] = None
    recommendations: Optional[List[RecommendedSong]] = None
    message: Optional[str] = None
    suggestions: Optional[List[str]] = None


class SearchRequest(CamelModel):
    query: str


class SearchResponse(CamelModel):
    success: bool
    results: List[Song] = []
    language_filter: Optional[str] = None
    mood_filter: Optional[str] = None
    message: Optional[str] = None


class SongsResponse(CamelModel):
    success: bool
    songs: List[Song]


class RandomSongResponse(CamelModel):
    success: bool
    song: Song
