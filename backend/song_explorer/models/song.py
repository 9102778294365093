from typing import List
from pydantic import BaseModel, Field


class Song(BaseModel):
    id: int
    title: str
    artist: str
    genre: str
    mood: str
    language: str
    tempo: float
    energy: float = Field(..., ge=0.0, le=1.0)
    acousticness: float = Field(..., ge=0.0, le=1.0)
    danceability: float = Field(..., ge=0.0, le=1.0)
    lyrics: str = ""

    class Config:
        frozen = True

    @property
    def moods(self) -> List[str]:
        """Lowercased, trimmed mood tokens."""
        return [m.strip() for m in self.mood.lower().split(",")]

    @property
    def display_name(self) -> str:
        return f"{self.title} by {self.artist}"

    def embedding_text(self, include_lyrics: bool = True) -> str:
        parts = [self.title, self.artist, self.genre, self.mood]
        if include_lyrics:
            parts.append(self.lyrics)
        return " ".join(parts)


class RecommendedSong(Song):
    reason: str = ""
