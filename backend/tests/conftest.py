import os

# Settings are read at import time; keep the real model out of the test run
os.environ["EMBEDDINGS_ENABLED"] = "false"
os.environ["DEBUG"] = "false"

import hashlib

import numpy as np
import pytest

from song_explorer.core.catalog import SongCatalog
from song_explorer.core.config import Settings
from song_explorer.models.song import Song


class FakeEmbedder:
    """Deterministic bag-of-words embeddings; no model download needed."""

    dimension = 32

    def __init__(self):
        self.calls = []

    def encode(self, texts):
        self.calls.append(list(texts))
        vectors = np.zeros((len(texts), self.dimension), dtype=np.float32)
        for row, text in enumerate(texts):
            for word in text.lower().replace(",", " ").split():
                bucket = int(hashlib.md5(word.encode()).hexdigest(), 16) % self.dimension
                vectors[row, bucket] += 1.0
            norm = np.linalg.norm(vectors[row])
            if norm:
                vectors[row] /= norm
        return vectors


def make_song(song_id, **overrides):
    data = {
        "id": song_id,
        "title": f"Song {song_id}",
        "artist": f"Artist {song_id}",
        "genre": "Pop",
        "mood": "Happy",
        "language": "English",
        "tempo": 100,
        "energy": 0.5,
        "acousticness": 0.5,
        "danceability": 0.5,
        "lyrics": "",
    }
    data.update(overrides)
    return Song(**data)


@pytest.fixture
def sample_songs():
    return [
        make_song(1, title="Tum Hi Ho", artist="Arijit Singh", genre="Romantic", mood="Romantic, Emotional",
                  language="Hindi", tempo=94, energy=0.42, acousticness=0.61, danceability=0.38,
                  lyrics="Hum tere bin ab reh nahi sakte"),
        make_song(2, title="Channa Mereya", artist="Arijit Singh", genre="Romantic", mood="Sad, Emotional",
                  language="Hindi", tempo=86, energy=0.38, acousticness=0.66, danceability=0.32,
                  lyrics="Acha chalta hoon duaon mein yaad rakhna"),
        make_song(3, title="Badtameez Dil", artist="Benny Dayal", genre="Bollywood Dance", mood="Energetic, Party",
                  language="Hindi", tempo=132, energy=0.89, acousticness=0.08, danceability=0.81,
                  lyrics="Badtameez dil maane na"),
        make_song(4, title="Zingaat", artist="Ajay-Atul", genre="Marathi Dance", mood="Energetic, Party",
                  language="Marathi", tempo=138, energy=0.94, acousticness=0.06, danceability=0.88,
                  lyrics="Zingaat zingaat jhala jhingaat"),
        make_song(5, title="Perfect", artist="Ed Sheeran", genre="Romantic Pop", mood="Romantic, Peaceful",
                  language="English", tempo=95, energy=0.45, acousticness=0.16, danceability=0.6,
                  lyrics="I found a love for me darling just dive right in"),
        make_song(6, title="Someone Like You", artist="Adele", genre="Soul", mood="Sad, Melancholic",
                  language="English", tempo=68, energy=0.32, acousticness=0.89, danceability=0.44,
                  lyrics="Never mind I'll find someone like you"),
        make_song(7, title="Kesariya", artist="Arijit Singh", genre="Romantic", mood="Romantic, Happy",
                  language="Hindi", tempo=94, energy=0.55, acousticness=0.48, danceability=0.56,
                  lyrics="Kesariya tera ishq hai piya"),
        make_song(8, title="Sairat Zaala Ji", artist="Ajay-Atul", genre="Romantic", mood="Romantic, Peaceful",
                  language="Marathi", tempo=90, energy=0.44, acousticness=0.58, danceability=0.42,
                  lyrics="Sairat zaala ji aala aala waara"),
        make_song(9, title="Agar Tum Saath Ho", artist="Alka Yagnik", genre="Romantic", mood="Sad, Melancholic",
                  language="Hindi", tempo=88, energy=0.31, acousticness=0.74, danceability=0.29,
                  lyrics="Pal bhar thehar jaao dil ye sambhal jaaye"),
        make_song(10, title="Uptown Funk", artist="Bruno Mars", genre="Funk Pop", mood="Party, Happy",
                  language="English", tempo=115, energy=0.84, acousticness=0.01, danceability=0.86,
                  lyrics="This hit that ice cold"),
    ]


@pytest.fixture
def test_settings():
    return Settings(EMBEDDINGS_ENABLED=False)


@pytest.fixture
def metadata_catalog(sample_songs, test_settings):
    song_catalog = SongCatalog(settings=test_settings)
    song_catalog.initialize(songs=sample_songs)
    return song_catalog


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def semantic_catalog(sample_songs, fake_embedder):
    song_catalog = SongCatalog(settings=Settings(EMBEDDINGS_ENABLED=True))
    song_catalog.initialize(songs=sample_songs, embedder=fake_embedder)
    return song_catalog
