import logging
import random
from typing import Dict, Optional, Sequence, Tuple

from .config import Settings, settings as default_settings
from .data_loader import DataLoader
from .embeddings import EmbeddingStore, TextEmbedder, build_embedding_store
from .exceptions import CatalogNotReadyError, DatasetError
from .fuzzy import FuzzyIndex
from song_explorer.models.song import Song

logger = logging.getLogger(__name__)


class SongCatalog:
    """Process-wide song data, built once at startup and read-only afterwards."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self._songs: Optional[Tuple[Song, ...]] = None
        self._by_id: Dict[int, Song] = {}
        self._fuzzy_index: Optional[FuzzyIndex] = None
        self._embeddings: Optional[EmbeddingStore] = None

    def initialize(self, songs: Optional[Sequence[Song]] = None, embedder: Optional[TextEmbedder] = None) -> None:
        """Load the dataset, build the fuzzy index and (best-effort) embeddings"""
        if songs is None:
            songs = DataLoader(self.settings.DATASET_PATH).load_songs()

        songs = tuple(songs)
        if not songs:
            raise DatasetError("Dataset contains no songs")
        by_id = {song.id: song for song in songs}
        if len(by_id) != len(songs):
            raise ValueError("Song ids must be unique")

        fuzzy_index = FuzzyIndex(songs, threshold=self.settings.FUZZY_THRESHOLD)
        embeddings = build_embedding_store(songs, self.settings, embedder=embedder)

        self._songs = songs
        self._by_id = by_id
        self._fuzzy_index = fuzzy_index
        self._embeddings = embeddings

        logger.info(
            f"Dataset loaded with {len(songs)} songs",
            extra={"semantic_mode": embeddings is not None},
        )

    @property
    def is_ready(self) -> bool:
        return self._songs is not None

    def _require_ready(self) -> None:
        if self._songs is None:
            raise CatalogNotReadyError("Song catalog has not been initialized")

    @property
    def songs(self) -> Tuple[Song, ...]:
        self._require_ready()
        return self._songs

    @property
    def fuzzy_index(self) -> FuzzyIndex:
        self._require_ready()
        return self._fuzzy_index

    @property
    def embeddings(self) -> Optional[EmbeddingStore]:
        """None when the embedding model is unavailable."""
        self._require_ready()
        return self._embeddings

    def get_song(self, song_id: int) -> Optional[Song]:
        self._require_ready()
        return self._by_id.get(song_id)

    def random_song(self) -> Song:
        self._require_ready()
        return random.choice(self._songs)


# Create global catalog instance
catalog = SongCatalog()
