from typing import Dict, List, Optional, Protocol, Sequence, Tuple
import logging

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as pairwise_cosine

from song_explorer.core.config import Settings
from song_explorer.models.song import Song

logger = logging.getLogger(__name__)


class TextEmbedder(Protocol):
    def encode(self, texts: Sequence[str]) -> np.ndarray:
        ...


class SentenceEmbedder:
    """Mean-pooled, L2-normalized sentence-transformers embeddings."""

    def __init__(self, model_name: str):
        # Imported lazily so that metadata-only deployments never load torch
        from sentence_transformers import SentenceTransformer

        logger.info(f"Loading embedding model: {model_name}")
        self.model_name = model_name
        self._model = SentenceTransformer(model_name)

    def encode(self, texts: Sequence[str]) -> np.ndarray:
        embeddings = self._model.encode(
            list(texts),
            convert_to_numpy=True,
            normalize_embeddings=True,
            show_progress_bar=False,
        )
        return embeddings.astype("float32")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors; 0.0 when either has zero norm."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Vector shapes differ: {a.shape} vs {b.shape}")
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


class EmbeddingStore:
    """Read-only song embeddings, one matrix row per song id."""

    def __init__(self, song_ids: Sequence[int], matrix: np.ndarray, embedder: Optional[TextEmbedder] = None):
        matrix = np.array(matrix, dtype=np.float32)
        if matrix.ndim != 2 or matrix.shape[0] != len(song_ids):
            raise ValueError(
                f"Embedding matrix shape {matrix.shape} does not match {len(song_ids)} song ids"
            )
        matrix.flags.writeable = False
        self.song_ids: Tuple[int, ...] = tuple(song_ids)
        self.id_to_index: Dict[int, int] = {song_id: idx for idx, song_id in enumerate(self.song_ids)}
        self.matrix = matrix
        self.embedder = embedder

    def __len__(self) -> int:
        return len(self.song_ids)

    @property
    def dimension(self) -> int:
        return self.matrix.shape[1]

    def vector(self, song_id: int) -> np.ndarray:
        return self.matrix[self.id_to_index[song_id]]

    def embed_query(self, song: Song) -> np.ndarray:
        """Embed a target song's descriptive text (no lyrics) for lookup.

        Falls back to the stored vector when no embedder is attached.
        """
        if self.embedder is None:
            return self.vector(song.id)
        return self.embedder.encode([song.embedding_text(include_lyrics=False)])[0]

    def find_similar(self, query_vector: np.ndarray, k: int = 5, exclude_ids: Sequence[int] = ()) -> List[Tuple[int, float]]:
        """Top ``k`` (song_id, similarity) pairs, best first."""
        if len(self.song_ids) == 0:
            return []
        query = np.asarray(query_vector, dtype=np.float32).reshape(1, -1)
        # Zero-norm rows (and a zero query) come back as 0.0 similarity
        similarities = pairwise_cosine(query, self.matrix)[0]

        excluded = set(exclude_ids)
        order = np.argsort(-similarities, kind="stable")
        results = []
        for idx in order:
            song_id = self.song_ids[idx]
            if song_id in excluded:
                continue
            results.append((song_id, float(similarities[idx])))
            if len(results) >= k:
                break
        return results


def build_embedding_store(songs: Sequence[Song], settings: Settings, embedder: Optional[TextEmbedder] = None) -> Optional[EmbeddingStore]:
    """Embed every song once; returns None when embeddings are unavailable."""
    if not settings.EMBEDDINGS_ENABLED:
        logger.info("Embeddings disabled by configuration - using metadata-based recommendations only")
        return None

    try:
        logger.info("Initializing song embeddings...")
        if embedder is None:
            embedder = SentenceEmbedder(settings.EMBEDDING_MODEL_NAME)
        matrix = embedder.encode([song.embedding_text() for song in songs])
        store = EmbeddingStore([song.id for song in songs], matrix, embedder=embedder)
        logger.info(
            "Embeddings initialized successfully",
            extra={"songs": len(store), "dimension": store.dimension},
        )
        return store
    except Exception as e:
        logger.warning(
            f"Error initializing embeddings: {e} - using metadata-based recommendations only",
            exc_info=True,
        )
        return None
