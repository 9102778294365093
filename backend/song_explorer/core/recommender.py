import re
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .catalog import SongCatalog, catalog as default_catalog
from .exceptions import SongNotFoundError
from song_explorer.models.song import Song, RecommendedSong

logger = logging.getLogger(__name__)

# Phrasings that wrap a song name; first match wins
QUERY_PATTERNS = [
    re.compile(r"songs?\s+like\s+(.+)", re.IGNORECASE),
    re.compile(r"similar\s+to\s+(.+)", re.IGNORECASE),
    re.compile(r"recommend.*like\s+(.+)", re.IGNORECASE),
    re.compile(r"find.*like\s+(.+)", re.IGNORECASE),
    re.compile(r"(.+)\s+type\s+songs?", re.IGNORECASE),
]

GENRE_MATCH_WEIGHT = 30
GENRE_PARTIAL_WEIGHT = 15
LANGUAGE_WEIGHT = 20
MOOD_WEIGHT = 15
ENERGY_WEIGHT = 15
ACOUSTICNESS_WEIGHT = 10
DANCEABILITY_WEIGHT = 10
# (max BPM difference, points), checked in order
TEMPO_BANDS = [(10, 20), (20, 10), (30, 5)]

REASON_TEMPO_WINDOW = 20
REASON_ENERGY_WINDOW = 0.2


def extract_song_name(query: str) -> str:
    """Pull the song name out of phrasings like "songs like X"."""
    for pattern in QUERY_PATTERNS:
        match = pattern.search(query)
        if match:
            return match.group(1).strip()
    return query


def shared_moods(target: Song, candidate: Song) -> List[str]:
    """Target mood tokens that contain, or are contained in, a candidate token."""
    candidate_moods = candidate.moods
    return [
        mood for mood in target.moods
        if any(other in mood or mood in other for other in candidate_moods)
    ]


def tempo_points(tempo_diff: float) -> int:
    for max_diff, points in TEMPO_BANDS:
        if tempo_diff <= max_diff:
            return points
    return 0


def metadata_score(target: Song, candidate: Song) -> float:
    """Weighted attribute similarity of ``candidate`` to ``target``; higher is closer."""
    score = 0.0

    target_genre = target.genre.lower()
    candidate_genre = candidate.genre.lower()
    if candidate_genre == target_genre:
        score += GENRE_MATCH_WEIGHT
    elif target_genre.split(" ")[0] in candidate_genre:
        score += GENRE_PARTIAL_WEIGHT

    if candidate.language.lower() == target.language.lower():
        score += LANGUAGE_WEIGHT

    score += len(shared_moods(target, candidate)) * MOOD_WEIGHT

    score += tempo_points(abs(candidate.tempo - target.tempo))

    score += (1 - abs(candidate.energy - target.energy)) * ENERGY_WEIGHT
    score += (1 - abs(candidate.acousticness - target.acousticness)) * ACOUSTICNESS_WEIGHT
    score += (1 - abs(candidate.danceability - target.danceability)) * DANCEABILITY_WEIGHT

    return score


def format_tempo(tempo: float) -> str:
    return f"{tempo:g}"


def generate_reason(target: Song, song: Song) -> str:
    """Comma-joined explanation of why ``song`` was recommended for ``target``."""
    reasons = []

    if song.genre == target.genre:
        reasons.append(f"same {song.genre} genre")
    if song.language == target.language:
        reasons.append(f"{song.language} song")
    if abs(song.tempo - target.tempo) <= REASON_TEMPO_WINDOW:
        reasons.append(f"similar tempo ({format_tempo(song.tempo)} BPM)")

    moods = shared_moods(target, song)
    if moods:
        reasons.append(f"{moods[0]} vibes")

    if abs(song.energy - target.energy) < REASON_ENERGY_WINDOW:
        reasons.append("similar energy")

    return ", ".join(reasons)


def merge_recommendations(
    metadata_ranked: Sequence[Song],
    semantic_ranked: Optional[Sequence[Song]] = None,
    max_results: int = 5,
    head: int = 3,
) -> List[Song]:
    """Blend metadata and semantic rankings into one deduplicated list.

    Order of precedence: the first ``head`` metadata matches, the first
    ``head`` semantic matches, then the remaining metadata matches until
    ``max_results`` songs are chosen. Without semantic results this is
    simply the metadata top ``max_results``.
    """
    if semantic_ranked is None:
        semantic_ranked = []

    combined: List[Song] = []
    seen_ids = set()

    def take(songs: Iterable[Song]) -> None:
        for song in songs:
            if len(combined) >= max_results:
                return
            if song.id not in seen_ids:
                combined.append(song)
                seen_ids.add(song.id)

    take(metadata_ranked[:head])
    take(semantic_ranked[:head])
    take(metadata_ranked[head:])
    return combined


class RecommendationEngine:
    def __init__(self, song_catalog: Optional[SongCatalog] = None):
        self.catalog = song_catalog or default_catalog

    @property
    def settings(self):
        return self.catalog.settings

    def suggestions(self) -> List[str]:
        return [song.display_name for song in self.catalog.songs[:self.settings.SUGGESTION_COUNT]]

    def resolve_target(self, query: Optional[str] = None, song_title: Optional[str] = None) -> Song:
        """Find the song a query refers to, or raise SongNotFoundError"""
        index = self.catalog.fuzzy_index
        target = None

        if song_title:
            target = index.best_match(song_title)

        if target is None and query:
            search_query = extract_song_name(query)
            logger.debug(f"Resolving target from {query!r} using {search_query!r}")
            target = index.best_match(search_query)

        if target is None:
            raise SongNotFoundError(query or song_title, self.suggestions())
        return target

    def find_similar_by_metadata(self, target: Song, limit: int = 5) -> List[Tuple[Song, float]]:
        """Rank every other song by metadata score; ties keep dataset order"""
        scored = [
            (song, metadata_score(target, song))
            for song in self.catalog.songs
            if song.id != target.id
        ]
        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[:limit]

    def find_similar_by_embedding(self, target: Song, k: int = 5) -> Optional[List[Tuple[Song, float]]]:
        """Rank songs by embedding similarity; None when embeddings are unavailable"""
        store = self.catalog.embeddings
        if store is None:
            return None

        query_vector = store.embed_query(target)
        results = []
        for song_id, similarity in store.find_similar(query_vector, k=k, exclude_ids=[target.id]):
            song = self.catalog.get_song(song_id)
            if song is not None:
                results.append((song, similarity))
        return results

    def recommend(self, query: Optional[str] = None, song_title: Optional[str] = None) -> Tuple[Song, List[RecommendedSong]]:
        """Resolve the target song and return it with explained recommendations"""
        target = self.resolve_target(query=query, song_title=song_title)

        metadata_similar = self.find_similar_by_metadata(target, limit=self.settings.METADATA_CANDIDATES)
        semantic_similar = self.find_similar_by_embedding(target, k=self.settings.SEMANTIC_CANDIDATES)

        recommendations = merge_recommendations(
            [song for song, _ in metadata_similar],
            [song for song, _ in semantic_similar] if semantic_similar is not None else None,
            max_results=self.settings.MAX_RECOMMENDATIONS,
        )

        logger.info(
            f"Recommended {len(recommendations)} songs for {target.display_name}",
            extra={"target_id": target.id, "semantic": semantic_similar is not None},
        )
        return target, [
            RecommendedSong(**song.model_dump(), reason=generate_reason(target, song))
            for song in recommendations
        ]


# Create global instance
recommender = RecommendationEngine()
