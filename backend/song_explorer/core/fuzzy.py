from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple
import logging

from rapidfuzz import fuzz, process, utils

from song_explorer.models.song import Song

logger = logging.getLogger(__name__)

DEFAULT_KEYS: Tuple[str, ...] = ("title", "artist", "genre", "mood", "lyrics")

# Whole-string scorers only. Lyrics need every query word present to score
# high; a single shared word must never be enough.
FIELD_SCORERS: Dict[str, Callable[..., float]] = {
    "title": fuzz.token_sort_ratio,
    "artist": fuzz.token_sort_ratio,
    "genre": fuzz.token_sort_ratio,
    "mood": fuzz.token_sort_ratio,
    "lyrics": fuzz.token_set_ratio,
}


@dataclass(frozen=True)
class FuzzyMatch:
    song: Song
    score: float


class FuzzyIndex:
    """Approximate text lookup over a fixed list of songs.

    Each song is scored as its best match across the indexed fields; only
    songs whose similarity reaches ``1 - threshold`` are returned.
    """

    def __init__(self, songs: Sequence[Song], keys: Sequence[str] = DEFAULT_KEYS, threshold: float = 0.4):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.songs: Tuple[Song, ...] = tuple(songs)
        self.keys = tuple(keys)
        self.threshold = threshold
        self.score_cutoff = (1.0 - threshold) * 100
        self._choices: Dict[str, List[str]] = {
            key: [str(getattr(song, key)) for song in self.songs] for key in self.keys
        }

    def __len__(self) -> int:
        return len(self.songs)

    def search(self, query: str, limit: int | None = None) -> List[FuzzyMatch]:
        """Return matches sorted by similarity, best first."""
        if not query or not utils.default_process(query):
            return []

        best: Dict[int, float] = {}
        for key in self.keys:
            hits = process.extract(
                query,
                self._choices[key],
                scorer=FIELD_SCORERS.get(key, fuzz.token_sort_ratio),
                processor=utils.default_process,
                score_cutoff=self.score_cutoff,
                limit=None,
            )
            for _, score, idx in hits:
                if score > best.get(idx, -1.0):
                    best[idx] = score

        # Ties keep dataset order
        ranked = sorted(best.items(), key=lambda item: (-item[1], item[0]))
        if limit is not None:
            ranked = ranked[:limit]

        logger.debug(f"Fuzzy search {query!r} matched {len(best)} songs")
        return [FuzzyMatch(song=self.songs[idx], score=score) for idx, score in ranked]

    def best_match(self, query: str) -> Song | None:
        matches = self.search(query, limit=1)
        return matches[0].song if matches else None
