import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .catalog import SongCatalog, catalog as default_catalog
from .fuzzy import FuzzyIndex
from song_explorer.models.song import Song

logger = logging.getLogger(__name__)

LANGUAGES = ['hindi', 'marathi', 'english']
MOODS = ['romantic', 'energetic', 'peaceful', 'party', 'melancholic', 'happy', 'sad']


@dataclass
class SearchQuery:
    terms: str
    language: Optional[str] = None
    mood: Optional[str] = None

    @property
    def has_filters(self) -> bool:
        return self.language is not None or self.mood is not None


@dataclass
class SearchResult:
    songs: List[Song] = field(default_factory=list)
    language_filter: Optional[str] = None
    mood_filter: Optional[str] = None


def parse_search_query(query: str) -> SearchQuery:
    """Split a free-text query into language/mood filters and residual terms.

    Tokens are found by substring containment; when several languages (or
    moods) appear, the last one in the fixed list wins.
    """
    query_lower = query.lower()
    terms = query_lower
    language = None
    mood = None

    for lang in LANGUAGES:
        if lang in query_lower:
            language = lang.capitalize()
            terms = terms.replace(lang, '', 1).strip()

    for candidate in MOODS:
        if candidate in query_lower:
            mood = candidate
            terms = terms.replace(candidate, '', 1).strip()

    return SearchQuery(terms=terms, language=language, mood=mood)


def apply_filters(songs: List[Song], parsed: SearchQuery) -> List[Song]:
    filtered = songs
    if parsed.language:
        filtered = [song for song in filtered if song.language.lower() == parsed.language.lower()]
    if parsed.mood:
        filtered = [
            song for song in filtered
            if parsed.mood in song.mood.lower() or parsed.mood in song.genre.lower()
        ]
    return filtered


class SongSearcher:
    def __init__(self, song_catalog: Optional[SongCatalog] = None):
        self.catalog = song_catalog or default_catalog

    def search(self, query: str) -> SearchResult:
        """Filter by detected language/mood, then fuzzy-rank what is left of the query"""
        limit = self.catalog.settings.SEARCH_RESULT_LIMIT
        parsed = parse_search_query(query)
        filtered = apply_filters(list(self.catalog.songs), parsed)

        if parsed.has_filters and (not parsed.terms or parsed.terms == 'songs'):
            songs = filtered[:limit]
        elif parsed.terms:
            if parsed.has_filters:
                index = FuzzyIndex(filtered, threshold=self.catalog.settings.FUZZY_THRESHOLD)
            else:
                index = self.catalog.fuzzy_index
            songs = [match.song for match in index.search(parsed.terms, limit=limit)]
        else:
            songs = filtered[:limit]

        logger.info(
            f"Search {query!r} returned {len(songs)} songs",
            extra={"language_filter": parsed.language, "mood_filter": parsed.mood},
        )
        return SearchResult(songs=songs, language_filter=parsed.language, mood_filter=parsed.mood)


# Create global instance
searcher = SongSearcher()
