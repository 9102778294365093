from typing import List, Optional


class SongExplorerError(Exception):
    """Base class for errors raised by the recommendation engine."""


class DatasetError(SongExplorerError):
    """The song dataset could not be read or is invalid."""


class CatalogNotReadyError(SongExplorerError):
    """The catalog was used before `initialize()` completed."""


class SongNotFoundError(SongExplorerError):
    """No song in the dataset matched the user's query."""

    def __init__(self, query: Optional[str], suggestions: List[str]):
        super().__init__(f"No song matched query: {query!r}")
        self.query = query
        self.suggestions = suggestions
