"""Song Explorer: fuzzy, metadata and embedding based song recommendations."""

__version__ = "1.0.0"
