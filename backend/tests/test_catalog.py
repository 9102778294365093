import pytest

from song_explorer.core.catalog import SongCatalog
from song_explorer.core.exceptions import CatalogNotReadyError, DatasetError
from tests.conftest import make_song


def test_uninitialized_catalog_raises(test_settings):
    song_catalog = SongCatalog(settings=test_settings)
    assert not song_catalog.is_ready
    with pytest.raises(CatalogNotReadyError):
        song_catalog.songs
    with pytest.raises(CatalogNotReadyError):
        song_catalog.random_song()


def test_initialize_from_songs(metadata_catalog, sample_songs):
    assert metadata_catalog.is_ready
    assert metadata_catalog.songs == tuple(sample_songs)
    assert metadata_catalog.embeddings is None
    assert len(metadata_catalog.fuzzy_index) == len(sample_songs)
    assert metadata_catalog.get_song(4).title == "Zingaat"
    assert metadata_catalog.get_song(999) is None


def test_initialize_from_bundled_dataset(test_settings):
    song_catalog = SongCatalog(settings=test_settings)
    song_catalog.initialize()
    assert len(song_catalog.songs) > 0


def test_semantic_catalog_has_embeddings_for_every_song(semantic_catalog, sample_songs):
    store = semantic_catalog.embeddings
    assert store is not None
    assert set(store.song_ids) == {song.id for song in sample_songs}


def test_duplicate_ids_rejected(test_settings):
    song_catalog = SongCatalog(settings=test_settings)
    with pytest.raises(ValueError):
        song_catalog.initialize(songs=[make_song(1), make_song(1)])


def test_random_song_is_from_dataset(metadata_catalog, sample_songs):
    ids = {song.id for song in sample_songs}
    for _ in range(50):
        assert metadata_catalog.random_song().id in ids


def test_empty_dataset_rejected(test_settings):
    song_catalog = SongCatalog(settings=test_settings)
    with pytest.raises(DatasetError):
        song_catalog.initialize(songs=[])
    assert not song_catalog.is_ready
