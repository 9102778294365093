import pytest
from fastapi.testclient import TestClient

from song_explorer.core.catalog import catalog
from song_explorer.main import app


@pytest.fixture
def client(sample_songs):
    catalog.initialize(songs=sample_songs)
    with TestClient(app) as test_client:
        yield test_client
