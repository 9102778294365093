import pytest

from song_explorer.core.fuzzy import FuzzyIndex


def test_exact_title_ranks_first(sample_songs):
    index = FuzzyIndex(sample_songs)
    matches = index.search("Tum Hi Ho")
    assert matches[0].song.title == "Tum Hi Ho"
    assert matches[0].score == pytest.approx(100.0)


def test_matches_other_fields(sample_songs):
    index = FuzzyIndex(sample_songs)
    assert index.best_match("Ed Sheeran").title == "Perfect"


def test_scores_are_sorted_and_above_cutoff(sample_songs):
    index = FuzzyIndex(sample_songs, threshold=0.4)
    matches = index.search("romantic")
    scores = [match.score for match in matches]
    assert scores == sorted(scores, reverse=True)
    assert all(score >= 60 for score in scores)


def test_limit(sample_songs):
    index = FuzzyIndex(sample_songs)
    assert len(index.search("romantic", limit=2)) == 2


@pytest.mark.parametrize("query", ["", "   ", "!!!", "qqqqxxxx"])
def test_no_match(sample_songs, query):
    index = FuzzyIndex(sample_songs)
    assert index.search(query) == []
    assert index.best_match(query) is None


def test_invalid_threshold(sample_songs):
    with pytest.raises(ValueError):
        FuzzyIndex(sample_songs, threshold=1.5)


@pytest.fixture(scope="module")
def dataset_index():
    from song_explorer.core.config import settings
    from song_explorer.core.data_loader import DataLoader
    return FuzzyIndex(DataLoader(settings.DATASET_PATH).load_songs())


@pytest.mark.parametrize("query", [
    "Bohemian Rhapsody",
    "The Night We Met",
    "what is the weather",
    "xyz",
])
def test_unknown_titles_do_not_match_dataset(dataset_index, query):
    """A shared common word such as "the" must not pull in a song"""
    assert dataset_index.search(query) == []


@pytest.mark.parametrize("query,title", [
    ("Tum Hi Ho", "Tum Hi Ho"),
    ("kesarya", "Kesariya"),
    ("Someone Like You", "Someone Like You"),
    ("Arijit Singh", "Tum Hi Ho"),
])
def test_known_titles_resolve_on_dataset(dataset_index, query, title):
    assert dataset_index.best_match(query).title == title


def test_lyrics_match_when_every_word_is_present(dataset_index):
    assert dataset_index.best_match("michelle pfeiffer").title == "Uptown Funk"
