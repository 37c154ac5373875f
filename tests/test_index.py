import pytest

from sightline.search.index import SearchFilter, Searcher

MICE = (
    "A few miles south of Soledad, the Salinas River drops in close to the hillside "
    "bank and runs deep and green. The water is warm too, for it has slipped twinkling "
    "over the yellow sands in the sunlight before reaching the narrow pool."
)
CHEESE = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Nulla tellus tortor, "
    "varius sit amet fermentum a, finibus porttitor erat."
)
FRANKENSTEIN = (
    "You will rejoice to hear that no disaster has accompanied the commencement of an "
    "enterprise which you have regarded with such evil forebodings."
)


def _build(searcher):
    searcher.add_document(
        "Of Mice and Men", "Of Mice and Men passage", "example.com",
        "https://example.com/mice_and_men", MICE, "",
    )
    searcher.add_document(
        "Of Mice and Men", "Of Mice and Men passage", "en.wikipedia.org",
        "https://en.wikipedia.org/mice_and_men", MICE, "",
    )
    searcher.add_document(
        "Of Cheese and Crackers", "Of Cheese and Crackers Passage", "en.wikipedia.org",
        "https://en.wikipedia.org/cheese_and_crackers", CHEESE, "",
    )
    searcher.add_document(
        "Frankenstein: The Modern Prometheus", "A passage from Frankenstein",
        "monster.com", "https://example.com/frankenstein", FRANKENSTEIN, "",
    )
    searcher.commit()
    return searcher


@pytest.fixture
def searcher():
    return _build(Searcher.with_index(None))


def test_basic_lens_search(searcher):
    lens = [SearchFilter.url_regex("^(http://|https://)en.wikipedia.org.*")]
    results = searcher.search_with_lens(lens, "salinas")
    assert len(results) == 1
    assert results[0][1].url == "https://en.wikipedia.org/mice_and_men"


def test_url_lens_search(searcher):
    lens = [SearchFilter.url_regex("^https://en.wikipedia.org/mice.*")]
    assert len(searcher.search_with_lens(lens, "salinas")) == 1


def test_singular_url_lens_search(searcher):
    lens = [SearchFilter.url_regex("^https://en.wikipedia.org/mice$")]
    assert searcher.search_with_lens(lens, "salinas") == []


def test_no_filters_returns_all_matches(searcher):
    results = searcher.search_with_lens([], "salinas")
    assert {doc.url for _, doc in results} == {
        "https://example.com/mice_and_men",
        "https://en.wikipedia.org/mice_and_men",
    }


def test_none_filter_does_not_restrict(searcher):
    results = searcher.search_with_lens([SearchFilter()], "salinas")
    assert len(results) == 2


def test_title_match(searcher):
    results = searcher.search_with_lens([], "Frankenstein")
    assert [doc.url for _, doc in results] == ["https://example.com/frankenstein"]


def test_no_match(searcher):
    assert searcher.search_with_lens([], "zebra") == []


def test_results_sorted_and_limited():
    searcher = Searcher.with_index(None)
    for count in range(1, 8):
        searcher.add_document(
            "t", "d", "example.com", f"https://example.com/{count}",
            " ".join(["apple"] * count + ["pear"] * (8 - count)), "",
        )
    searcher.commit()
    results = searcher.search_with_lens([], "apple")
    assert len(results) == 5
    scores = [score for score, _ in results]
    assert scores == sorted(scores, reverse=True)
    assert results[0][1].url == "https://example.com/7"


def test_uncommitted_documents_invisible():
    searcher = Searcher.with_index(None)
    doc_id = searcher.add_document("t", "d", "example.com", "https://example.com", "salinas", "")
    assert searcher.get_by_id(doc_id) is None
    assert searcher.num_docs() == 0
    searcher.commit()
    assert searcher.get_by_id(doc_id).content == "salinas"
    assert searcher.num_docs() == 1


def test_delete(searcher):
    doc_id = searcher.add_document("t", "d", "example.com", "https://example.com/x", "x", "")
    searcher.commit()
    assert searcher.num_docs() == 5
    searcher.delete(doc_id)
    searcher.commit()
    assert searcher.get_by_id(doc_id) is None
    assert searcher.num_docs() == 4


def test_delete_before_commit_applies_in_order():
    searcher = Searcher.with_index(None)
    doc_id = searcher.add_document("t", "d", "example.com", "https://example.com", "c", "")
    searcher.delete(doc_id)
    searcher.commit()
    assert searcher.num_docs() == 0


def test_persistence_round_trip(tmp_path):
    _build(Searcher.with_index(tmp_path))
    reopened = Searcher.with_index(tmp_path)
    assert reopened.num_docs() == 4
    assert len(reopened.search_with_lens([], "salinas")) == 2


def test_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Searcher.with_index(tmp_path / "missing")


def test_invalid_regex_raises(searcher):
    with pytest.raises(ValueError):
        searcher.search_with_lens([SearchFilter.url_regex("(")], "salinas")