import pytest

from simcore.comparator import (
    ComparisonResult,
    SimilarPair,
    compare_corpus,
    profile_corpus,
    rank_pairs,
)
from simcore.config import ComparisonConfig
from simcore.errors import ConfigurationError
from simcore.profiler import Document


def _corpus() -> list[Document]:
    return [
        Document("a.txt", "cat sat on the mat with a hat"),
        Document("b.txt", "the cat sat on a hat"),
        Document("c.txt", "rockets reach orbit"),
        Document("d.txt", "the cat and the rockets"),
        Document("e.txt", "the of and a in an"),
    ]


def test_end_to_end_cat_example(cat_documents):
    result = compare_corpus(cat_documents)
    assert isinstance(result, ComparisonResult)
    assert result.document_count == 2
    assert result.pairs_scored == 1
    (pair,) = result.pairs
    assert (pair.first_name, pair.second_name) == ("doc1.txt", "doc2.txt")
    assert pair.rank == 1
    assert pair.score == pytest.approx(1.0)
    assert pair.describe() == "Pair 1: (doc1.txt, doc2.txt) - Similarity: 1.000000"


def test_every_unordered_pair_is_scored_once():
    result = compare_corpus(_corpus(), ComparisonConfig(top_m=100))
    assert result.pairs_scored == 10
    keys = {(p.first, p.second) for p in result.pairs}
    assert len(keys) == 10
    assert all(i < j for i, j in keys)


def test_ranking_is_non_increasing_with_index_tie_break():
    result = compare_corpus(_corpus(), ComparisonConfig(top_m=100))
    pairs = result.pairs
    assert [p.rank for p in pairs] == list(range(1, len(pairs) + 1))
    for prev, cur in zip(pairs, pairs[1:]):
        assert prev.score >= cur.score
        if prev.score == cur.score:
            assert (prev.first, prev.second) < (cur.first, cur.second)


def test_best_pair_first():
    result = compare_corpus(_corpus())
    assert (result.pairs[0].first_name, result.pairs[0].second_name) == ("a.txt", "b.txt")


def test_empty_document_scores_zero_everywhere():
    result = compare_corpus(_corpus(), ComparisonConfig(top_m=100))
    involving_e = [p for p in result.pairs if "e.txt" in (p.first_name, p.second_name)]
    assert len(involving_e) == 4
    assert all(p.score == 0.0 for p in involving_e)
    assert result.profiles[4].is_empty


def test_top_m_limits_reported_pairs():
    result = compare_corpus(_corpus(), ComparisonConfig(top_m=3))
    assert len(result.pairs) == 3
    assert result.pairs_scored == 10


def test_all_ties_ordered_by_index():
    docs = [Document(f"{n}.txt", "same words here") for n in "wxyz"]
    pairs = rank_pairs(profile_corpus(docs, ComparisonConfig()))
    assert [(p.first, p.second) for p in pairs] == [
        (0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3),
    ]


def test_profiles_keep_input_order():
    profiles = profile_corpus(_corpus(), ComparisonConfig())
    assert [p.name for p in profiles] == ["a.txt", "b.txt", "c.txt", "d.txt", "e.txt"]


def test_parallel_run_matches_serial():
    docs = _corpus() * 2
    docs = [Document(f"{i}-{d.name}", d.text) for i, d in enumerate(docs)]
    serial = compare_corpus(docs, ComparisonConfig(top_m=100))
    parallel = compare_corpus(docs, ComparisonConfig(top_m=100, workers=2))
    assert serial.pairs == parallel.pairs
    assert serial.profiles == parallel.profiles


@pytest.mark.parametrize("count", [0, 1])
def test_fewer_than_two_documents_rejected(count):
    with pytest.raises(ConfigurationError):
        compare_corpus(_corpus()[:count])


@pytest.mark.parametrize(
    "config",
    [ComparisonConfig(top_k=0), ComparisonConfig(top_m=0), ComparisonConfig(workers=0)],
)
def test_configuration_violations_abort(config):
    with pytest.raises(ConfigurationError):
        compare_corpus(_corpus(), config)


def test_similar_pair_to_dict():
    pair = SimilarPair(0, 1, "a", "b", 0.1234567, rank=3)
    assert pair.to_dict() == {"rank": 3, "first": "a", "second": "b", "score": 0.123457}
