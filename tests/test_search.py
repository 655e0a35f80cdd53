"""
Tests for fuzzy food-name matching.
"""
from diet_planner.utils.search import korean_sort_key
from diet_planner.utils import (
    strip_portion_label, normalize_food_name, compact_food_text,
    levenshtein_distance, food_name_similarity, search_food_candidates,
)


# Normalization tests
def test_strip_portion_label():
    """Test the ' · amount' suffix is removed."""
    assert strip_portion_label("현미밥 · 2/3공기(110~130g)") == "현미밥"
    assert strip_portion_label("현미밥") == "현미밥"


def test_normalize_first_item_without_amount():
    """Test only the first food of a multi-item entry is kept."""
    assert normalize_food_name("닭가슴살 90g + 샐러드") == "닭가슴살"
    assert normalize_food_name("빵, 우유") == "빵"


def test_normalize_blank():
    """Test blank input normalizes to an empty string."""
    assert normalize_food_name("   ") == ""
    assert normalize_food_name(None) == ""


def test_compact_food_text():
    """Test punctuation and spaces are dropped."""
    assert compact_food_text("Greek 요거트!") == "greek요거트"


# Distance tests
def test_levenshtein_distance():
    """Test classic edit distance values."""
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("same", "same") == 0


# Similarity tests
def test_similarity_exact_after_normalization():
    """Test portion suffixes do not affect an exact match."""
    assert food_name_similarity("닭가슴살", "닭가슴살 · 90g") == 1.0


def test_similarity_containment_bonus():
    """Test a contained query scores above 0.9."""
    assert food_name_similarity("현미", "현미밥") > 0.9


def test_similarity_empty():
    """Test empty sides score zero."""
    assert food_name_similarity("", "현미밥") == 0.0
    assert food_name_similarity("현미밥", "!!") == 0.0


def test_similarity_bounded():
    """Test scores stay within [0, 1]."""
    for query, candidate in [("a", "b"), ("현미밥", "잡곡밥"), ("연어구이", "연어")]:
        score = food_name_similarity(query, candidate)
        assert 0.0 <= score <= 1.0


# Search tests
def test_search_ranks_best_first():
    """Test candidates are ordered by score."""
    assert search_food_candidates("현미밥", ["잡곡밥", "현미죽"]) == ["현미죽", "잡곡밥"]


def test_search_empty_inputs():
    """Test empty query or pool returns nothing."""
    assert search_food_candidates("", ["현미밥"]) == []
    assert search_food_candidates("현미밥", []) == []


def test_search_dedupes_and_caps():
    """Test duplicates are removed and results capped."""
    pool = ["현미밥", "현미밥", "현미죽", "현미떡"]
    results = search_food_candidates("현미밥", pool, max_results=2)
    assert results[0] == "현미밥"
    assert len(results) == 2
    assert len(set(results)) == len(results)


def test_search_filters_unrelated():
    """Test unrelated names fall below the minimum score."""
    assert search_food_candidates("연어구이", ["바나나", "우유"]) == []


def test_search_containing_names_first():
    """Test names containing the query lead, shortest first."""
    results = search_food_candidates("연어", ["연여", "훈제연어샐러드", "연어구이"])
    assert results[:2] == ["연어구이", "훈제연어샐러드"]


def test_search_mixed_script_ties():
    """Test equal-length ties put Hangul before Latin, case-insensitively."""
    assert search_food_candidates("밥", ["b밥", "A밥", "김밥"]) == ["김밥", "A밥", "b밥"]


def test_korean_sort_key():
    """Test dictionary order across scripts."""
    assert sorted(["rice", "Bread", "밥", "감자"], key=korean_sort_key) == ["감자", "밥", "Bread", "rice"]
