# diet_planner/utils/search.py
"""
Fuzzy food-name matching.

Normalizes free-typed food text and scores it against candidate names
using substring containment, edit distance and character overlap. Every
higher layer that needs "is this food roughly X" goes through here.
"""
import re
from typing import List, Iterable

PORTION_DELIMITER = " · "

# Item separators for multi-food entries such as "밥+김치" or "빵, 우유"
ITEM_SPLIT_RE = re.compile(r"[,+/|]")

# Number + unit portions ("2인분", "90g", "1.5컵"); kg/mg/ml before g/l
PORTION_AMOUNT_RE = re.compile(
    r"(?<![0-9A-Za-z.])\d+(?:\.\d+)?\s*(?:인분|개|컵|그릇|조각|잔|스푼|숟갈|kg|mg|ml|g|l)(?![A-Za-z])",
    re.IGNORECASE,
)

NON_FOOD_CHARS_RE = re.compile(r"[^0-9a-zA-Z가-힣]")
HANGUL_RE = re.compile(r"[가-힣ㄱ-ㅎㅏ-ㅣ]")


def strip_portion_label(raw_name: str) -> str:
    """
    Remove a " · amount" suffix from a tracked item name.

    Example:
        >>> strip_portion_label("현미밥 · 2/3공기(110~130g)")
        '현미밥'
    """
    return (raw_name or "").split(PORTION_DELIMITER)[0].strip()


def normalize_food_name(text: str) -> str:
    """
    Reduce a free-typed entry to its first food name without amounts.

    Example:
        >>> normalize_food_name("닭가슴살 90g + 샐러드")
        '닭가슴살'
    """
    compact = re.sub(r"\s+", " ", text or "").strip()
    if not compact:
        return ""

    parts = [part.strip() for part in ITEM_SPLIT_RE.split(compact) if part.strip()]
    first_item = parts[0] if parts else compact

    without_portion = PORTION_AMOUNT_RE.sub("", first_item)
    without_portion = re.sub(r"\s{2,}", " ", without_portion).strip()
    return without_portion or first_item


def compact_food_text(text: str) -> str:
    """Lowercase and keep only digits, Latin letters and Hangul syllables."""
    return NON_FOOD_CHARS_RE.sub("", (text or "").lower())


def levenshtein_distance(a: str, b: str) -> int:
    """Classic two-row edit distance."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        current = [i] + [0] * len(b)
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            current[j] = min(prev[j] + 1, current[j - 1] + 1, prev[j - 1] + cost)
        prev = current
    return prev[len(b)]


def food_name_similarity(query: str, candidate: str) -> float:
    """
    Score how closely a candidate name matches a query.

    Both sides lose portion suffixes and non-food characters first. The
    score is the best of a containment bonus, normalized edit distance
    and 0.85-scaled character overlap.

    Args:
        query: Typed or planned food name
        candidate: Known food name (may carry a " · amount" suffix)

    Returns:
        Score in [0, 1]

    Example:
        >>> food_name_similarity("닭가슴살", "닭가슴살 · 90g")
        1.0
    """
    normalized_query = compact_food_text(normalize_food_name(strip_portion_label(query)))
    normalized_candidate = compact_food_text(normalize_food_name(strip_portion_label(candidate)))

    if not normalized_query or not normalized_candidate:
        return 0.0
    if normalized_query == normalized_candidate:
        return 1.0

    longest = max(len(normalized_query), len(normalized_candidate))
    score = 0.0

    if normalized_query in normalized_candidate:
        ratio = len(normalized_query) / len(normalized_candidate)
        score = max(score, 0.9 + min(ratio, 0.08))
    if normalized_candidate in normalized_query:
        ratio = len(normalized_candidate) / len(normalized_query)
        score = max(score, 0.84 + min(ratio, 0.08))

    distance = levenshtein_distance(normalized_query, normalized_candidate)
    score = max(score, 1 - distance / longest)

    query_chars = set(normalized_query)
    overlap = sum(1 for char in normalized_candidate if char in query_chars)
    score = max(score, (overlap / longest) * 0.85)

    return max(0.0, min(1.0, score))


def minimum_search_score(compact_query: str) -> float:
    """Looser bar for 2-3 character queries, stricter for longer ones."""
    if len(compact_query) <= 2:
        return 0.22
    if len(compact_query) <= 3:
        return 0.3
    return 0.42


def korean_sort_key(name: str):
    """
    Dictionary order for food names: Hangul before other scripts, Latin
    letters case-insensitive.

    Example:
        >>> sorted(["rice", "Bread", "밥"], key=korean_sort_key)
        ['밥', 'Bread', 'rice']
    """
    return (
        tuple((0 if HANGUL_RE.match(char) else 1, char.casefold()) for char in name),
        name,
    )


def search_food_candidates(query: str, candidates: Iterable[str], max_results: int = 8) -> List[str]:
    """
    Rank candidate names against a query.

    Names containing the query come first, shortest first. The rest of
    the slots go to names above the length-dependent minimum score, best
    first, then shorter first. Equal keys fall back to korean_sort_key.

    Args:
        query: Food text to look up
        candidates: Pool of known names (may be empty)
        max_results: Result cap

    Returns:
        Deduplicated names, at most max_results

    Example:
        >>> search_food_candidates("현미밥", ["잡곡밥", "현미죽"])
        ['현미죽', '잡곡밥']
    """
    normalized_query = normalize_food_name(query)
    if not normalized_query:
        return []

    compact_query = compact_food_text(normalized_query)
    minimum = minimum_search_score(compact_query)

    unique: List[str] = []
    for name in candidates:
        if name and name not in unique:
            unique.append(name)

    contained = [name for name in unique if compact_query and compact_query in compact_food_text(name)]
    contained.sort(key=lambda name: (len(name), korean_sort_key(name)))

    scored = []
    for name in unique:
        score = food_name_similarity(normalized_query, name)
        if score >= minimum:
            scored.append((score, name))
    scored.sort(key=lambda item: (-item[0], len(item[1]), korean_sort_key(item[1])))

    results: List[str] = []
    for name in contained[:max_results] + [name for _, name in scored[:max_results]]:
        if name not in results:
            results.append(name)
    return results[:max_results]
