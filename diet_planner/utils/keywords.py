# diet_planner/utils/keywords.py
"""
Keyword families and serving-weighted keyword counting.

Eaten items are classified by Hangul substring keywords. A match counts
once per item, multiplied by the item's serving count.
"""
import re
from typing import Iterable, List, Sequence

from .search import strip_portion_label

PROTEIN_KEYWORDS = ["닭", "생선", "연어", "두부", "달걀", "콩", "요거트", "두유"]
FISH_KEYWORDS = ["생선", "연어", "고등어", "대구", "참치"]
FLOUR_KEYWORDS = ["빵", "라면", "면", "파스타", "피자", "도넛"]
SUGAR_KEYWORDS = ["케이크", "쿠키", "과자", "초콜릿", "탄산", "아이스크림"]
VEGETABLE_KEYWORDS = ["브로콜리", "양배추", "시금치", "오이", "당근", "버섯", "샐러드", "채소"]
SPICY_KEYWORDS = ["매운", "불닭", "짬뽕", "떡볶이"]
HEAVY_KEYWORDS = ["튀김", "치킨", "야식", "술", "맥주", "소주", "족발", "보쌈"]

# Intake correction looks at a wider sugar/heavy net than the recommenders
CORRECTION_SUGAR_KEYWORDS = SUGAR_KEYWORDS + ["시럽", "주스"]
CORRECTION_HEAVY_KEYWORDS = ["튀김", "치킨", "야식", "족발", "보쌈", "술", "맥주", "소주", "곱창"]

# Adherence analysis counts cake as a flour food too
ANALYSIS_FLOUR_KEYWORDS = ["빵", "라면", "면", "파스타", "피자", "케이크", "도넛"]
CONCERN_KEYWORDS = ["생회", "육회", "날달걀", "술", "소주", "맥주", "튀김", "매운"]

TRAILING_SERVING_RE = re.compile(r"\(1인분\)\s*$")


def _item_name(item) -> str:
    name = strip_portion_label(getattr(item, "name", "") or "").strip().lower()
    return TRAILING_SERVING_RE.sub("", name)


def _item_servings(item) -> int:
    servings = getattr(item, "servings", 1) or 1
    return max(1, int(round(servings)))


def count_keywords_by_items(items: Iterable, keywords: Sequence[str]) -> int:
    """
    Count items matching any keyword, weighted by servings.

    Args:
        items: Objects with 'name' and 'servings' attributes (TrackItem)
        keywords: Substrings to look for

    Returns:
        Sum of servings over matching items

    Example:
        >>> count_keywords_by_items([TrackItem("a", "라면", servings=2)], FLOUR_KEYWORDS)
        2
    """
    normalized_keywords = [keyword.strip().lower() for keyword in keywords]
    count = 0
    for item in items:
        name = _item_name(item)
        if any(keyword in name for keyword in normalized_keywords):
            count += _item_servings(item)
    return count


def includes_any_keyword_by_items(items: Iterable, keywords: Sequence[str]) -> bool:
    return count_keywords_by_items(items, keywords) > 0


def count_keywords(text: str, keywords: Sequence[str]) -> int:
    """Number of distinct keywords present in a text."""
    normalized = (text or "").strip().lower()
    return sum(1 for keyword in keywords if keyword in normalized)


def matched_keywords(text: str, keywords: Sequence[str]) -> List[str]:
    normalized = (text or "").strip().lower()
    return [keyword for keyword in keywords if keyword in normalized]
