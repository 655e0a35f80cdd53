# diet_planner/recommenders/preference_recommender.py
"""
Preference recommendations.

Three sources produce PreferenceTags for a date:
- recent logs (two-week eating pattern, plus cuisine families)
- an adaptive pass over the two weeks before the date, escalated when
  the previous day alone was heavy
- external signal titles (health-news headlines)

They are merged with the user's explicit choice for that date only.
"""
from typing import Dict, Iterable, List, Sequence

from diet_planner.models import DayLog, PreferenceTag, TrackItem
from diet_planner.utils.dates import offset_date_key
from diet_planner.utils.keywords import (
    FISH_KEYWORDS, FLOUR_KEYWORDS, HEAVY_KEYWORDS, PROTEIN_KEYWORDS,
    SPICY_KEYWORDS, SUGAR_KEYWORDS, VEGETABLE_KEYWORDS,
    count_keywords, count_keywords_by_items,
)

RECENT_LOG_DAYS = 14
MAX_RECENT_SUGGESTIONS = 8
MAX_ADAPTIVE_SUGGESTIONS = 4
MAX_EXTERNAL_SUGGESTIONS = 4
MAX_EXTERNAL_TITLES = 20
MAX_DIET_SIGNALS = 8

DEFAULT_SUGGESTIONS = [PreferenceTag.HEALTHY, PreferenceTag.VEGETABLE, PreferenceTag.HIGH_PROTEIN]

# Cuisine families inferred from logs
CUISINE_KEYWORDS = {
    PreferenceTag.PIZZA: ["피자", "치즈피자", "페퍼로니피자", "불고기피자"],
    PreferenceTag.FRIED_CHICKEN: ["치킨", "후라이드치킨", "양념치킨", "간장치킨", "닭강정"],
    PreferenceTag.SANDWICH: ["샌드위치", "햄버거", "치즈버거", "토스트"],
    PreferenceTag.BEEF: ["소고기", "불고기", "스테이크", "안심"],
    PreferenceTag.PORK: ["돼지고기", "삼겹살", "목살", "제육", "돈가스"],
    PreferenceTag.CHICKEN: ["닭고기", "닭가슴살", "닭다리", "닭안심"],
    PreferenceTag.DUCK: ["오리고기", "오리", "훈제오리"],
}
CUISINE_MIN_COUNT = 2
CHICKEN_MIN_COUNT = 3

EXTERNAL_SIGNAL_RULES = [
    (["생선", "연어", "오메가", "등푸른"], [PreferenceTag.FISH]),
    (["채소", "샐러드", "브로콜리", "과일", "식이섬유"], [PreferenceTag.VEGETABLE]),
    (["단백질", "두부", "닭가슴살", "달걀", "콩"], [PreferenceTag.HIGH_PROTEIN]),
    (["저염", "염분", "나트륨"], [PreferenceTag.LOW_SALT]),
    (["식욕저하", "메스꺼움", "소화", "부드러운", "죽", "수프"], [PreferenceTag.DIGESTIVE, PreferenceTag.SOFT_FOOD]),
]

DIET_SIGNAL_LABELS = {
    PreferenceTag.HEALTHY: "건강식",
    PreferenceTag.VEGETABLE: "채소 보강",
    PreferenceTag.HIGH_PROTEIN: "단백질 보강",
    PreferenceTag.DIGESTIVE: "소화 편한 식사",
    PreferenceTag.LOW_SALT: "저염식",
    PreferenceTag.FISH: "생선/해산물",
    PreferenceTag.SPICY: "매운맛",
    PreferenceTag.SWEET: "단맛",
    PreferenceTag.NOODLE: "면 요리",
    PreferenceTag.PIZZA: "피자",
    PreferenceTag.FRIED_CHICKEN: "치킨",
    PreferenceTag.SANDWICH: "샌드위치",
    PreferenceTag.BEEF: "소고기",
    PreferenceTag.PORK: "돼지고기",
    PreferenceTag.CHICKEN: "닭고기",
    PreferenceTag.DUCK: "오리고기",
}


class _Suggestions(list):
    """Ordered tag list that ignores repeats."""

    def add(self, *tags: PreferenceTag) -> None:
        for tag in tags:
            if tag not in self:
                self.append(tag)


def merge_preferences(*sources: Iterable[PreferenceTag]) -> List[PreferenceTag]:
    """Order-preserving union of tag lists."""
    merged = _Suggestions()
    for source in sources:
        merged.add(*list(source or []))
    return list(merged)


def _eaten_items_for(logs: Dict[str, DayLog], date_keys: Sequence[str]) -> List[TrackItem]:
    items: List[TrackItem] = []
    for date_key in date_keys:
        log = logs.get(date_key)
        if log is not None:
            items.extend(log.eaten_items())
    return items


def recommend_preferences_by_recent_logs(logs: Dict[str, DayLog], today: str) -> List[PreferenceTag]:
    """
    Tags suggested by the last 14 days, today included.

    Args:
        logs: Date-keyed logs
        today: Reference date key

    Returns:
        Up to 8 tags; the healthy defaults when nothing was eaten
    """
    window = [offset_date_key(today, -index) for index in range(RECENT_LOG_DAYS)]
    eaten = _eaten_items_for(logs, window)
    if not eaten:
        return list(DEFAULT_SUGGESTIONS)

    suggestions = _Suggestions()
    counts = {tag: count_keywords_by_items(eaten, keywords) for tag, keywords in CUISINE_KEYWORDS.items()}
    fried_chicken = counts[PreferenceTag.FRIED_CHICKEN]

    for tag in (PreferenceTag.PIZZA, PreferenceTag.FRIED_CHICKEN, PreferenceTag.SANDWICH,
                PreferenceTag.BEEF, PreferenceTag.PORK):
        if counts[tag] >= CUISINE_MIN_COUNT:
            suggestions.add(tag)
    if counts[PreferenceTag.CHICKEN] >= CHICKEN_MIN_COUNT and fried_chicken < CUISINE_MIN_COUNT:
        suggestions.add(PreferenceTag.CHICKEN)
    if counts[PreferenceTag.DUCK] >= CUISINE_MIN_COUNT:
        suggestions.add(PreferenceTag.DUCK)

    if count_keywords_by_items(eaten, PROTEIN_KEYWORDS) < 6:
        suggestions.add(PreferenceTag.HIGH_PROTEIN)
    if count_keywords_by_items(eaten, FISH_KEYWORDS) < 3:
        suggestions.add(PreferenceTag.FISH)
    flour_sweet = count_keywords_by_items(eaten, FLOUR_KEYWORDS) + count_keywords_by_items(eaten, SUGAR_KEYWORDS)
    if flour_sweet >= 6:
        suggestions.add(PreferenceTag.HEALTHY, PreferenceTag.DIGESTIVE)
    if count_keywords_by_items(eaten, SPICY_KEYWORDS) >= 4:
        suggestions.add(PreferenceTag.BLAND)

    if len(suggestions) < 3:
        suggestions.add(PreferenceTag.VEGETABLE)
    if len(suggestions) < 3:
        suggestions.add(PreferenceTag.WARM_FOOD)

    return list(suggestions)[:MAX_RECENT_SUGGESTIONS]


def recommend_adaptive_preferences(logs: Dict[str, DayLog], reference: str) -> List[PreferenceTag]:
    """
    Tags applied automatically to a date's plan.

    Looks at the 14 days before the reference date. A heavy previous day
    (flour + sugar + heavy food at 3 or more servings) escalates to
    healthy, digestive and low-salt.

    Returns:
        Up to 4 tags; empty when nothing was eaten in the lookback
    """
    lookback = [offset_date_key(reference, -(index + 1)) for index in range(RECENT_LOG_DAYS)]
    eaten = _eaten_items_for(logs, lookback)
    if not eaten:
        return []

    suggestions = _Suggestions()
    flour_sugar = count_keywords_by_items(eaten, FLOUR_KEYWORDS) + count_keywords_by_items(eaten, SUGAR_KEYWORDS)
    if flour_sugar >= 8:
        suggestions.add(PreferenceTag.HEALTHY, PreferenceTag.DIGESTIVE)
    if count_keywords_by_items(eaten, PROTEIN_KEYWORDS) < 6:
        suggestions.add(PreferenceTag.HIGH_PROTEIN)
    if count_keywords_by_items(eaten, VEGETABLE_KEYWORDS) < 6:
        suggestions.add(PreferenceTag.VEGETABLE)
    if count_keywords_by_items(eaten, SPICY_KEYWORDS) >= 4:
        suggestions.add(PreferenceTag.BLAND)

    yesterday = logs.get(lookback[0])
    if yesterday is not None:
        items = yesterday.eaten_items()
        heavy_day = (
            count_keywords_by_items(items, FLOUR_KEYWORDS)
            + count_keywords_by_items(items, SUGAR_KEYWORDS)
            + count_keywords_by_items(items, HEAVY_KEYWORDS)
        )
        if heavy_day >= 3:
            suggestions.add(PreferenceTag.HEALTHY, PreferenceTag.DIGESTIVE, PreferenceTag.LOW_SALT)

    return list(suggestions)[:MAX_ADAPTIVE_SUGGESTIONS]


def recommend_preferences_by_external_signals(items: Iterable[dict]) -> List[PreferenceTag]:
    """
    Tags suggested by external signal titles.

    Args:
        items: Records with a "title" field; the first 20 non-empty
            titles are scanned

    Returns:
        Up to 4 tags
    """
    titles = []
    for item in items or []:
        title = item.get("title") if isinstance(item, dict) else None
        if isinstance(title, str) and title.strip():
            titles.append(title.strip())
    text = " ".join(titles[:MAX_EXTERNAL_TITLES]).lower()
    if not text:
        return []

    suggestions = _Suggestions()
    for keywords, tags in EXTERNAL_SIGNAL_RULES:
        if count_keywords(text, keywords) >= 1:
            suggestions.add(*tags)
    return list(suggestions)[:MAX_EXTERNAL_SUGGESTIONS]


def diet_signal_label(tag: PreferenceTag) -> str:
    return DIET_SIGNAL_LABELS.get(tag, tag.label)


def build_recent_diet_signals(logs: Dict[str, DayLog], reference: str) -> List[str]:
    """
    Readable labels for the recent eating pattern.

    Example:
        >>> build_recent_diet_signals({}, "2024-03-10")
        []
    """
    window = [offset_date_key(reference, -index) for index in range(RECENT_LOG_DAYS)]
    if not _eaten_items_for(logs, window):
        return []

    labels: List[str] = []
    for tag in recommend_preferences_by_recent_logs(logs, reference):
        label = diet_signal_label(tag).strip()
        if label and label not in labels:
            labels.append(label)
    return labels[:MAX_DIET_SIGNALS]
