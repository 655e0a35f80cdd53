# diet_planner/models/preferences.py
"""
Preference vocabulary and per-date preference storage.
"""
from enum import Enum
from typing import Dict, Any, List, Iterable


class PreferenceTag(Enum):
    """Directional food preference applied to a day's plan."""
    SPICY = "spicy"
    SWEET = "sweet"
    MEAT = "meat"
    PIZZA = "pizza"
    HEALTHY = "healthy"
    FISH = "fish"
    SASHIMI = "sashimi"
    SUSHI = "sushi"
    COOL_FOOD = "cool_food"
    WARM_FOOD = "warm_food"
    SOFT_FOOD = "soft_food"
    SOUPY = "soupy"
    HIGH_PROTEIN = "high_protein"
    VEGETABLE = "vegetable"
    BLAND = "bland"
    APPETITE_BOOST = "appetite_boost"
    DIGESTIVE = "digestive"
    LOW_SALT = "low_salt"
    NOODLE = "noodle"
    WEIGHT_LOSS = "weight_loss"
    # Cuisine families inferred from logs
    FRIED_CHICKEN = "fried_chicken"
    SANDWICH = "sandwich"
    BEEF = "beef"
    PORK = "pork"
    CHICKEN = "chicken"
    DUCK = "duck"

    @property
    def label(self) -> str:
        return PREFERENCE_OPTIONS[self][0]

    @property
    def guide(self) -> str:
        return PREFERENCE_OPTIONS[self][1]

    @classmethod
    def parse(cls, value):
        """Tag for a key or Korean label, or None."""
        if isinstance(value, PreferenceTag):
            return value
        if not isinstance(value, str):
            return None
        text = value.strip().lower()
        for tag in cls:
            if text in (tag.value, tag.label.lower()):
                return tag
        return None


PREFERENCE_OPTIONS = {
    PreferenceTag.SPICY: ("매운맛", "자극은 낮추고 매콤한 느낌은 살려서 조정해요."),
    PreferenceTag.SWEET: ("단맛", "당 부담이 적은 간식으로 바꿔 제안해요."),
    PreferenceTag.MEAT: ("고기", "기름이 적은 고기 메뉴 위주로 반영해요."),
    PreferenceTag.PIZZA: ("피자", "채소 중심의 가벼운 피자형 메뉴로 반영해요."),
    PreferenceTag.HEALTHY: ("건강식", "잡곡밥, 채소, 저염 반찬 중심으로 맞춰요."),
    PreferenceTag.FISH: ("생선", "구이·찜 같은 익힌 생선 메뉴를 늘려요."),
    PreferenceTag.SASHIMI: ("회 느낌", "생식 대신 안전한 숙회/익힘 메뉴로 대체해요."),
    PreferenceTag.SUSHI: ("초밥 느낌", "저염·익힘 재료 중심의 초밥형 메뉴를 반영해요."),
    PreferenceTag.COOL_FOOD: ("시원한 음식", "속을 자극하지 않는 시원한 메뉴를 더해요."),
    PreferenceTag.WARM_FOOD: ("따뜻한 음식", "몸을 편하게 하는 따뜻한 식사로 맞춰요."),
    PreferenceTag.SOFT_FOOD: ("부드러운 음식", "씹기 편한 부드러운 메뉴 중심으로 조정해요."),
    PreferenceTag.SOUPY: ("국물 음식", "저염 국·수프를 더 자주 반영해요."),
    PreferenceTag.HIGH_PROTEIN: ("단백질 강화", "닭·생선·두부·달걀 반찬 비중을 높여요."),
    PreferenceTag.VEGETABLE: ("채소 듬뿍", "채소 반찬 종류를 더 다양하게 넣어요."),
    PreferenceTag.BLAND: ("담백한 맛", "강한 양념을 줄이고 담백한 조리로 맞춰요."),
    PreferenceTag.APPETITE_BOOST: ("입맛 살리기", "과하지 않은 새콤한 반찬을 소량 반영해요."),
    PreferenceTag.DIGESTIVE: ("소화 편한 음식", "속이 편한 메뉴 위주로 조정해요."),
    PreferenceTag.LOW_SALT: ("저염식", "염분이 높은 반찬을 줄이고 싱겁게 맞춰요."),
    PreferenceTag.NOODLE: ("면 요리", "자극이 적은 면 요리를 가끔 반영해요."),
    PreferenceTag.WEIGHT_LOSS: ("체중감량(다이어트)", "단백질을 유지하고 정제 탄수화물을 줄인 감량형 식단으로 조정해요."),
    PreferenceTag.FRIED_CHICKEN: ("치킨", "튀기지 않은 오븐 치킨형 메뉴로 반영해요."),
    PreferenceTag.SANDWICH: ("샌드위치", "통밀빵과 저지방 단백질 샌드위치로 반영해요."),
    PreferenceTag.BEEF: ("소고기", "기름이 적은 소고기 부위로 반영해요."),
    PreferenceTag.PORK: ("돼지고기", "기름을 뺀 안심 수육 위주로 반영해요."),
    PreferenceTag.CHICKEN: ("닭고기", "껍질을 뺀 닭 요리로 반영해요."),
    PreferenceTag.DUCK: ("오리고기", "기름을 뺀 오리 요리를 소량 반영해요."),
}

# Tags a user can pick explicitly; cuisine families come only from logs
SELECTABLE_PREFERENCES = [
    tag for tag in PreferenceTag
    if tag not in (
        PreferenceTag.FRIED_CHICKEN, PreferenceTag.SANDWICH, PreferenceTag.BEEF,
        PreferenceTag.PORK, PreferenceTag.CHICKEN, PreferenceTag.DUCK,
    )
]


def parse_preference_list(raw: Any) -> List[PreferenceTag]:
    """
    Sanitize a stored preference list.

    Unknown keys are dropped; order is kept and duplicates removed.
    """
    if not isinstance(raw, list):
        return []
    tags = []
    for value in raw:
        tag = PreferenceTag.parse(value) if isinstance(value, str) else None
        if tag is not None and tag not in tags:
            tags.append(tag)
    return tags


class DailyPreferences:
    """
    Explicit preference choices keyed by date.

    Choices reset every day: a date only sees what was chosen for that
    date. The carried set exists solely to migrate legacy global
    preferences and is never applied automatically.
    """

    def __init__(self, by_date: Dict[str, List[PreferenceTag]] = None,
                 carried: List[PreferenceTag] = None):
        self.by_date: Dict[str, List[PreferenceTag]] = dict(by_date or {})
        self.carried: List[PreferenceTag] = list(carried or [])

    def for_date(self, date_key: str) -> List[PreferenceTag]:
        return list(self.by_date.get(date_key, []))

    def set_for_date(self, date_key: str, tags: Iterable[PreferenceTag]) -> None:
        unique = []
        for tag in tags:
            if tag not in unique:
                unique.append(tag)
        if unique:
            self.by_date[date_key] = unique
        else:
            self.by_date.pop(date_key, None)

    def toggle(self, date_key: str, tag: PreferenceTag) -> bool:
        """
        Flip one tag for a date.

        Returns:
            True if the tag is now selected
        """
        current = self.for_date(date_key)
        if tag in current:
            current.remove(tag)
            selected = False
        else:
            current.append(tag)
            selected = True
        self.set_for_date(date_key, current)
        return selected

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dailyPreferences": {
                date_key: [tag.value for tag in tags]
                for date_key, tags in sorted(self.by_date.items())
            },
            "carryPreferences": [tag.value for tag in self.carried],
        }
