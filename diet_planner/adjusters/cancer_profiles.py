# diet_planner/adjusters/cancer_profiles.py
"""
Cancer-type menu profiles.

Each profile is matched by keywords against the normalized cancer type
and rewrites the three main meals (and sometimes the snack) with a fixed
menu suited to that cancer family.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from diet_planner.models import DayPlan
from .base_adjuster import set_meal_fields, sync_main_summaries, replace_snack


@dataclass(frozen=True)
class SnackOverride:
    """Fixed snack combination used by a profile."""
    main: str
    sides: Tuple[str, ...]
    soup: str
    summary: str
    recipe_name: Optional[str] = None
    recipe_steps: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CancerProfile:
    """
    Menu rewrite for one cancer family.

    Attributes:
        label: Korean profile label (e.g. "유방암")
        keywords: Lowercase substrings matched against the cancer type
        mains: (breakfast, lunch, dinner) main dishes
        sides: Three side lists, one per main meal
        soups: (breakfast, lunch, dinner) soups, or None to keep
        rice_types: (breakfast, lunch, dinner) staples, or None to keep
        snack: Snack override, or None to keep
        notes: Notes added when the profile applies
    """
    label: str
    keywords: Tuple[str, ...]
    mains: Tuple[str, str, str]
    sides: Tuple[Tuple[str, ...], Tuple[str, ...], Tuple[str, ...]]
    soups: Optional[Tuple[str, str, str]] = None
    rice_types: Optional[Tuple[str, str, str]] = None
    snack: Optional[SnackOverride] = None
    notes: Tuple[str, ...] = field(default_factory=tuple)

    def apply(self, plan: DayPlan) -> None:
        """Rewrite a plan in place with this profile's menu."""
        if self.rice_types:
            set_meal_fields(plan, "rice_type", *self.rice_types)
        set_meal_fields(plan, "main", *self.mains)
        if self.soups:
            set_meal_fields(plan, "soup", *self.soups)
        set_meal_fields(plan, "sides", *[list(sides) for sides in self.sides])

        if self.snack:
            replace_snack(
                plan,
                self.snack.main,
                self.snack.sides,
                self.snack.soup,
                recipe_name=self.snack.recipe_name,
                recipe_steps=list(self.snack.recipe_steps) if self.snack.recipe_steps else None,
                summary=self.snack.summary,
            )
        sync_main_summaries(plan)


@dataclass(frozen=True)
class CancerProfileMatch:
    """Which profile matched, and on which keyword."""
    profile_label: str
    matched_keyword: str


CANCER_PROFILES: List[CancerProfile] = [
    CancerProfile(
        label="유방암",
        keywords=("유방", "breast"),
        rice_types=("현미밥", "잡곡밥", "현미밥"),
        mains=("달걀두부찜", "연어구이", "닭가슴살구이"),
        sides=(
            ("브로콜리찜", "버섯볶음", "당근볶음"),
            ("양배추볶음", "시금치나물", "오이무침"),
            ("구운채소", "버섯볶음", "저염 나물"),
        ),
        snack=SnackOverride(
            main="무가당 요거트",
            sides=("베리류", "호두 소량"),
            soup="물",
            summary="무가당 요거트 + 베리류 + 호두 소량",
            recipe_name="유방암 고려 간식 조합",
            recipe_steps=(
                "무가당 요거트를 1회 분량으로 담아 주세요.",
                "베리류와 호두를 소량 곁들여 주세요.",
                "당 함량이 높은 소스나 시럽은 피해주세요.",
            ),
        ),
        notes=("암 종류(유방암)를 직접 반영해 저당·채소·생선/두부 중심으로 조정했어요.",),
    ),
    CancerProfile(
        label="소화기계 암",
        keywords=(
            "위암", "위장", "위식도", "대장", "결장", "직장", "소장", "췌장", "식도",
            "gastric", "colon", "colorectal", "pancreas", "pancreatic", "esophageal",
        ),
        mains=("부드러운 죽", "연두부덮밥", "흰살생선찜"),
        soups=("단호박수프", "두부맑은국", "맑은채소국"),
        sides=(
            ("데친브로콜리", "애호박볶음", "저염 채소볶음"),
            ("담백한 두부무침", "버섯볶음", "저염 나물"),
            ("저염 채소무침", "시금치나물", "구운채소"),
        ),
        snack=SnackOverride(
            main="무가당 두유",
            sides=("바나나 반 개",),
            soup="따뜻한 물",
            summary="두유 + 바나나 반 개 + 따뜻한 물",
            recipe_name="소화기 암종 고려 간식 조합",
            recipe_steps=(
                "무가당 두유를 작은 컵에 준비해 주세요.",
                "바나나 반 개를 소량 곁들여 주세요.",
                "속이 불편하면 천천히 나눠 드세요.",
            ),
        ),
        notes=("암 종류(소화기 계열)를 반영해 부드럽고 소화가 편한 저자극 메뉴 중심으로 조정했어요.",),
    ),
    CancerProfile(
        label="폐암",
        keywords=("폐", "lung"),
        mains=("달걀두부찜", "닭안심찜", "고등어구이"),
        soups=("들깨버섯수프", "맑은채소국", "미역국(저염)"),
        sides=(
            ("브로콜리찜", "버섯볶음", "당근볶음"),
            ("양배추볶음", "오이무침", "저염 나물"),
            ("구운채소", "시금치나물", "저염 버섯볶음"),
        ),
        notes=("암 종류(폐암)를 반영해 수분·단백질 보강과 저자극 조합을 우선 배치했어요.",),
    ),
    CancerProfile(
        label="간담도계 암",
        keywords=("간암", "간세포", "liver", "hepat", "담도", "담낭", "biliary", "gallbladder", "cholangio"),
        rice_types=("귀리밥", "보리밥", "현미밥"),
        mains=("닭안심찜", "두부조림", "흰살생선찜"),
        soups=("두부맑은국", "맑은채소국", "미역국(저염)"),
        sides=(
            ("데친브로콜리", "애호박볶음", "저염 채소볶음"),
            ("담백한 두부무침", "버섯볶음", "저염 나물"),
            ("구운채소", "시금치나물", "저염 버섯볶음"),
        ),
        notes=("암 종류(간·담도 계열)를 반영해 저염·저지방 조리 기준으로 조정했어요.",),
    ),
    CancerProfile(
        label="혈액암",
        keywords=("백혈병", "림프종", "골수종", "혈액", "leukemia", "lymphoma", "myeloma", "hematologic", "haematologic"),
        mains=("달걀두부찜", "닭안심찜", "흰살생선찜"),
        soups=("두부맑은국", "맑은채소국", "미역국(저염)"),
        sides=(
            ("데친브로콜리", "버섯볶음", "저염 채소볶음"),
            ("저염 나물", "구운채소", "오이무침"),
            ("애호박볶음", "시금치나물", "저염 버섯볶음"),
        ),
        snack=SnackOverride(
            main="무가당 요거트",
            sides=("사과 조각",),
            soup="따뜻한 물",
            summary="무가당 요거트 + 사과 조각 + 따뜻한 물",
            recipe_name="혈액암 고려 간식 조합",
            recipe_steps=(
                "무가당 요거트를 1회 분량으로 준비해 주세요.",
                "씻은 과일은 소량만 곁들여 주세요.",
                "익힌 메뉴 위주 식사를 유지해 주세요.",
            ),
        ),
        notes=("암 종류(혈액암 계열)를 반영해 익힌 음식 중심의 저자극 구성으로 조정했어요.",),
    ),
    CancerProfile(
        label="갑상선암",
        keywords=("갑상선", "thyroid", "papillary", "follicular"),
        mains=("달걀두부찜", "닭가슴살구이", "두부조림"),
        soups=("두부맑은국", "맑은채소국", "단호박수프"),
        sides=(
            ("브로콜리찜", "당근볶음", "버섯볶음"),
            ("양배추볶음", "저염 나물", "구운채소"),
            ("애호박볶음", "버섯볶음", "오이무침"),
        ),
        notes=(
            "암 종류(갑상선암)를 반영해 담백한 조리 중심으로 조정했어요.",
            "갑상선암은 치료 방식에 따라 요오드 제한 필요 여부가 달라질 수 있어, 해조류 제한은 의료진 지시를 우선해 주세요.",
        ),
    ),
    CancerProfile(
        label="신장암",
        keywords=("신장", "신세포", "신우", "kidney", "renal"),
        rice_types=("귀리밥", "보리밥", "현미밥"),
        mains=("닭안심찜", "두부조림", "흰살생선찜"),
        soups=("두부맑은국", "맑은채소국", "미역국(저염)"),
        sides=(
            ("저염 채소볶음", "버섯볶음", "오이무침"),
            ("담백한 두부무침", "양배추볶음", "저염 나물"),
            ("구운채소", "당근볶음", "저염 버섯볶음"),
        ),
        snack=SnackOverride(
            main="무가당 요거트",
            sides=("사과 조각",),
            soup="물",
            summary="무가당 요거트 + 사과 조각 + 물",
        ),
        notes=(
            "암 종류(신장암)를 반영해 저염·저자극 구성으로 조정했어요.",
            "신장암은 신기능 수치(eGFR/칼륨/인)에 따라 제한이 달라지므로, 검사 결과 기반 조정을 의료진과 확인해 주세요.",
        ),
    ),
    CancerProfile(
        label="자궁경부암",
        keywords=("자궁경부", "경부암", "cervical"),
        mains=("달걀두부찜", "닭안심찜", "연어구이"),
        soups=("들깨버섯수프", "맑은채소국", "두부맑은국"),
        sides=(
            ("브로콜리찜", "시금치나물", "당근볶음"),
            ("양배추볶음", "버섯볶음", "저염 나물"),
            ("구운채소", "오이무침", "저염 채소볶음"),
        ),
        notes=("암 종류(자궁경부암)을 반영해 단백질·채소 균형과 저자극 조합을 우선했어요.",),
    ),
]


def normalize_for_match(text: str) -> str:
    """Lowercase and drop all whitespace."""
    return re.sub(r"\s+", "", (text or "").lower())


def find_cancer_profile(cancer_type: str) -> Tuple[Optional[CancerProfile], Optional[str]]:
    """
    First profile whose keyword occurs in the cancer type.

    Profiles are checked in a fixed order, so "유방" wins over any later
    family that might also match.

    Returns:
        (profile, matched keyword), or (None, None)
    """
    normalized = normalize_for_match(cancer_type)
    if not normalized:
        return None, None

    for profile in CANCER_PROFILES:
        for keyword in profile.keywords:
            if keyword in normalized:
                return profile, keyword
    return None, None


def detect_cancer_profile(cancer_type: str) -> Optional[CancerProfileMatch]:
    """
    Identify the menu profile for a free-text cancer type.

    Example:
        >>> detect_cancer_profile("Breast cancer").profile_label
        '유방암'
    """
    profile, keyword = find_cancer_profile(cancer_type)
    if profile is None:
        return None
    return CancerProfileMatch(profile.label, keyword)
