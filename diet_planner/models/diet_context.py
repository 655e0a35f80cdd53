# diet_planner/models/diet_context.py
"""
Treatment context models: stage types, medications and the read-only
UserDietContext snapshot assembled from profile data.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple

from .meal_plan import MealSlot, MAIN_SLOTS


class StageType(Enum):
    """Treatment-stage category driving the base menu profile."""
    DIAGNOSIS = "diagnosis"
    CHEMO = "chemo"
    CHEMO_2ND = "chemo_2nd"
    RADIATION = "radiation"
    TARGETED = "targeted"
    IMMUNOTHERAPY = "immunotherapy"
    HORMONE_THERAPY = "hormone_therapy"
    SURGERY = "surgery"
    MEDICATION = "medication"
    OTHER = "other"

    @property
    def label(self) -> str:
        return STAGE_TYPE_LABELS[self]

    @property
    def is_soft(self) -> bool:
        """Chemotherapy and radiation stages call for gentle menus."""
        return self in SOFT_STAGES

    @property
    def is_lower_carb(self) -> bool:
        return self in LOWER_CARB_STAGES

    @classmethod
    def parse(cls, value) -> "StageType":
        """
        Parse a stage from its key or Korean label.

        Unknown or missing values fall back to OTHER (generic safe menu).
        """
        if isinstance(value, StageType):
            return value
        text = str(value or "").strip().lower()
        for stage in cls:
            if text in (stage.value, stage.label):
                return stage
        return cls.OTHER


STAGE_TYPE_LABELS = {
    StageType.DIAGNOSIS: "진단",
    StageType.CHEMO: "항암치료",
    StageType.CHEMO_2ND: "항암치료(2차)",
    StageType.RADIATION: "방사선치료",
    StageType.TARGETED: "표적치료",
    StageType.IMMUNOTHERAPY: "면역치료",
    StageType.HORMONE_THERAPY: "호르몬치료",
    StageType.SURGERY: "수술",
    StageType.MEDICATION: "약물치료",
    StageType.OTHER: "기타",
}

SOFT_STAGES = frozenset({StageType.CHEMO, StageType.CHEMO_2ND, StageType.RADIATION})
CHEMO_STAGES = frozenset({StageType.CHEMO, StageType.CHEMO_2ND})
LOWER_CARB_STAGES = frozenset({
    StageType.HORMONE_THERAPY,
    StageType.MEDICATION,
    StageType.TARGETED,
    StageType.IMMUNOTHERAPY,
})

STAGE_STATUSES = ("planned", "active", "completed")
SEXES = ("unknown", "female", "male", "other")


@dataclass(frozen=True)
class MedicationSchedule:
    """
    A medication taken after one of the main meals.

    Attributes:
        name: Medication name
        category: Drug category text (e.g. "항암제", "스테로이드")
        timing: Main meal slot the dose follows
        id: Stable identifier
    """
    name: str
    category: str
    timing: MealSlot
    id: str = ""

    @property
    def timing_label(self) -> str:
        return f"{self.timing.label} 식후"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "timing": self.timing.value,
        }


@dataclass(frozen=True)
class AdditionalCondition:
    """A diagnosed condition besides cancer (e.g. 고혈압, I10, 심혈관)."""
    name: str
    code: str = ""
    category: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "code": self.code, "category": self.category}


def calculate_bmi(height_cm: Optional[float], weight_kg: Optional[float]) -> Optional[float]:
    """
    Body-mass index rounded to one decimal.

    Returns:
        BMI, or None unless both height and weight are positive
    """
    if not height_cm or not weight_kg or height_cm <= 0 or weight_kg <= 0:
        return None
    return round(weight_kg / ((height_cm / 100) ** 2), 1)


@dataclass(frozen=True)
class UserDietContext:
    """
    Read-only snapshot of everything personalization rules may look at.

    Assembled from profile, treatment and medication data; the planning
    core never mutates it.
    """
    age: Optional[int] = None
    sex: str = "unknown"
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    ethnicity: str = ""
    cancer_type: str = ""
    cancer_stage: str = ""
    active_stage_type: StageType = StageType.OTHER
    active_stage_label: str = ""
    active_stage_order: Optional[int] = None
    active_stage_status: Optional[str] = None
    medication_schedules: Tuple[MedicationSchedule, ...] = field(default_factory=tuple)
    additional_conditions: Tuple[AdditionalCondition, ...] = field(default_factory=tuple)
    medications: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def bmi(self) -> Optional[float]:
        return calculate_bmi(self.height_cm, self.weight_kg)

    @property
    def valid_age(self) -> Optional[int]:
        return self.age if self.age and self.age > 0 else None

    @property
    def is_active_treatment(self) -> bool:
        return self.active_stage_status == "active"

    def medication_names(self) -> List[str]:
        """
        Medication names for interaction checks.

        Explicit medication names win; otherwise names come from the
        schedules. Categories are appended so category keywords match too.
        """
        names = [name for name in self.medications if name.strip()]
        if not names:
            names = [schedule.name for schedule in self.medication_schedules]
        categories = [schedule.category for schedule in self.medication_schedules]

        unique = []
        for value in names + categories:
            value = value.strip()
            if value and value not in unique:
                unique.append(value)
        return unique

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserDietContext":
        """
        Build a context from a loosely-typed profile document.

        Invalid fields fall back to "unknown"; nothing raises.
        """
        if not isinstance(data, dict):
            return cls()

        sex = data.get("sex")
        status = data.get("activeStageStatus")
        return cls(
            age=_positive_int(data.get("age")),
            sex=sex if sex in SEXES else "unknown",
            height_cm=_positive_float(data.get("heightCm")),
            weight_kg=_positive_float(data.get("weightKg")),
            ethnicity=_text(data.get("ethnicity")),
            cancer_type=_text(data.get("cancerType")),
            cancer_stage=_text(data.get("cancerStage")),
            active_stage_type=StageType.parse(data.get("activeStageType")),
            active_stage_label=_text(data.get("activeStageLabel")),
            active_stage_order=_positive_int(data.get("activeStageOrder")),
            active_stage_status=status if status in STAGE_STATUSES else None,
            medication_schedules=tuple(parse_medication_schedules(data.get("medicationSchedules"))),
            additional_conditions=tuple(parse_additional_conditions(data.get("additionalConditions"))),
            medications=tuple(parse_medication_names(data.get("medications"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "age": self.age,
            "sex": self.sex,
            "heightCm": self.height_cm,
            "weightKg": self.weight_kg,
            "ethnicity": self.ethnicity,
            "cancerType": self.cancer_type,
            "cancerStage": self.cancer_stage,
            "activeStageType": self.active_stage_type.value,
            "activeStageLabel": self.active_stage_label,
            "activeStageOrder": self.active_stage_order,
            "activeStageStatus": self.active_stage_status,
            "medicationSchedules": [item.to_dict() for item in self.medication_schedules],
            "additionalConditions": [item.to_dict() for item in self.additional_conditions],
            "medications": list(self.medications),
        }


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _positive_int(value) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value) if value > 0 else None


def _positive_float(value) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None


def parse_medication_names(raw: Any) -> List[str]:
    """Trimmed, deduplicated medication names."""
    if not isinstance(raw, list):
        return []
    names = []
    for value in raw:
        if isinstance(value, str) and value.strip() and value.strip() not in names:
            names.append(value.strip())
    return names


def parse_medication_schedules(raw: Any) -> List[MedicationSchedule]:
    """
    Sanitize stored medication schedules.

    Entries need a name, a category and a main-meal timing. Missing ids
    are synthesized; duplicates by (timing, category, name) are dropped.
    """
    if not isinstance(raw, list):
        return []

    schedules = []
    seen = set()
    timings = {slot.value: slot for slot in MAIN_SLOTS}
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            continue
        name = _text(entry.get("name"))
        category = _text(entry.get("category"))
        timing = timings.get(entry.get("timing"))
        if not name or not category or timing is None:
            continue

        key = (timing, category.lower(), name.lower())
        if key in seen:
            continue
        seen.add(key)

        item_id = _text(entry.get("id")) or f"med-{index}-{name}"
        schedules.append(MedicationSchedule(name, category, timing, item_id))
    return schedules


def parse_additional_conditions(raw: Any) -> List[AdditionalCondition]:
    """Sanitize stored additional conditions; a name is required."""
    if not isinstance(raw, list):
        return []

    conditions = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        name = _text(entry.get("name"))
        if not name:
            continue
        condition = AdditionalCondition(name, _text(entry.get("code")), _text(entry.get("category")))
        if condition not in conditions:
            conditions.append(condition)
    return conditions


def parse_cancer_stage_level(stage: str) -> Optional[int]:
    """
    First digit 1-4 in a free-text cancer stage.

    Example:
        >>> parse_cancer_stage_level("3기")
        3
    """
    match = re.search(r"([1-4])", stage or "")
    return int(match.group(1)) if match else None
