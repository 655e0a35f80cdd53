# diet_planner/data/diet_store.py
"""
Diet store manager.

Loads and saves the patient's diet document (logs, medications,
preferences) as one JSON file. Every record type goes through its own
parse-and-sanitize function; anything invalid is dropped and listed in a
rejection report instead of being raised.
"""
import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from diet_planner.models import (
    DailyPreferences, DayLog, MedicationSchedule, PreferenceTag,
    parse_day_log, parse_medication_names, parse_medication_schedules, parse_preference_list,
)
from diet_planner.utils.dates import is_date_key

MEDICATION_ACTIONS = ("add", "remove")


@dataclass(frozen=True)
class MedicationHistoryEntry:
    """One medication add/remove event."""
    name: str
    action: str
    date: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "action": self.action, "date": self.date}


@dataclass
class DietStore:
    """Everything persisted for one patient."""
    logs: Dict[str, DayLog] = field(default_factory=dict)
    medications: List[str] = field(default_factory=list)
    medication_history: List[MedicationHistoryEntry] = field(default_factory=list)
    medication_schedules: List[MedicationSchedule] = field(default_factory=list)
    preferences: DailyPreferences = field(default_factory=DailyPreferences)
    legacy_preferences: List[PreferenceTag] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "logs": {key: self.logs[key].to_dict() for key in sorted(self.logs)},
            "medications": list(self.medications),
            "medicationHistory": [entry.to_dict() for entry in self.medication_history],
            "medicationSchedules": [schedule.to_dict() for schedule in self.medication_schedules],
            "preferences": [tag.value for tag in self.legacy_preferences],
        }
        data.update(self.preferences.to_dict())
        return data


def _is_timestamp(value: str) -> bool:
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def parse_medication_history(raw: Any) -> List[MedicationHistoryEntry]:
    """
    Sanitize stored medication history.

    Entries need a name, an add/remove action and a parseable date.
    """
    if not isinstance(raw, list):
        return []

    entries = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        name = item.get("name")
        action = item.get("action")
        date_value = item.get("date")
        if not isinstance(name, str) or not name.strip():
            continue
        if action not in MEDICATION_ACTIONS:
            continue
        if not isinstance(date_value, str) or not _is_timestamp(date_value):
            continue
        entries.append(MedicationHistoryEntry(name.strip(), action, date_value))
    return entries


def _parse_daily_preferences(raw: Any, rejections: List[str]) -> Dict[str, List[PreferenceTag]]:
    if not isinstance(raw, dict):
        return {}

    by_date = {}
    for date_key, values in raw.items():
        if not is_date_key(date_key):
            rejections.append(f"dailyPreferences: invalid date key '{date_key}'")
            continue
        tags = parse_preference_list(values)
        if tags:
            by_date[date_key] = tags
    return by_date


def parse_store(raw: Any, rejections: Optional[List[str]] = None) -> DietStore:
    """
    Parse a stored diet document.

    Args:
        raw: Dict or JSON text
        rejections: Optional list that receives one line per dropped record

    Returns:
        DietStore (empty for unusable input)
    """
    if rejections is None:
        rejections = []

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            rejections.append(f"Invalid JSON in diet store: {e}")
            return DietStore()
    if not isinstance(raw, dict):
        if raw is not None:
            rejections.append("Diet store is not a JSON object")
        return DietStore()

    logs = {}
    raw_logs = raw.get("logs")
    if isinstance(raw_logs, dict):
        for date_key, value in raw_logs.items():
            if not is_date_key(date_key):
                rejections.append(f"logs: invalid date key '{date_key}'")
                continue
            log = parse_day_log(value, date_key)
            if log is None:
                rejections.append(f"logs: unreadable log for {date_key}")
                continue
            logs[date_key] = log

    raw_history = raw.get("medicationHistory")
    history = parse_medication_history(raw_history)
    if isinstance(raw_history, list) and len(history) < len(raw_history):
        rejections.append(f"medicationHistory: dropped {len(raw_history) - len(history)} invalid entries")

    raw_schedules = raw.get("medicationSchedules")
    schedules = parse_medication_schedules(raw_schedules)
    if isinstance(raw_schedules, list) and len(schedules) < len(raw_schedules):
        rejections.append(f"medicationSchedules: dropped {len(raw_schedules) - len(schedules)} entries")

    medications = parse_medication_names(raw.get("medications"))
    if not medications:
        medications = parse_medication_names([schedule.name for schedule in schedules])

    legacy = parse_preference_list(raw.get("preferences"))
    carried = parse_preference_list(raw.get("carryPreferences"))
    preferences = DailyPreferences(
        by_date=_parse_daily_preferences(raw.get("dailyPreferences"), rejections),
        carried=carried or legacy,
    )

    return DietStore(
        logs=logs,
        medications=medications,
        medication_history=history,
        medication_schedules=schedules,
        preferences=preferences,
        legacy_preferences=legacy,
    )


class DietStoreManager:
    """
    Manages the diet store JSON file.

    A missing file loads as an empty store. Invalid records are reported
    through get_error_message() but never block the application.
    """

    def __init__(self, filepath: Path):
        """
        Initialize diet store manager.

        Args:
            filepath: Path to diet store JSON file
        """
        self.filepath = Path(filepath)
        self._store: Optional[DietStore] = None
        self._validation_errors: List[str] = []

    def load(self) -> DietStore:
        """
        Load and sanitize the store from disk.

        Returns:
            DietStore (empty when the file is missing or unreadable)
        """
        self._validation_errors.clear()

        if not self.filepath.exists():
            self._store = DietStore()
            return self._store

        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            self._validation_errors.append(f"Error reading diet store: {e}")
            self._store = DietStore()
            return self._store

        self._store = parse_store(text, self._validation_errors)
        return self._store

    @property
    def store(self) -> DietStore:
        if self._store is None:
            return self.load()
        return self._store

    @property
    def validation_errors(self) -> List[str]:
        return self._validation_errors.copy()

    def get_error_message(self) -> str:
        """Get formatted error message for display."""
        if not self._validation_errors:
            return ""
        if len(self._validation_errors) == 1:
            return self._validation_errors[0]
        return f"Diet store has {len(self._validation_errors)} issues"

    def save(self, store: Optional[DietStore] = None) -> None:
        """Write the store back to disk."""
        if store is not None:
            self._store = store
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "w", encoding="utf-8") as f:
            json.dump(self.store.to_dict(), f, ensure_ascii=False, indent=2)

    def save_log(self, date_key: str, log: DayLog) -> None:
        """Overwrite one date's log and persist."""
        self.store.logs[date_key] = log
        self.save()
