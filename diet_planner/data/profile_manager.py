# diet_planner/data/profile_manager.py
"""
Profile manager.

Reads the patient profile JSON (body measures, cancer type, active
treatment stage, medication schedules, other conditions) and turns it
into a read-only UserDietContext.
"""
import json
from pathlib import Path
from typing import List, Optional

from diet_planner.models import UserDietContext


class ProfileManager:
    """
    Loads the patient profile.

    A missing or unreadable file yields the default context, which makes
    every personalization rule a no-op.
    """

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)
        self._context: Optional[UserDietContext] = None
        self._validation_errors: List[str] = []

    def load(self) -> UserDietContext:
        """
        Load the profile from disk.

        Returns:
            UserDietContext (default when the file is missing)
        """
        self._validation_errors.clear()
        self._context = UserDietContext()

        if not self.filepath.exists():
            return self._context

        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self._validation_errors.append(f"Invalid JSON in profile: {e}")
            return self._context
        except OSError as e:
            self._validation_errors.append(f"Error reading profile: {e}")
            return self._context

        if not isinstance(data, dict):
            self._validation_errors.append("Profile is not a JSON object")
            return self._context

        self._context = UserDietContext.from_dict(data)
        return self._context

    @property
    def context(self) -> UserDietContext:
        if self._context is None:
            return self.load()
        return self._context

    def get_error_message(self) -> str:
        if not self._validation_errors:
            return ""
        if len(self._validation_errors) == 1:
            return self._validation_errors[0]
        return f"Profile has {len(self._validation_errors)} issues"

    def save(self, context: UserDietContext) -> None:
        self._context = context
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(self.filepath, "w", encoding="utf-8") as f:
            json.dump(context.to_dict(), f, ensure_ascii=False, indent=2)
