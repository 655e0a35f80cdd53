# diet_planner/data/signals_manager.py
"""
External signal items (health-news headlines), read from a JSON list of
{"title": ...} records. Only the titles are used, for keyword scanning.
"""
import json
from pathlib import Path
from typing import Dict, List


class SignalsManager:
    """Loads external signal items; a missing file means no signals."""

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)
        self._validation_errors: List[str] = []

    def load(self) -> List[Dict[str, str]]:
        """
        Load signal items.

        Returns:
            Items with a non-empty string title, in file order
        """
        self._validation_errors.clear()
        if not self.filepath.exists():
            return []

        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self._validation_errors.append(f"Invalid JSON in signals: {e}")
            return []
        except OSError as e:
            self._validation_errors.append(f"Error reading signals: {e}")
            return []

        if isinstance(data, dict):
            data = data.get("items", [])
        if not isinstance(data, list):
            self._validation_errors.append("Signals file is not a list")
            return []

        items = []
        for entry in data:
            title = entry.get("title") if isinstance(entry, dict) else None
            if isinstance(title, str) and title.strip():
                items.append({"title": title.strip()})
        return items

    def get_error_message(self) -> str:
        return "; ".join(self._validation_errors)
