"""
Configuration for Diet Planner application.

Toggle between PRODUCTION and DEVELOPMENT mode.
"""
import os
from pathlib import Path

# ==================== MODE SELECTION ====================
# Set DIET_PLANNER_MODE to switch between production and development data
MODE = os.environ.get("DIET_PLANNER_MODE", "DEVELOPMENT")  # "PRODUCTION" or "DEVELOPMENT"
# ========================================================

# Base paths
PROJECT_ROOT = Path(__file__).parent
PRODUCTION_DATA_PATH = Path.home() / ".diet_planner"
DEVELOPMENT_DATA_PATH = PROJECT_ROOT / "data"

# Select data path based on mode
if MODE == "PRODUCTION":
    DATA_PATH = PRODUCTION_DATA_PATH
    print("⚠️  WARNING: Running in PRODUCTION mode - using real data!")
elif MODE == "DEVELOPMENT":
    DATA_PATH = DEVELOPMENT_DATA_PATH
    print("✓ Running in DEVELOPMENT mode - using test data copy")
else:
    raise ValueError(f"Invalid MODE: {MODE}. Must be 'PRODUCTION' or 'DEVELOPMENT'")

# File paths
STORE_FILE = DATA_PATH / "diet_store.json"
PROFILE_FILE = DATA_PATH / "profile.json"
SIGNALS_FILE = DATA_PATH / "signals.json"

print("Using these files: ")
print(f"  store: {STORE_FILE}")
print(f"  profile: {PROFILE_FILE}")
print(f"  signals: {SIGNALS_FILE}")


def verify_data_files():
    """Check that all required data files exist."""
    missing = []

    # The profile is required; the store is created on first save and
    # signals are optional
    if not PROFILE_FILE.exists():
        missing.append(str(PROFILE_FILE))

    if missing:
        raise FileNotFoundError(
            f"Missing data files in {MODE} mode:\n" +
            "\n".join(f"  - {f}" for f in missing)
        )

    return True


# Chart output
CHART_OUTPUT_FILE = DATA_PATH / "diet_score_trend.jpg"

# Application settings
DEFAULT_CHART_WINDOW = 7  # days for moving average
DATE_FORMAT = "%Y-%m-%d"
NO_REPEAT_DAYS = 30       # no-repeat lookback
RECENT_LOG_DAYS = 14      # log window for preference recommendations

if __name__ == "__main__":
    print(f"\nMode: {MODE}")
    print(f"Data Path: {DATA_PATH}")
    print(f"Store File: {STORE_FILE}")
    print(f"Profile File: {PROFILE_FILE}")
    print(f"Signals File: {SIGNALS_FILE}")
    print(f"\nFiles exist: {verify_data_files()}")
