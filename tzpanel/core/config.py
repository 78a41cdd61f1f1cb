import json
from tzpanel.common.logger import log
from tzpanel.common.setup import PATHS

#region === Helpers and Paths ===

PREFERENCES_PATH = PATHS.current / "preferences.json"

# Font size that selects the compact row table.
COMPACT_FONT_SIZE = 4

# Values for the "relative_date" preference.
RELATIVE_DATE_RELATIVE = 0
RELATIVE_DATE_ACTUAL_DAY = 1
RELATIVE_DATE_DATE = 2
RELATIVE_DATE_HIDDEN = 3

# Default values for every preference key, along with the type each key must hold to be considered valid.
_SETTINGS_DEFAULTS = {
    "font_size": 1,
    "relative_date": RELATIVE_DATE_RELATIVE,
    "display_sunrise": True,
    "show_app_in_foreground": False,
    "theme": "Light",
    "timezones": [],
}

# bool is a subclass of int, so int-typed keys must reject bools explicitly.
def _valid(key, value):
    default = _SETTINGS_DEFAULTS[key]
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))

def build_default_preferences():
    return {key: (list(value) if isinstance(value, list) else value) for key, value in _SETTINGS_DEFAULTS.items()}

#endregion === Helpers and Paths ===

#region === Saving and Loading Preferences ===

# Loads preferences.json, filling any missing or ill-typed keys with defaults. Falls back to a fresh default dict if
# the file is missing or unreadable.
def load_preferences():
    try:
        if not PREFERENCES_PATH.exists():
            log.info("No existing preferences.json found in `current`, loading default preferences.")
            return build_default_preferences()

        with open(PREFERENCES_PATH, "r", encoding="utf-8") as f:
            prefs = json.load(f)
        if not isinstance(prefs, dict):
            raise TypeError(f"Expected a JSON object in '{PREFERENCES_PATH}', got {type(prefs).__name__}")

        defaulted_values = set()
        for key, default in _SETTINGS_DEFAULTS.items():
            if key not in prefs or not _valid(key, prefs[key]):
                defaulted_values.add(key)
                prefs[key] = list(default) if isinstance(default, list) else default

        if defaulted_values:
            log.warning(f"Loaded preferences from '{PREFERENCES_PATH}', but with missing values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded preferences from '{PREFERENCES_PATH}'.")
        return prefs
    # Fall back to fresh defaults in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load preferences.json, falling back to default preferences.",exc_info=True)
        return build_default_preferences()

# Write the given preferences to disk under PATHS.current / preferences.json
def save_preferences(prefs):
    with open(PREFERENCES_PATH, "w", encoding="utf-8") as f:
        json.dump(prefs, f, indent=2)
    log.info(f"Successfully saved preferences to '{PREFERENCES_PATH}'")

#endregion === Saving and Loading Preferences ===

#region === Preference Source ===

# Read-only view over a preferences dict, handed to the data source and deletion coordinator. A value that is missing
# or holds the wrong type reads as None ("not available yet") instead of raising.
class Preferences:

    def __init__(self, settings=None):
        self.settings = settings if settings is not None else {}

    def _get(self, key):
        value = self.settings.get(key)
        if value is None or not _valid(key, value):
            return None
        return value

    def font_size(self):
        return self._get("font_size")

    def relative_date_mode(self):
        return self._get("relative_date")

    def should_display_sunrise(self):
        return bool(self._get("display_sunrise"))

    def show_app_in_foreground(self):
        return bool(self._get("show_app_in_foreground"))

#endregion === Preference Source ===
