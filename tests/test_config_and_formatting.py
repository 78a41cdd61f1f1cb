"""Tests for preferences, entries and the zoneinfo formatter.

Covers: tzpanel.core.config, tzpanel.core.entry, tzpanel.core.formatting
"""

import json
import shutil
import tempfile
import unittest
from datetime import datetime, time, timezone
from pathlib import Path
from unittest.mock import patch
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzpanel.core.config import RELATIVE_DATE_ACTUAL_DAY, RELATIVE_DATE_DATE, RELATIVE_DATE_HIDDEN, Preferences
from tzpanel.core.entry import (
    SelectionType,
    TimezoneEntry,
    resolve_timezone,
    seed_system_timezone,
    system_timezone_id,
)
from tzpanel.core.formatting import ZoneFormatter, format_clock, format_offset_difference


# ──────────────────────────────────────────────────────────────────────────
# config.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestPreferencesFile(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        from tzpanel.core import config
        self._orig_path = config.PREFERENCES_PATH
        config.PREFERENCES_PATH = Path(self.tmpdir) / "preferences.json"

    def tearDown(self):
        from tzpanel.core import config
        config.PREFERENCES_PATH = self._orig_path
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_fresh_start_returns_defaults(self):
        from tzpanel.core.config import load_preferences
        prefs = load_preferences()
        self.assertEqual(prefs["font_size"], 1)
        self.assertEqual(prefs["relative_date"], 0)
        self.assertTrue(prefs["display_sunrise"])
        self.assertFalse(prefs["show_app_in_foreground"])
        self.assertEqual(prefs["timezones"], [])

    def test_defaults_are_not_shared(self):
        from tzpanel.core.config import load_preferences
        first = load_preferences()
        first["timezones"].append("UTC")
        self.assertEqual(load_preferences()["timezones"], [])

    def test_save_and_load_roundtrip(self):
        from tzpanel.core.config import load_preferences, save_preferences
        prefs = load_preferences()
        prefs["font_size"] = 4
        prefs["timezones"] = ["Asia/Tokyo", {"timezone_id": "Europe/Paris", "selection_type": "city"}]
        save_preferences(prefs)

        loaded = load_preferences()
        self.assertEqual(loaded["font_size"], 4)
        self.assertEqual(loaded["timezones"][1]["selection_type"], "city")

    def test_missing_and_ill_typed_keys_are_defaulted(self):
        from tzpanel.core import config
        with open(config.PREFERENCES_PATH, "w") as f:
            json.dump({"font_size": True, "relative_date": 3, "display_sunrise": "yes"}, f)

        with self.assertLogs("tzpanel", level="WARNING") as logs:
            loaded = config.load_preferences()
        self.assertEqual(loaded["font_size"], 1)
        self.assertEqual(loaded["relative_date"], 3)
        self.assertTrue(loaded["display_sunrise"])
        self.assertIn("display_sunrise", logs.output[0])
        self.assertIn("font_size", logs.output[0])

    def test_corrupted_file_falls_back_to_defaults(self):
        from tzpanel.core import config
        with open(config.PREFERENCES_PATH, "w") as f:
            f.write("{invalid json!!")
        loaded = config.load_preferences()
        self.assertEqual(loaded["font_size"], 1)

    def test_non_object_file_falls_back_to_defaults(self):
        from tzpanel.core import config
        with open(config.PREFERENCES_PATH, "w") as f:
            json.dump([1, 2, 3], f)
        self.assertEqual(config.load_preferences()["relative_date"], 0)


class TestPreferenceSource(unittest.TestCase):

    def test_reads_values(self):
        prefs = Preferences({"font_size": 2, "relative_date": 1, "display_sunrise": False,
                             "show_app_in_foreground": True})
        self.assertEqual(prefs.font_size(), 2)
        self.assertEqual(prefs.relative_date_mode(), 1)
        self.assertFalse(prefs.should_display_sunrise())
        self.assertTrue(prefs.show_app_in_foreground())

    def test_unavailable_values_read_as_none(self):
        prefs = Preferences()
        self.assertIsNone(prefs.font_size())
        self.assertIsNone(prefs.relative_date_mode())
        self.assertFalse(prefs.should_display_sunrise())
        self.assertFalse(prefs.show_app_in_foreground())

    def test_bool_is_not_a_font_size(self):
        self.assertIsNone(Preferences({"font_size": True}).font_size())


# ──────────────────────────────────────────────────────────────────────────
# entry.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestEntries(unittest.TestCase):

    def test_from_bare_id(self):
        entry = TimezoneEntry.from_setting("Asia/Kolkata")
        self.assertEqual(entry.timezone_id, "Asia/Kolkata")
        self.assertEqual(entry.selection_type, SelectionType.TIMEZONE)
        self.assertFalse(entry.is_system_timezone)

    def test_setting_roundtrip(self):
        entry = TimezoneEntry("Europe/Oslo", SelectionType.CITY, note="ski trip", latitude=59.9, longitude=10.7,
                              sunrise=time(8, 15), sunset=time(16, 2))
        self.assertEqual(TimezoneEntry.from_setting(entry.to_setting()), entry)

    def test_unknown_selection_type_raises(self):
        with self.assertRaises(ValueError):
            TimezoneEntry.from_setting({"timezone_id": "UTC", "selection_type": "planet"})

    def test_unknown_zone_id_is_rejected(self):
        with self.assertRaises(ValueError):
            TimezoneEntry.from_setting("Mars/Olympus_Mons")
        with self.assertRaises(ValueError):
            TimezoneEntry.from_setting({"timezone_id": "Mars/Olympus_Mons", "selection_type": "city"})
        with self.assertRaises(ValueError):
            TimezoneEntry.from_setting({"selection_type": "timezone"})

    def test_resolve_timezone(self):
        self.assertEqual(resolve_timezone("Asia/Kolkata"), ZoneInfo("Asia/Kolkata"))
        for bad in ("Mars/Olympus_Mons", "", None, "../etc/passwd"):
            with self.assertRaises(ValueError):
                resolve_timezone(bad)

    def test_seed_adds_system_entry_on_first_run(self):
        seeded = seed_system_timezone([], "Europe/Berlin")
        self.assertEqual(len(seeded), 1)
        self.assertTrue(seeded[0].is_system_timezone)
        self.assertEqual(seeded[0].timezone_id, "Europe/Berlin")

    def test_seed_leaves_deleted_home_row_deleted(self):
        entries = [TimezoneEntry("Asia/Tokyo")]
        self.assertEqual(seed_system_timezone(entries, "Europe/Berlin"), entries)

    def test_seed_follows_machine_zone_and_drops_duplicates(self):
        entries = [
            TimezoneEntry("Asia/Tokyo"),
            TimezoneEntry("America/Denver", is_system_timezone=True, note="home"),
            TimezoneEntry("UTC", is_system_timezone=True),
        ]
        seeded = seed_system_timezone(entries, "Europe/Berlin")
        self.assertEqual([e.timezone_id for e in seeded], ["Asia/Tokyo", "Europe/Berlin"])
        self.assertEqual(seeded[1].note, "home")
        # Input untouched
        self.assertEqual(entries[1].timezone_id, "America/Denver")


class TestSystemTimezone(unittest.TestCase):

    def test_uses_platform_zone_name(self):
        with patch("tzpanel.core.entry.get_localzone_name", return_value="Asia/Kolkata"):
            self.assertEqual(system_timezone_id(), "Asia/Kolkata")

    def test_windows_style_lookup_result(self):
        # On Windows the platform lookup maps the registry zone to its IANA name
        with patch("tzpanel.core.entry.get_localzone_name", return_value="America/Los_Angeles"):
            self.assertEqual(system_timezone_id(), "America/Los_Angeles")

    def test_unknown_platform_zone_falls_back_to_utc(self):
        with patch("tzpanel.core.entry.get_localzone_name", return_value="Mars/Olympus_Mons"):
            with self.assertLogs("tzpanel", level="WARNING"):
                self.assertEqual(system_timezone_id(), "UTC")

    def test_lookup_failure_falls_back_to_utc(self):
        with patch("tzpanel.core.entry.get_localzone_name", side_effect=ZoneInfoNotFoundError("no config")):
            with self.assertLogs("tzpanel", level="WARNING"):
                self.assertEqual(system_timezone_id(), "UTC")

    def test_no_name_falls_back_to_utc(self):
        with patch("tzpanel.core.entry.get_localzone_name", return_value=None):
            self.assertEqual(system_timezone_id(), "UTC")


# ──────────────────────────────────────────────────────────────────────────
# formatting.py tests
# ──────────────────────────────────────────────────────────────────────────

# 2026-03-10 14:30 UTC, a Tuesday
_NOW = datetime(2026, 3, 10, 14, 30, tzinfo=timezone.utc)


def _formatter(mode=0, local="Europe/London"):
    return ZoneFormatter(lambda: mode, now=lambda: _NOW, local_zone=ZoneInfo(local))


class TestZoneFormatter(unittest.TestCase):

    def test_clock_and_offset_helpers(self):
        self.assertEqual(format_clock(datetime(2026, 1, 1, 9, 5)), "9:05 AM")
        self.assertEqual(format_clock(datetime(2026, 1, 1, 21, 40)), "9:40 PM")
        self.assertEqual(format_offset_difference(0), "")
        self.assertEqual(format_offset_difference(19800), "+5h 30m")
        self.assertEqual(format_offset_difference(-3 * 3600), "-3h")
        self.assertEqual(format_offset_difference(45 * 60), "+45m")

    def test_time_in_zone(self):
        formatted = _formatter().format(TimezoneEntry("Asia/Tokyo"), 0)
        self.assertEqual(formatted.time, "11:30 PM")

    def test_slider_offset_moves_time(self):
        formatted = _formatter().format(TimezoneEntry("Asia/Tokyo"), 90)
        self.assertEqual(formatted.time, "1:00 AM")
        self.assertTrue(formatted.relative_date.startswith("Tomorrow"))

    def test_relative_date_modes(self):
        entry = TimezoneEntry("Asia/Kolkata")
        self.assertEqual(_formatter(0).format(entry, 0).relative_date, "Today, +5h 30m")
        self.assertEqual(_formatter(RELATIVE_DATE_ACTUAL_DAY).format(entry, 0).relative_date, "Tuesday")
        self.assertEqual(_formatter(RELATIVE_DATE_DATE).format(entry, 0).relative_date, "Tue 10 Mar")
        self.assertEqual(_formatter(RELATIVE_DATE_HIDDEN).format(entry, 0).relative_date, "")

    def test_same_zone_has_no_difference(self):
        self.assertEqual(_formatter().format(TimezoneEntry("Europe/London"), 0).relative_date, "Today")

    def test_yesterday(self):
        formatted = _formatter().format(TimezoneEntry("Pacific/Honolulu"), -12 * 60)
        self.assertTrue(formatted.relative_date.startswith("Yesterday, -10h"))

    def test_sunrise_and_sunset(self):
        entry = TimezoneEntry("Europe/London", SelectionType.CITY, sunrise=time(6, 20), sunset=time(18, 5))
        # 14:30 local, daylight: sunset next
        afternoon = _formatter().format(entry, 0)
        self.assertEqual(afternoon.sunrise_set_time, "6:05 PM")
        self.assertFalse(afternoon.is_sunrise)
        # 20:30 local, after dark: sunrise next
        evening = _formatter().format(entry, 6 * 60)
        self.assertEqual(evening.sunrise_set_time, "6:20 AM")
        self.assertTrue(evening.is_sunrise)

    def test_no_sunrise_without_times(self):
        formatted = _formatter().format(TimezoneEntry("Asia/Tokyo"), 0)
        self.assertEqual(formatted.sunrise_set_time, "")
        self.assertFalse(formatted.is_sunrise)

    def test_labels(self):
        formatter = _formatter()
        self.assertEqual(formatter.label(TimezoneEntry("America/New_York")), "New York")
        self.assertEqual(formatter.label(TimezoneEntry("America/New_York", formatted_address="NYC, USA")), "NYC, USA")
        self.assertEqual(formatter.label(TimezoneEntry("America/New_York", custom_label="Office",
                                                       formatted_address="NYC, USA")), "Office")
        self.assertEqual(formatter.label(TimezoneEntry("UTC")), "UTC")


if __name__ == "__main__":
    unittest.main()
