"""Timezone entries, one per panel row. Pure data, no UI."""

from dataclasses import dataclass, replace
from datetime import time
from enum import Enum
from zoneinfo import ZoneInfo

from tzlocal import get_localzone_name

from tzpanel.common.logger import log

FALLBACK_TIMEZONE_ID = "UTC"


# Resolves an IANA id to a ZoneInfo. Raises ValueError for anything zoneinfo doesn't know.
def resolve_timezone(timezone_id):
    if not isinstance(timezone_id, str) or not timezone_id:
        raise ValueError(f"Invalid timezone identifier: {timezone_id!r}")
    try:
        return ZoneInfo(timezone_id)
    except Exception as ex:
        raise ValueError(f"Invalid timezone identifier: {timezone_id!r}") from ex


class SelectionType(Enum):
    """What the user picked when adding the entry.

    City entries are geocoded and can show sunrise/sunset; bare timezone
    entries usually carry no coordinates.
    """
    CITY = "city"
    TIMEZONE = "timezone"


@dataclass
class TimezoneEntry:
    timezone_id: str
    selection_type: SelectionType = SelectionType.TIMEZONE
    is_system_timezone: bool = False
    note: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    custom_label: str | None = None
    formatted_address: str | None = None
    sunrise: time | None = None  # local wall time in the entry's zone
    sunset: time | None = None

    @property
    def has_note(self):
        return bool(self.note)

    # Builds an entry from a stored preferences value: either a bare IANA id or a dict of fields. Raises ValueError
    # when the id isn't a zone this machine knows.
    @staticmethod
    def from_setting(value):
        if isinstance(value, str):
            resolve_timezone(value)
            return TimezoneEntry(timezone_id=value)
        fields = dict(value)
        resolve_timezone(fields.get("timezone_id"))
        fields["selection_type"] = SelectionType(fields.get("selection_type", SelectionType.TIMEZONE.value))
        for key in ("sunrise", "sunset"):
            if isinstance(fields.get(key), str):
                fields[key] = time.fromisoformat(fields[key])
        return TimezoneEntry(**fields)

    # Inverse of from_setting, JSON-safe.
    def to_setting(self):
        return {
            "timezone_id": self.timezone_id,
            "selection_type": self.selection_type.value,
            "is_system_timezone": self.is_system_timezone,
            "note": self.note,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "custom_label": self.custom_label,
            "formatted_address": self.formatted_address,
            "sunrise": self.sunrise.isoformat() if self.sunrise else None,
            "sunset": self.sunset.isoformat() if self.sunset else None,
        }


# IANA name of the machine's zone on any platform, or UTC when it can't be worked out.
def system_timezone_id():
    try:
        name = get_localzone_name()
    except LookupError:
        log.warning("Couldn't determine the system timezone, using UTC", exc_info=True)
        return FALLBACK_TIMEZONE_ID
    if not name:
        return FALLBACK_TIMEZONE_ID
    try:
        resolve_timezone(name)
    except ValueError:
        log.warning(f"System timezone '{name}' isn't a known zone, using UTC")
        return FALLBACK_TIMEZONE_ID
    return name


# Keeps the system entry pointed at the current machine zone and drops any duplicate system entries. A first run (no
# entries at all) gets a system entry; a list the user emptied of it stays that way. Returns a new list.
def seed_system_timezone(entries, timezone_id):
    seeded = []
    found = False
    for entry in entries:
        if entry.is_system_timezone:
            if found:
                continue
            found = True
            if entry.timezone_id != timezone_id:
                entry = replace(entry, timezone_id=timezone_id, custom_label=None, formatted_address=None,
                                latitude=None, longitude=None, sunrise=None, sunset=None,
                                selection_type=SelectionType.TIMEZONE)
        seeded.append(entry)
    if not entries:
        seeded.insert(0, TimezoneEntry(timezone_id=timezone_id, is_system_timezone=True))
    return seeded
