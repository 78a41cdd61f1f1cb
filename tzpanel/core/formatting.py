"""Display strings for a timezone entry at a simulated moment.

The panel only needs the ``TimezoneFormatter`` shape; ``ZoneFormatter`` is
the zoneinfo-backed implementation the desktop app uses.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo

from tzpanel.core.config import (
    RELATIVE_DATE_ACTUAL_DAY,
    RELATIVE_DATE_DATE,
    RELATIVE_DATE_HIDDEN,
)
from tzpanel.core.entry import TimezoneEntry


@dataclass(frozen=True)
class FormattedTime:
    time: str
    relative_date: str
    sunrise_set_time: str
    is_sunrise: bool


class TimezoneFormatter(Protocol):
    def format(self, entry: TimezoneEntry, offset: int) -> FormattedTime: ...

    def label(self, entry: TimezoneEntry) -> str: ...


def format_clock(dt: datetime) -> str:
    """12-hour clock without a leading zero, e.g. ``9:05 PM``."""
    return dt.strftime("%I:%M %p").lstrip("0")


def format_offset_difference(seconds: int) -> str:
    """Signed hour/minute difference, e.g. ``+5h 30m`` or ``-3h``. Empty for zero."""
    if seconds == 0:
        return ""
    sign = "+" if seconds > 0 else "-"
    minutes = abs(seconds) // 60
    hours, minutes = divmod(minutes, 60)
    if hours and minutes:
        return f"{sign}{hours}h {minutes}m"
    if hours:
        return f"{sign}{hours}h"
    return f"{sign}{minutes}m"


class ZoneFormatter:
    """Formats entries with zoneinfo.

    ``offset`` is the slider value in minutes added to the current moment.
    ``now`` returns an aware datetime and is injectable so tests can pin the
    clock, and ``local_zone`` stands in for the machine's own zone (None
    means the real one). ``relative_date_mode`` is read on every call so preference changes
    show up on the next render.
    """

    def __init__(self, relative_date_mode: Callable[[], int | None] = lambda: None,
                 now: Callable[[], datetime] | None = None,
                 local_zone: tzinfo | None = None):
        self._relative_date_mode = relative_date_mode
        self._local_zone = local_zone
        self._now = now or (lambda: datetime.now().astimezone())

    def format(self, entry: TimezoneEntry, offset: int) -> FormattedTime:
        moment = self._now() + timedelta(minutes=offset)
        local = moment.astimezone(self._local_zone)
        there = moment.astimezone(ZoneInfo(entry.timezone_id))
        sunrise_set_time, is_sunrise = self._sunrise_or_sunset(entry, there)
        return FormattedTime(
            time=format_clock(there),
            relative_date=self._relative_date(there, local),
            sunrise_set_time=sunrise_set_time,
            is_sunrise=is_sunrise,
        )

    def label(self, entry: TimezoneEntry) -> str:
        if entry.custom_label:
            return entry.custom_label
        if entry.formatted_address:
            return entry.formatted_address
        return entry.timezone_id.rsplit("/", 1)[-1].replace("_", " ")

    def _relative_date(self, there: datetime, local: datetime) -> str:
        mode = self._relative_date_mode()
        if mode == RELATIVE_DATE_HIDDEN:
            return ""
        if mode == RELATIVE_DATE_ACTUAL_DAY:
            return there.strftime("%A")
        if mode == RELATIVE_DATE_DATE:
            return there.strftime("%a %d %b")

        days = (there.date() - local.date()).days
        day = {0: "Today", -1: "Yesterday", 1: "Tomorrow"}.get(days, there.strftime("%A"))
        difference = int(there.utcoffset().total_seconds() - local.utcoffset().total_seconds())
        suffix = format_offset_difference(difference)
        return f"{day}, {suffix}" if suffix else day

    @staticmethod
    def _sunrise_or_sunset(entry: TimezoneEntry, there: datetime) -> tuple[str, bool]:
        if entry.sunrise is None or entry.sunset is None:
            return "", False
        now = there.time()
        # Daylight: sunset is next. Otherwise the next event is a sunrise, today's or tomorrow's.
        if entry.sunrise <= now < entry.sunset:
            event, is_sunrise = entry.sunset, False
        else:
            event, is_sunrise = entry.sunrise, True
        return format_clock(datetime.combine(there.date(), event)), is_sunrise
