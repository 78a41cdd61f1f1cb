"""Stand-ins for the panel's collaborators, shared by the test modules."""

from tzpanel.core.config import Preferences
from tzpanel.core.data_source import TimezoneDataSource
from tzpanel.core.deletion import FIRST_BUTTON_RESPONSE, DeferredTaskQueue, DeletionRouter
from tzpanel.core.entry import SelectionType, TimezoneEntry
from tzpanel.core.formatting import FormattedTime

YES = FIRST_BUTTON_RESPONSE
NO = FIRST_BUTTON_RESPONSE + 1


def city(timezone_id="Europe/Paris", **kwargs):
    kwargs.setdefault("latitude", 48.85)
    kwargs.setdefault("longitude", 2.35)
    return TimezoneEntry(timezone_id=timezone_id, selection_type=SelectionType.CITY, **kwargs)


def zone(timezone_id="Asia/Tokyo", **kwargs):
    return TimezoneEntry(timezone_id=timezone_id, selection_type=SelectionType.TIMEZONE, **kwargs)


def prefs(**overrides):
    settings = {
        "font_size": 1,
        "relative_date": 0,
        "display_sunrise": True,
        "show_app_in_foreground": False,
    }
    settings.update(overrides)
    return Preferences(settings)


class FakeFormatter:
    """Echoes the entry and offset back so tests can see what was asked."""

    def __init__(self, is_sunrise=True, sunrise_set_time="6:42 AM"):
        self.is_sunrise = is_sunrise
        self.sunrise_set_time = sunrise_set_time
        self.calls = []

    def format(self, entry, offset):
        self.calls.append((entry.timezone_id, offset))
        return FormattedTime(
            time=f"{entry.timezone_id}@{offset}",
            relative_date="Today",
            sunrise_set_time=self.sunrise_set_time,
            is_sunrise=self.is_sunrise,
        )

    def label(self, entry):
        return entry.custom_label or entry.timezone_id


class FakeThemer:
    def sunrise_image(self):
        return "sunrise"

    def sunset_image(self):
        return "sunset"

    def trash_image(self):
        return "trash"


class FakeCell:
    def __init__(self):
        self.extra_options_opacity = None

    def set_extra_options_opacity(self, alpha):
        self.extra_options_opacity = alpha


class FakeTable:
    """A table with ``rows`` rows of which only ``materialized`` have cells built."""

    def __init__(self, rows, materialized=None):
        materialized = range(rows) if materialized is None else materialized
        self.cells = {i: FakeCell() for i in materialized}
        self.rows = rows
        self.removed = []
        self.events = []

    def number_of_rows(self):
        return self.rows

    def cell_at(self, row):
        return self.cells.get(row)

    def remove_rows(self, row, animation):
        self.removed.append((row, animation))
        self.events.append(("view_removed", row))
        self.rows -= 1


class FakeOwner:
    def __init__(self, name, events=None):
        self.name = name
        self.deleted = []
        self.events = events if events is not None else []

    def delete_timezone(self, at):
        self.deleted.append(at)
        self.events.append((f"{self.name}_deleted", at))


class FakeConfirmer:
    def __init__(self, response, events=None):
        self.response = response
        self.prompts = []
        self.events = events if events is not None else []

    def run_modal(self, title, text, buttons):
        self.prompts.append((title, text, list(buttons)))
        self.events.append(("confirmed", self.response))
        return self.response


def build_source(entries, settings=None, response=YES, panel_available=True, formatter=None, table=None):
    """Wire a data source to fakes; returns (source, table, window, panel, confirmer, queue)."""
    settings = settings or prefs()
    table = table or FakeTable(max(1, len(entries)))
    window = FakeOwner("window", table.events)
    panel = FakeOwner("panel", table.events)
    confirmer = FakeConfirmer(response, table.events)
    queue = DeferredTaskQueue()
    router = DeletionRouter(settings, window_controller=window,
                            panel_controller=(lambda: panel) if panel_available else (lambda: None))
    source = TimezoneDataSource(entries, formatter or FakeFormatter(), settings, FakeThemer(),
                                table, router, confirmer, queue)
    return source, table, window, panel, confirmer, queue
