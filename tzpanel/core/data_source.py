"""Row data for the timezone panel — no widgets, only what to show per row."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from tzpanel.common.logger import log
from tzpanel.core.deletion import DeletionCoordinator
from tzpanel.core.entry import SelectionType
from tzpanel.core.row_height import EMPTY_STATE_ROW_HEIGHT, row_height

# Extra-options button opacity for the row under the pointer, and for every other row.
HOVERED_OPACITY = 1.0
DIMMED_OPACITY = 0.5

# Row index a hover event carries when the pointer left the table.
NO_ROW = -1


class Themer(Protocol):
    def sunrise_image(self) -> Any: ...

    def sunset_image(self) -> Any: ...

    def trash_image(self) -> Any: ...


class RowActionEdge(Enum):
    LEADING = "leading"
    TRAILING = "trailing"


@dataclass(frozen=True)
class RowAction:
    title: str
    style: str
    image: Any
    handler: Callable[[int], Any]


@dataclass(frozen=True)
class EmptyStateRow:
    message: str = "Add a timezone to get started"


EMPTY_STATE_ROW = EmptyStateRow()


@dataclass(frozen=True)
class RowDescriptor:
    row_number: int
    time: str
    relative_date: str
    sunrise_set_time: str
    sunrise_image: Any
    label: str
    note: str
    note_tooltip: str
    show_current_location: bool
    show_sunrise_time: bool
    show_sunrise_image: bool
    accessibility_identifier: str
    accessibility_label: str
    time_accessibility_identifier: str = "ActualTime"
    relative_date_accessibility_identifier: str = "RelativeDate"


class TimezoneDataSource:
    """Answers the panel table's questions about its rows.

    Owns a private copy of the entry list and the time-travel slider value.
    ``view`` is the table: it reports its row count, hands out the cells it
    has currently built (``cell_at`` returns None for anything else) and
    removes rows. Deletions go through ``self.deletion``, built from the
    router, confirmer and task queue given here.
    """

    def __init__(self, items, formatter, prefs, themer, view, router, confirmer, task_queue):
        self.entries = list(items)
        self.slider_value = 0
        self.hovered_row = None
        self.formatter = formatter
        self.prefs = prefs
        self.themer = themer
        self.view = view
        self.deletion = DeletionCoordinator(self, view, router, confirmer, task_queue)

    def set_slider_value(self, value):
        self.slider_value = value
        log.debug(f"Slider value set to {value}")

    def set_items(self, items):
        self.entries = list(items)
        log.debug(f"Data source now holds {len(self.entries)} timezones")

    # Only the deletion coordinator shrinks the list; everything else replaces it with set_items.
    def remove_entry(self, row):
        del self.entries[row]
        # Indexes past the removed row have shifted
        self.hovered_row = None

    # ------------------------------------------------------------------ #
    #  Table questions                                                     #
    # ------------------------------------------------------------------ #

    def row_count(self):
        # An empty panel still shows one row, the "add a timezone" prompt
        return max(1, len(self.entries))

    def row_content(self, row):
        if not self.entries:
            return EMPTY_STATE_ROW

        entry = self.entries[row]
        formatted = self.formatter.format(entry, self.slider_value)
        label = self.formatter.label(entry)
        note = entry.note or ""

        show_sunrise_time = self.prefs.should_display_sunrise() and formatted.sunrise_set_time != ""
        show_sunrise_image = show_sunrise_time
        # A bare timezone without coordinates has no sunrise to speak of
        if entry.selection_type == SelectionType.TIMEZONE and entry.latitude is None and entry.longitude is None:
            show_sunrise_image = False

        return RowDescriptor(
            row_number=row,
            time=formatted.time,
            relative_date=formatted.relative_date,
            sunrise_set_time=formatted.sunrise_set_time,
            sunrise_image=self.themer.sunrise_image() if formatted.is_sunrise else self.themer.sunset_image(),
            label=label,
            note=note,
            note_tooltip=note,
            show_current_location=entry.is_system_timezone,
            show_sunrise_time=show_sunrise_time,
            show_sunrise_image=show_sunrise_image,
            accessibility_identifier=label,
            accessibility_label=label,
        )

    def row_height(self, row):
        if not self.entries:
            return EMPTY_STATE_ROW_HEIGHT
        return row_height(self.entries[row], self.prefs)

    def row_actions(self, row, edge):
        if not self.entries or edge != RowActionEdge.TRAILING:
            return []
        return [RowAction(title="Delete", style="destructive", image=self.themer.trash_image(),
                          handler=self.deletion.request)]

    # ------------------------------------------------------------------ #
    #  Hover                                                               #
    # ------------------------------------------------------------------ #

    # Re-applies opacity to every built cell, not just the ones that changed, since the table recycles cells between
    # events.
    def did_hover_over(self, row):
        if row is None or row == NO_ROW:
            row = None
        self.hovered_row = row

        for index in range(self.view.number_of_rows()):
            cell = self.view.cell_at(index)
            if cell is None:
                continue
            if row is None:
                cell.set_extra_options_opacity(DIMMED_OPACITY)
                continue
            cell.set_extra_options_opacity(HOVERED_OPACITY if index == row else DIMMED_OPACITY)
