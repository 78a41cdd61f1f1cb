from tzpanel.core.config import COMPACT_FONT_SIZE, RELATIVE_DATE_HIDDEN
from tzpanel.core.entry import SelectionType, TimezoneEntry

# Height of the lone "add a timezone" row shown when the panel has no entries.
EMPTY_STATE_ROW_HEIGHT = 100

# Base row height per font tier.
COMPACT_BASE_HEIGHT = 60
DEFAULT_BASE_HEIGHT = 65

HIDDEN_RELATIVE_DATE_SAVING = 5
SUNRISE_LINE_HEIGHT = 8
NOTE_LINE_PADDING = 25
CURRENT_LOCATION_INDICATOR_HEIGHT = 5

# Computes the height of one entry's row from the current preferences. Returns 0 when the font size or relative date
# mode isn't available yet, in which case the caller should use its own default height.
#
# Only city entries reserve the sunrise line, even when a timezone entry carries coordinates and could show one.
# Known inconsistency, left as is.
def row_height(entry: TimezoneEntry, prefs) -> int:
    font_size = prefs.font_size()
    relative_display = prefs.relative_date_mode()
    if font_size is None or relative_display is None:
        return 0

    height = COMPACT_BASE_HEIGHT if font_size == COMPACT_FONT_SIZE else DEFAULT_BASE_HEIGHT

    if relative_display == RELATIVE_DATE_HIDDEN:
        height -= HIDDEN_RELATIVE_DATE_SAVING

    if prefs.should_display_sunrise() and entry.selection_type == SelectionType.CITY:
        height += SUNRISE_LINE_HEIGHT

    if entry.has_note:
        height += font_size + NOTE_LINE_PADDING

    if entry.is_system_timezone:
        height += CURRENT_LOCATION_INDICATOR_HEIGHT

    # Larger fonts need more room overall
    height += font_size * 2
    return max(0, height)
