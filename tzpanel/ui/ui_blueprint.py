from dataclasses import dataclass
from PySide6.QtCore import QSize
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QPushButton
from tzpanel.ui.theme import THEMES

# Point sizes at font_size 0. The user's font size preference is added on top of each.
_BASE_POINT_SIZES = {
    "time": 18,
    "label": 12,
    "secondary": 9,
    "note": 9,
}

# A unified UI Blueprint dataclass to share across all row builders.
@dataclass
class UIBlueprint:
    theme: dict          # resolved theme dict (THEMES[name])
    font_family: str
    h_spacing: int
    time_font: QFont
    label_font: QFont
    secondary_font: QFont
    note_font: QFont
    options_size: QSize

    # Builds the context from current preferences.
    @staticmethod
    def compute(theme_name, font_size, font_family="Helvetica"):
        theme = THEMES.get(theme_name, THEMES["Light"])
        font_size = font_size if font_size is not None else 0

        time_font = QFont(font_family, _BASE_POINT_SIZES["time"] + font_size)
        time_font.setBold(True)
        label_font = QFont(font_family, _BASE_POINT_SIZES["label"] + font_size)
        secondary_font = QFont(font_family, _BASE_POINT_SIZES["secondary"] + font_size)
        note_font = QFont(font_family, _BASE_POINT_SIZES["note"] + font_size)
        note_font.setItalic(True)

        # Get the extra-options button size (square) by actually instantiating and measuring it briefly
        _ref = QPushButton("⋯")
        _ref.setFont(secondary_font)
        _h = _ref.sizeHint().height()
        options_size = QSize(_h, _h)
        _ref.deleteLater()

        return UIBlueprint(
            theme=theme, font_family=font_family,
            h_spacing=max(4, 6 + font_size),
            time_font=time_font, label_font=label_font,
            secondary_font=secondary_font, note_font=note_font,
            options_size=options_size,
        )
