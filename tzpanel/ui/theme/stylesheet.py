from .colors import THEMES

# Builds the application-wide stylesheet for the given theme name, falling back to Light for unknown names.
def build_stylesheet(theme_name):
    t = THEMES.get(theme_name, THEMES["Light"])
    return f"""
        QMainWindow, QWidget#central {{ background-color: {t["bg"]}; }}
        QScrollArea, QWidget#rows {{ background-color: {t["bg"]}; border: none; }}
        QLabel {{ color: {t["text"]}; background: transparent; }}
        QLabel#relativeDate, QLabel#sunriseSetTime, QLabel#offsetLabel {{ color: {t["secondary_text"]}; }}
        QLabel#note {{ color: {t["note_text"]}; font-style: italic; }}
        QLabel#currentLocation {{ color: {t["accent"]}; }}
        QPushButton {{
            color: {t["text"]}; background-color: {t["button_bg"]};
            border: none; border-radius: 4px; padding: 2px 6px;
        }}
        QPushButton:hover {{ background-color: {t["button_hover"]}; }}
        QSlider::handle:horizontal {{ background: {t["accent"]}; width: 12px; border-radius: 6px; }}
    """

def build_menu_stylesheet(theme_name):
    t = THEMES.get(theme_name, THEMES["Light"])
    return f"""
        QMenu {{ background-color: {t["menu_bg"]}; color: {t["text"]}; border: 1px solid {t["row_separator"]}; }}
        QMenu::item:selected {{ background-color: {t["menu_selected"]}; color: {t["menu_selected_text"]}; }}
    """
