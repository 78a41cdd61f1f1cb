# Color palettes keyed by theme name. Every theme must define every key.
THEMES = {
    "Light": {
        "bg": "#F7F7F9",
        "row_bg": "#FFFFFF",
        "row_separator": "#E2E2E6",
        "text": "#1C1C1E",
        "secondary_text": "#6E6E73",
        "note_text": "#8E8E93",
        "accent": "#0A84FF",
        "button_bg": "#ECECF0",
        "button_hover": "#DCDCE2",
        "menu_bg": "#FFFFFF",
        "menu_selected": "#0A84FF",
        "menu_selected_text": "#FFFFFF",
    },
    "Dark": {
        "bg": "#1C1C1E",
        "row_bg": "#2C2C2E",
        "row_separator": "#3A3A3C",
        "text": "#F2F2F7",
        "secondary_text": "#AEAEB2",
        "note_text": "#8E8E93",
        "accent": "#0A84FF",
        "button_bg": "#3A3A3C",
        "button_hover": "#48484A",
        "menu_bg": "#2C2C2E",
        "menu_selected": "#0A84FF",
        "menu_selected_text": "#FFFFFF",
    },
}
