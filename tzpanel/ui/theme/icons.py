# Glyph "images" for the row widgets. The data source only picks which one a row shows; the row factory renders it.
class Themer:

    SUNRISE = "☀"
    SUNSET = "☽"
    TRASH = "✕"
    CURRENT_LOCATION = "➤"
    EXTRA_OPTIONS = "⋯"

    def sunrise_image(self):
        return self.SUNRISE

    def sunset_image(self):
        return self.SUNSET

    def trash_image(self):
        return self.TRASH
