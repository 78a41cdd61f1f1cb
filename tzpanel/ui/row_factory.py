from typing import Any
from collections.abc import Callable
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from tzpanel.core.data_source import DIMMED_OPACITY, RowDescriptor
from tzpanel.ui.theme import Themer
from tzpanel.ui.ui_blueprint import UIBlueprint

# A built row: its container widget plus the sub-widgets that get refreshed in place. The panel hands these to the
# data source as the table's cells.
class RowCell:

    def __init__(self, container: QWidget, widgets: dict):
        self.container = container
        self.widgets = widgets
        self._opacity = None
        options = widgets.get("options")
        if options is not None:
            self._opacity = QGraphicsOpacityEffect(options)
            options.setGraphicsEffect(self._opacity)
            self.set_extra_options_opacity(DIMMED_OPACITY)

    @property
    def extra_options_opacity(self):
        return self._opacity.opacity() if self._opacity is not None else None

    def set_extra_options_opacity(self, alpha):
        if self._opacity is not None:
            self._opacity.setOpacity(alpha)

    # Pushes a fresh descriptor into the existing widgets (slider moves and clock ticks), without rebuilding the row.
    def update(self, descriptor: RowDescriptor):
        w = self.widgets
        if "time" not in w:
            return
        w["time"].setText(descriptor.time)
        w["relative_date"].setText(descriptor.relative_date)
        w["relative_date"].setVisible(bool(descriptor.relative_date))
        w["sunrise_set_time"].setText(descriptor.sunrise_set_time)
        w["sunrise_set_time"].setVisible(descriptor.show_sunrise_time)
        w["sunrise_image"].setText(descriptor.sunrise_image)
        w["sunrise_image"].setVisible(descriptor.show_sunrise_image)
        w["label"].setText(descriptor.label)
        w["note"].setText(descriptor.note)
        w["note"].setToolTip(descriptor.note_tooltip)
        w["note"].setVisible(bool(descriptor.note))
        w["current_location"].setVisible(descriptor.show_current_location)


# Purely organizational class to group functions that build panel rows. Each builder returns a RowCell whose container
# is a QWidget with objectName "rowBg" that can be inserted into the rows layout.
class RowFactory:

    TIMEZONE_CELL = "timeZoneCell"
    ADD_CELL = "addCell"

    @staticmethod
    # Given a UIBlueprint and a row descriptor, builds a single timezone row.
    def timezone(blueprint: UIBlueprint,
                 descriptor: RowDescriptor,
                 height: int,
                 on_options: Callable[...,Any]):
        t = blueprint.theme

        row_container = QWidget()
        row_container.setObjectName("rowBg")
        row_container.setAttribute(Qt.WA_StyledBackground, True)
        row_container.setStyleSheet(
            f"#rowBg {{ background-color: {t['row_bg']}; border-bottom: 1px solid {t['row_separator']}; }}")
        row_container.setFixedHeight(height)
        row_container.setAccessibleName(descriptor.accessibility_label)
        row_container.setProperty("accessibilityIdentifier", descriptor.accessibility_identifier)
        row_layout = QHBoxLayout(row_container)
        row_layout.setContentsMargins(blueprint.h_spacing, 2, blueprint.h_spacing, 2)
        row_layout.setSpacing(blueprint.h_spacing)

        # Left column: label line, relative date, sunrise line, note
        text_col = QWidget()
        text_lay = QVBoxLayout(text_col)
        text_lay.setContentsMargins(0, 0, 0, 0)
        text_lay.setSpacing(0)

        label_line = QHBoxLayout()
        label_line.setSpacing(4)
        current_location = QLabel(Themer.CURRENT_LOCATION)
        current_location.setObjectName("currentLocation")
        current_location.setFont(blueprint.secondary_font)
        label_line.addWidget(current_location)
        label = QLabel()
        label.setFont(blueprint.label_font)
        label_line.addWidget(label, 1)
        text_lay.addLayout(label_line)

        relative_date = QLabel()
        relative_date.setObjectName("relativeDate")
        relative_date.setFont(blueprint.secondary_font)
        relative_date.setAccessibleName(descriptor.relative_date_accessibility_identifier)
        text_lay.addWidget(relative_date)

        sunrise_line = QHBoxLayout()
        sunrise_line.setSpacing(4)
        sunrise_image = QLabel()
        sunrise_image.setFont(blueprint.secondary_font)
        sunrise_line.addWidget(sunrise_image)
        sunrise_set_time = QLabel()
        sunrise_set_time.setObjectName("sunriseSetTime")
        sunrise_set_time.setFont(blueprint.secondary_font)
        sunrise_line.addWidget(sunrise_set_time, 1)
        text_lay.addLayout(sunrise_line)

        note = QLabel()
        note.setObjectName("note")
        note.setFont(blueprint.note_font)
        text_lay.addWidget(note)
        row_layout.addWidget(text_col, 1)

        # Right column: time, then the extra options button whose opacity follows the hover
        time_lbl = QLabel()
        time_lbl.setFont(blueprint.time_font)
        time_lbl.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        time_lbl.setAccessibleName(descriptor.time_accessibility_identifier)
        row_layout.addWidget(time_lbl)

        options_btn = QPushButton(Themer.EXTRA_OPTIONS)
        options_btn.setFont(blueprint.secondary_font)
        options_btn.setFixedSize(blueprint.options_size)
        options_btn.setStyleSheet("padding: 0px;")
        options_btn.setToolTip("Options")
        options_btn.clicked.connect(lambda _=False: on_options(row_container))
        row_layout.addWidget(options_btn)

        widget_dict = {
            "time": time_lbl, "relative_date": relative_date,
            "sunrise_set_time": sunrise_set_time, "sunrise_image": sunrise_image,
            "label": label, "note": note,
            "current_location": current_location, "options": options_btn,
        }
        cell = RowCell(row_container, widget_dict)
        cell.update(descriptor)
        return cell

    @staticmethod
    # Builds the single row an empty panel shows, prompting the user to add a timezone.
    def add_cell(blueprint: UIBlueprint, message: str, height: int, on_add: Callable[...,Any]):
        row_container = QWidget()
        row_container.setObjectName("rowBg")
        row_container.setFixedHeight(height)
        row_layout = QVBoxLayout(row_container)
        row_layout.setAlignment(Qt.AlignCenter)

        message_lbl = QLabel(message)
        message_lbl.setFont(blueprint.label_font)
        message_lbl.setAlignment(Qt.AlignCenter)
        row_layout.addWidget(message_lbl)

        add_btn = QPushButton("Add Timezone")
        add_btn.setFont(blueprint.secondary_font)
        add_btn.clicked.connect(lambda _=False: on_add())
        row_layout.addWidget(add_btn, 0, Qt.AlignCenter)

        return RowCell(row_container, {"message": message_lbl, "add": add_btn})
