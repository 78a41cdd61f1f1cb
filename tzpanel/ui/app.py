import sys
import weakref
from zoneinfo import available_timezones
from PySide6.QtCore import Qt, QEvent, QTimer, QPropertyAnimation
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMenu,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QSlider,
    QVBoxLayout,
    QWidget,
)
from tzpanel.common.logger import log
from tzpanel.core import config
from tzpanel.core.config import Preferences
from tzpanel.core.data_source import NO_ROW, RowActionEdge, TimezoneDataSource
from tzpanel.core.deletion import FIRST_BUTTON_RESPONSE, SLIDE_UP, DeletionRouter
from tzpanel.core.entry import TimezoneEntry, seed_system_timezone, system_timezone_id
from tzpanel.core.formatting import ZoneFormatter, format_offset_difference
from tzpanel.ui.row_factory import RowCell, RowFactory
from tzpanel.ui.theme import Themer, build_menu_stylesheet, build_stylesheet
from tzpanel.ui.ui_blueprint import UIBlueprint

# Used when the row height policy can't answer yet (returns 0).
DEFAULT_ROW_HEIGHT = 70

# Time travel slider range, in minutes either side of now.
SLIDER_RANGE = 12 * 60
SLIDER_STEP = 15

SLIDE_UP_MS = 150


# Runs operations on the next turn of the Qt event loop.
class QtTaskQueue:
    def add_operation(self, operation):
        QTimer.singleShot(0, operation)


# Blocking Yes/No style dialog. Answers FIRST_BUTTON_RESPONSE for the first button, +1 for the next, and one past the
# last button if the dialog was dismissed some other way.
class MessageBoxConfirmer:

    def __init__(self, parent):
        self.parent = parent

    def run_modal(self, title, text, buttons):
        self.parent.activateWindow()
        box = QMessageBox(self.parent)
        box.setIcon(QMessageBox.Warning)
        box.setWindowTitle(title)
        box.setText(title)
        box.setInformativeText(text)
        added = [box.addButton(label, QMessageBox.AcceptRole if i == 0 else QMessageBox.RejectRole)
                 for i, label in enumerate(buttons)]
        box.exec()
        clicked = box.clickedButton()
        for i, button in enumerate(added):
            if clicked is button:
                return FIRST_BUTTON_RESPONSE + i
        return FIRST_BUTTON_RESPONSE + len(buttons)


# The menubar-style panel listing the user's timezones. Owns the canonical timezone list, acts as the table the data
# source talks to, and receives delete_timezone once a deletion is approved.
class PanelWindow(QMainWindow):

    _current = None

    # Resolves the live panel, or None once it has been closed.
    @classmethod
    def panel(cls):
        return cls._current() if cls._current is not None else None

    def __init__(self, settings):
        super().__init__()
        self.setWindowTitle("Time Zones")
        PanelWindow._current = weakref.ref(self)

        # -- Preferences --
        self.settings = settings
        self.prefs = Preferences(settings)
        self.theme = settings.get("theme", "Light")
        if self.prefs.show_app_in_foreground():
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        # -- Canonical timezone list --
        stored = []
        for value in settings.get("timezones", []):
            try:
                stored.append(TimezoneEntry.from_setting(value))
            except (TypeError, ValueError):
                log.warning(f"Skipping unreadable stored timezone {value!r}", exc_info=True)
        self.timezones = seed_system_timezone(stored, system_timezone_id())

        self._cells = []  # RowCell per table row, index == row
        self._animations = []

        # -- Data source --
        self.data_source = TimezoneDataSource(
            self.timezones,
            formatter=ZoneFormatter(self.prefs.relative_date_mode),
            prefs=self.prefs,
            themer=Themer(),
            view=self,
            router=DeletionRouter(self.prefs, window_controller=self, panel_controller=PanelWindow.panel),
            confirmer=MessageBoxConfirmer(self),
            task_queue=QtTaskQueue(),
        )

        # -- Build UI skeleton --
        central = QWidget()
        central.setObjectName("central")
        self.setCentralWidget(central)
        main_lay = QVBoxLayout(central)
        main_lay.setContentsMargins(8, 8, 8, 8)

        self._rows_widget = QWidget()
        self._rows_widget.setObjectName("rows")
        self._rows = QVBoxLayout(self._rows_widget)
        self._rows.setContentsMargins(0, 0, 0, 0)
        self._rows.setSpacing(0)
        self._rows.addStretch(1)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._rows_widget)
        main_lay.addWidget(scroll, 1)

        # -- Footer: time travel slider, offset readout, add button --
        footer = QWidget()
        f_lay = QHBoxLayout(footer)
        f_lay.setContentsMargins(0, 0, 0, 0)
        self._slider = QSlider(Qt.Horizontal)
        self._slider.setRange(-SLIDER_RANGE, SLIDER_RANGE)
        self._slider.setSingleStep(SLIDER_STEP)
        self._slider.setPageStep(SLIDER_STEP * 4)
        self._slider.setValue(0)
        self._slider.valueChanged.connect(self._on_slider_changed)
        f_lay.addWidget(self._slider, 1)
        self._offset_label = QLabel("Now")
        self._offset_label.setObjectName("offsetLabel")
        self._offset_label.setMinimumWidth(60)
        f_lay.addWidget(self._offset_label)
        add_btn = QPushButton("+")
        add_btn.setToolTip("Add a timezone")
        add_btn.clicked.connect(lambda _=False: self._on_add_timezone())
        f_lay.addWidget(add_btn)
        main_lay.addWidget(footer)

        self.setStyleSheet(build_stylesheet(self.theme))
        self._rebuild_rows()
        self.resize(360, 480)

        # -- Tick timer, keeps the clocks current --
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._refresh_rows)
        self._timer.start(1000)

    # ------------------------------------------------------------------ #
    #  Table (the data source's view)                                      #
    # ------------------------------------------------------------------ #

    def number_of_rows(self):
        return len(self._cells)

    def cell_at(self, row):
        if 0 <= row < len(self._cells):
            return self._cells[row]
        return None

    def remove_rows(self, row, animation):
        cell = self._cells.pop(row)
        container = cell.container
        container.removeEventFilter(self)
        if animation != SLIDE_UP:
            self._discard(container)
            return
        anim = QPropertyAnimation(container, b"maximumHeight", self)
        anim.setDuration(SLIDE_UP_MS)
        anim.setStartValue(container.height())
        anim.setEndValue(0)
        anim.finished.connect(lambda: self._on_slide_up_finished(anim, container))
        self._animations.append(anim)
        container.setMinimumHeight(0)
        anim.start()

    def _on_slide_up_finished(self, anim, container):
        self._animations.remove(anim)
        self._discard(container)

    def _discard(self, container):
        self._rows.removeWidget(container)
        container.hide()
        container.deleteLater()

    # ------------------------------------------------------------------ #
    #  Canonical list owner                                                #
    # ------------------------------------------------------------------ #

    def delete_timezone(self, at):
        removed = self.timezones.pop(at)
        log.info(f"Removed timezone '{removed.timezone_id}' from position {at}")
        self._persist_timezones()
        self.data_source.set_items(self.timezones)
        if not self.timezones:
            self._rebuild_rows()

    def _persist_timezones(self):
        self.settings["timezones"] = [entry.to_setting() for entry in self.timezones]
        try:
            config.save_preferences(self.settings)
        except OSError:
            log.exception("Failed to save preferences")
            QMessageBox.warning(self, "Save Error", "Couldn't save your timezones, see the log for details.")

    # ------------------------------------------------------------------ #
    #  Row building                                                        #
    # ------------------------------------------------------------------ #

    # Builds the view for a cell identifier. An unknown identifier is a programming error: it asserts in development
    # and falls back to an empty placeholder under python -O.
    def _make_view(self, identifier, row, blueprint):
        height = self.data_source.row_height(row) or DEFAULT_ROW_HEIGHT
        if identifier == RowFactory.TIMEZONE_CELL:
            return RowFactory.timezone(blueprint, self.data_source.row_content(row), height,
                                       on_options=self._on_options_clicked)
        if identifier == RowFactory.ADD_CELL:
            return RowFactory.add_cell(blueprint, self.data_source.row_content(row).message, height,
                                       on_add=self._on_add_timezone)

        log.error(f"Unable to create row view '{identifier}' for row {row}")
        if __debug__:
            raise AssertionError(f"Unable to create row view '{identifier}'")
        placeholder = QWidget()
        placeholder.setFixedHeight(height)
        return RowCell(placeholder, {})

    # Tear down and recreate every row from the data source.
    def _rebuild_rows(self):
        for cell in self._cells:
            cell.container.removeEventFilter(self)
            self._discard(cell.container)
        self._cells = []

        blueprint = UIBlueprint.compute(self.theme, self.prefs.font_size())
        empty = not self.data_source.entries
        identifier = RowFactory.ADD_CELL if empty else RowFactory.TIMEZONE_CELL
        for row in range(self.data_source.row_count()):
            cell = self._make_view(identifier, row, blueprint)
            container = cell.container
            if not empty:
                container.installEventFilter(self)
                container.setContextMenuPolicy(Qt.CustomContextMenu)
                container.customContextMenuRequested.connect(
                    lambda pos, c=container: self._show_row_actions(c, c.mapToGlobal(pos)))
            # Stretch stays last
            self._rows.insertWidget(self._rows.count() - 1, container)
            self._cells.append(cell)

        self.data_source.did_hover_over(self.data_source.hovered_row)

    # Refresh text in place (slider moves, clock ticks).
    def _refresh_rows(self):
        if not self.data_source.entries:
            return
        for row, cell in enumerate(self._cells):
            cell.update(self.data_source.row_content(row))

    def _row_of(self, container):
        for row, cell in enumerate(self._cells):
            if cell.container is container:
                return row
        return None

    # ------------------------------------------------------------------ #
    #  Event filter, hover                                                 #
    # ------------------------------------------------------------------ #

    def eventFilter(self, obj, event):
        if event.type() == QEvent.Enter:
            row = self._row_of(obj)
            if row is not None:
                self.data_source.did_hover_over(row)
        elif event.type() == QEvent.Leave:
            if self._row_of(obj) is not None:
                self.data_source.did_hover_over(NO_ROW)
        return super().eventFilter(obj, event)

    # ------------------------------------------------------------------ #
    #  Handlers                                                            #
    # ------------------------------------------------------------------ #

    def _on_options_clicked(self, container):
        self._show_row_actions(container, container.mapToGlobal(container.rect().bottomRight()))

    # Right-click and the options button both expose the trailing edge row actions.
    def _show_row_actions(self, container, global_pos):
        row = self._row_of(container)
        if row is None:
            return
        actions = self.data_source.row_actions(row, RowActionEdge.TRAILING)
        if not actions:
            return
        menu = QMenu(self)
        menu.setStyleSheet(build_menu_stylesheet(self.theme))
        chosen = {menu.addAction(f"{action.image}  {action.title}"): action for action in actions}
        picked = menu.exec(global_pos)
        if picked is None:
            return
        # Rows may have shifted while the menu was open
        row = self._row_of(container)
        if row is not None:
            chosen[picked].handler(row)

    def _on_slider_changed(self, value):
        self.data_source.set_slider_value(value)
        self._offset_label.setText(format_offset_difference(value * 60) or "Now")
        self._refresh_rows()

    def _on_add_timezone(self):
        text, ok = QInputDialog.getText(self, "Add Timezone", "Timezone (e.g. Europe/Berlin):")
        timezone_id = text.strip()
        if not ok or not timezone_id:
            return
        if timezone_id not in available_timezones():
            QMessageBox.warning(self, "Unknown Timezone", f"'{timezone_id}' isn't a known timezone.")
            return
        self.timezones.append(TimezoneEntry(timezone_id=timezone_id))
        log.info(f"Added timezone '{timezone_id}'")
        self._persist_timezones()
        self.data_source.set_items(self.timezones)
        self._rebuild_rows()

    def closeEvent(self, event):
        if PanelWindow.panel() is self:
            PanelWindow._current = None
        super().closeEvent(event)


def main():
    app = QApplication(sys.argv)
    settings = config.load_preferences()
    window = PanelWindow(settings)
    window.show()
    sys.exit(app.exec())
