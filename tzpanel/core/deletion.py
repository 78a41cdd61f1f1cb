"""Deleting panel rows.

A deletion either goes straight through, or (for the system timezone row)
waits on a blocking Yes/No confirmation and is then replayed on the UI task
queue. The removal is forwarded to whichever controller owns the canonical
timezone list right now: the floating window when the app is shown in the
foreground, the menubar panel otherwise.
"""

from collections.abc import Callable
from enum import Enum
from typing import Protocol

from tzpanel.common.logger import log


class DeletionTarget(Protocol):
    def delete_timezone(self, at: int) -> None: ...


class TaskQueue(Protocol):
    def add_operation(self, operation: Callable[[], None]) -> None: ...


class Confirmer(Protocol):
    def run_modal(self, title: str, text: str, buttons: list[str]) -> int: ...


class RowView(Protocol):
    def remove_rows(self, row: int, animation: str) -> None: ...


# First button of a modal answers with 1000, second with 1001, and so on.
FIRST_BUTTON_RESPONSE = 1000

CONFIRM_TITLE = "Confirm deleting the home row?"
CONFIRM_TEXT = ("This row is automatically updated when a system timezone change is detected. "
                "Are you sure you want to delete this?")
CONFIRM_BUTTONS = ["Yes", "No"]

SLIDE_UP = "slide_up"


class DeletionState(Enum):
    REQUESTED = "requested"
    PROTECTED_CHECK = "protected_check"
    BLOCKED = "blocked"
    DECLINED = "declined"
    CONFIRMED = "confirmed"
    APPLIED = "applied"
    NO_OP = "no_op"


class DeferredTaskQueue:
    """FIFO of operations, run only when drained.

    Stands in for the UI's main queue wherever there is no event loop.
    """

    def __init__(self):
        self._operations = []

    def add_operation(self, operation):
        self._operations.append(operation)

    @property
    def pending(self):
        return len(self._operations)

    def run_pending(self):
        # Operations queued while draining run in the same pass
        ran = 0
        while self._operations:
            self._operations.pop(0)()
            ran += 1
        return ran


class PendingDeletion:
    """One deletion attempt, tracked through its states.

    For a protected row this is the continuation of the confirmation: it
    sits in BLOCKED until ``resolve`` is called with the user's response, and
    only then is the removal queued.
    """

    def __init__(self, row):
        self.row = row
        self.history = []
        self.state = DeletionState.REQUESTED
        self.response = None

    @property
    def state(self):
        return self.history[-1]

    @state.setter
    def state(self, value):
        self.history.append(value)

    @property
    def resolved(self):
        return self.state not in (DeletionState.REQUESTED, DeletionState.PROTECTED_CHECK, DeletionState.BLOCKED)

    # Moves to PROTECTED_CHECK and reports whether the row needs a confirmation first.
    def check_protection(self, entry):
        self.state = DeletionState.PROTECTED_CHECK
        return entry.is_system_timezone

    def block(self):
        self.state = DeletionState.BLOCKED

    def resolve(self, response):
        if self.state != DeletionState.BLOCKED:
            raise RuntimeError(f"Deletion of row {self.row} is not waiting on a confirmation (state {self.state.value})")
        self.response = response
        self.state = DeletionState.CONFIRMED if response == FIRST_BUTTON_RESPONSE else DeletionState.DECLINED
        return self.state == DeletionState.CONFIRMED


class DeletionRouter:
    """Picks the one controller that receives ``delete_timezone``.

    ``panel_controller`` is a zero-argument callable because the panel may
    already be gone (e.g. while the app tears down); it returns None then.
    """

    def __init__(self, prefs, window_controller: DeletionTarget,
                 panel_controller: Callable[[], DeletionTarget | None]):
        self.prefs = prefs
        self.window_controller = window_controller
        self.panel_controller = panel_controller

    def target(self):
        if self.prefs.show_app_in_foreground():
            return self.window_controller
        return self.panel_controller()


class DeletionCoordinator:

    def __init__(self, data_source, view: RowView, router: DeletionRouter,
                 confirmer: Confirmer, task_queue: TaskQueue):
        self.data_source = data_source
        self.view = view
        self.router = router
        self.confirmer = confirmer
        self.task_queue = task_queue

    # Entry point for both the swipe action and any other delete request. Returns the PendingDeletion so callers
    # can see how far it got; a confirmed protected row is CONFIRMED here and becomes APPLIED once the queue runs.
    def request(self, row):
        pending = PendingDeletion(row)
        entry = self.data_source.entries[row]
        log.debug(f"Delete requested for row {row} ('{entry.timezone_id}')")

        if pending.check_protection(entry):
            pending.block()
            response = self.confirmer.run_modal(CONFIRM_TITLE, CONFIRM_TEXT, CONFIRM_BUTTONS)
            if not pending.resolve(response):
                log.info(f"Delete of home row {row} declined")
                return pending
            log.info(f"Delete of home row {row} confirmed, deferring removal")
            self.task_queue.add_operation(lambda: self.apply(pending))
            return pending

        pending.state = DeletionState.CONFIRMED
        self.apply(pending)
        return pending

    # Removes the row locally and in the view, then hands it to exactly one owner. Nothing is touched when no owner
    # can be resolved.
    def apply(self, pending):
        row = pending.row
        target = self.router.target()
        if target is None:
            log.warning(f"No panel controller available, dropping delete of row {row}")
            pending.state = DeletionState.NO_OP
            return
        self.data_source.remove_entry(row)
        self.view.remove_rows(row, SLIDE_UP)
        target.delete_timezone(at=row)
        pending.state = DeletionState.APPLIED
        log.info(f"Deleted timezone at row {row}")
