"""Contains a specialized PyQt widget class for integer input."""

from PyQt6 import QtCore as qtc
from PyQt6 import QtWidgets as qtw


class IntSpinBox(qtw.QSpinBox):
    """A QSpinBox that signals only when a committed value is new.

    Grid sizes, tile sizes and seeds each trigger work in the generator model (rebuilding the tile set images or the
    next session), so a plain 'valueChanged' signal firing on every keystroke or arrow click is too eager. This class
    waits for 'editingFinished' instead and compares the value with the last committed one ('_last_value') before
    emitting 'value_change_committed'. Values pushed from the model (e.g. a new random seed) are shown via
    'set_committed_value()', which updates the cache without emitting, so model and spin box cannot ping-pong.

    Signals:
        value_change_committed: Emitted when the user finishes editing and the value has changed since the last commit.
    """

    value_change_committed = qtc.pyqtSignal(int)

    # The last committed int value, used to determine whether a finished edit changed anything.
    _last_value: int

    def __init__(self, default_value: int, min_value: int, max_value: int, step_size: int) -> None:
        """Initializes the specialized integer spin box.

        This sets the range, step size and initial value, and connects the PyQt signal 'editingFinished' to capture
        the user's commitment of a value.

        Args:
            default_value: The initial value displayed by the spin box.
            min_value: The lowest integer value allowed in the spin box.
            max_value: The highest integer value allowed in the spin box.
            step_size: The amount to increase or decrease the value by when using the up/down arrow buttons.
        """
        super().__init__()

        self._last_value = default_value

        self.setRange(min_value, max_value)
        self.setValue(default_value)
        self.setSingleStep(step_size)
        self.setCorrectionMode(qtw.QAbstractSpinBox.CorrectionMode.CorrectToNearestValue)
        self.editingFinished.connect(self.on_editing_finished)

    def set_committed_value(self, value: int) -> None:
        """Shows a value that was committed elsewhere without emitting 'value_change_committed'.

        Used for values set by the model (from the command line or the 'New Random Seed' button). The value becomes the
        new '_last_value', so finishing an edit without changing it does not send it back to the model.

        Args:
            value: The committed value to display.
        """
        self._last_value = value
        self.setValue(value)

    def on_editing_finished(self) -> None:
        """Handles the completion of editing by the user.

        Compares the current value to the cached '_last_value'. If the values differ, the new value is cached and
        'value_change_committed' is emitted. Confirming the existing value emits nothing.
        """
        if self._last_value != self.value():
            self._last_value = self.value()
            self.value_change_committed.emit(self.value())
