"""
Color selection for the annotation editor.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtGui import QColor

from inkmark.config import InkmarkSettings


class ColorOptionType(Enum):
    PRESET = "preset"
    CUSTOM = "custom"
    CHOOSE = "choose"


class ColorSelectionState(Enum):
    PRESET_SELECTED = "preset-selected"
    CHOOSING_CUSTOM = "choosing-custom"


@dataclass
class ColorOption:
    """One entry of the color list."""
    label: str
    value: str
    option_type: ColorOptionType = ColorOptionType.PRESET


def normalize_color(color: str) -> str:
    """
    Normalize a color string to #rrggbb.

    Raises:
        ValueError: Qt cannot parse the color
    """
    qcolor = QColor(color)
    if not qcolor.isValid():
        raise ValueError(f"Invalid color: {color!r}")
    return qcolor.name()


class ColorSelector(QObject):
    """
    Preset colors plus at most one custom slot and a "choose" entry.

    Activating the choose entry starts picking a custom color. Confirming
    commits it into the custom slot; cancelling goes back to whatever was
    selected before.
    """

    # Signals
    color_changed = pyqtSignal(str)
    custom_color_requested = pyqtSignal()  # UI should open a color dialog
    state_changed = pyqtSignal(object)  # ColorSelectionState

    def __init__(self, settings: Optional[InkmarkSettings] = None,
                 parent: QObject = None):
        super().__init__(parent)
        settings = settings or InkmarkSettings()
        self.custom_label = settings.custom_color_label
        self.options: List[ColorOption] = [
            ColorOption(preset.label, preset.value) for preset in settings.preset_colors
        ]
        self.options.append(ColorOption(settings.choose_color_label, "",
                                        ColorOptionType.CHOOSE))
        self.selected: Optional[int] = None
        self._previous: Optional[int] = None
        self.state = ColorSelectionState.PRESET_SELECTED

    @property
    def selected_option(self) -> Optional[ColorOption]:
        if self.selected is None:
            return None
        return self.options[self.selected]

    def custom_options(self) -> List[ColorOption]:
        return [o for o in self.options if o.option_type == ColorOptionType.CUSTOM]

    def select(self, index: int) -> None:
        """
        Activate an option, as a click in the list would.

        Args:
            index: Position in options
        """
        option = self.options[index]
        self.selected = index
        if option.option_type == ColorOptionType.CHOOSE:
            self._set_state(ColorSelectionState.CHOOSING_CUSTOM)
            self.custom_color_requested.emit()
            return
        self._previous = index
        self._set_state(ColorSelectionState.PRESET_SELECTED)
        self.color_changed.emit(option.value)

    def confirm_custom(self, color: str) -> str:
        """
        Commit the color picked in the dialog.

        Returns:
            The normalized color

        Raises:
            RuntimeError: No custom color is being chosen
            ValueError: The color cannot be parsed
        """
        if self.state != ColorSelectionState.CHOOSING_CUSTOM:
            raise RuntimeError("No custom color is being chosen")
        value = normalize_color(color)
        self.select_color(value)
        self._set_state(ColorSelectionState.PRESET_SELECTED)
        self.color_changed.emit(value)
        return value

    def cancel_custom(self) -> Optional[int]:
        """Return to the option selected before the dialog opened."""
        if self.state != ColorSelectionState.CHOOSING_CUSTOM:
            return self.selected
        self.selected = self._previous
        self._set_state(ColorSelectionState.PRESET_SELECTED)
        return self.selected

    def select_color(self, value: str) -> int:
        """
        Select the option for a color value without emitting a change.

        An existing custom slot is reused for unknown values; otherwise a
        new one is inserted just before the choose entry.

        Returns:
            Index of the selected option, or -1 for an empty value
        """
        if not value:
            self.selected = None
            return -1

        for i, option in enumerate(self.options):
            if option.option_type == ColorOptionType.CHOOSE:
                break
            if option.value == value:
                return self._remember(i)
            if option.option_type == ColorOptionType.CUSTOM:
                option.value = value
                return self._remember(i)

        i = len(self.options) - 1
        self.options.insert(i, ColorOption(self.custom_label, value,
                                           ColorOptionType.CUSTOM))
        return self._remember(i)

    def _remember(self, index: int) -> int:
        self.selected = index
        self._previous = index
        return index

    def _set_state(self, state: ColorSelectionState) -> None:
        if state != self.state:
            self.state = state
            self.state_changed.emit(state)
