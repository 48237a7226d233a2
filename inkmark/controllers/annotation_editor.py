"""
Controller behind the annotation editing popover.
"""
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from inkmark.config import InkmarkSettings
from inkmark.core.annotations import Annotation
from .color_selector import ColorSelector
from .note_editor import NoteEditor


class AnnotationEditor(QObject):
    """Edits the color and note of one annotation and relays delete requests."""

    delete_requested = pyqtSignal(object)  # Annotation
    closed = pyqtSignal()

    def __init__(self, annotation: Annotation,
                 settings: Optional[InkmarkSettings] = None,
                 parent: QObject = None):
        super().__init__(parent)
        self.annotation = annotation
        self.color_selector = ColorSelector(settings, self)
        self.note_editor = NoteEditor(annotation, self)

        self.color_selector.select_color(annotation.color)
        self.color_selector.color_changed.connect(self._on_color_changed)

    def _on_color_changed(self, color: str) -> None:
        self.annotation.color = color

    def add_note(self) -> None:
        self.note_editor.add_note()

    def set_note_text(self, text: str) -> None:
        self.note_editor.set_text(text)

    def delete(self) -> None:
        """Ask the owner to delete the annotation and close the editor."""
        self.delete_requested.emit(self.annotation)
        self.closed.emit()
