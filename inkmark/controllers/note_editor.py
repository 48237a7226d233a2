"""
Note editing affordance for a single annotation.
"""
from enum import Enum

from PyQt5.QtCore import QObject, pyqtSignal

from inkmark.core.annotations import Annotation


class NoteEditorState(Enum):
    PROMPT = "prompt"  # "Add note" button is shown
    EDITING = "editing"  # text editor is shown


class NoteEditor(QObject):
    """
    Switches from the "add note" prompt to the editor and stays there.

    Once a note has been started the editor remains visible, even if the
    text is cleared again.
    """

    state_changed = pyqtSignal(object)  # NoteEditorState
    focus_requested = pyqtSignal()

    def __init__(self, annotation: Annotation, parent: QObject = None):
        super().__init__(parent)
        self.annotation = annotation
        self.state = NoteEditorState.EDITING if annotation.note else NoteEditorState.PROMPT

    @property
    def is_editing(self) -> bool:
        return self.state == NoteEditorState.EDITING

    def add_note(self) -> None:
        """Show the editor and ask the UI to focus it."""
        self._set_state(NoteEditorState.EDITING)
        self.focus_requested.emit()

    def set_text(self, text: str) -> None:
        """Write edited text to the annotation's note."""
        text = text or ""
        if text:
            self._set_state(NoteEditorState.EDITING)
        self.annotation.note = text

    def _set_state(self, state: NoteEditorState) -> None:
        if state != self.state:
            self.state = state
            self.state_changed.emit(state)
