"""
Controllers connecting reading-view events to the annotation index.
"""
from .color_selector import (
    ColorOption,
    ColorOptionType,
    ColorSelectionState,
    ColorSelector,
    normalize_color,
)
from .note_editor import NoteEditor, NoteEditorState
from .annotation_editor import AnnotationEditor
from .session_controller import ReadingSessionController

__all__ = [
    'AnnotationEditor',
    'ColorOption',
    'ColorOptionType',
    'ColorSelectionState',
    'ColorSelector',
    'NoteEditor',
    'NoteEditorState',
    'ReadingSessionController',
    'normalize_color',
]
