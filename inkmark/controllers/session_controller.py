"""
Controller owning the bookmarks and annotations of one open document.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

import fitz  # PyMuPDF
from PyQt5.QtCore import QObject, pyqtSignal

from inkmark.config import InkmarkSettings, load_settings
from inkmark.core.annotations import (
    Annotation,
    AnnotationModel,
    FilteredAnnotationView,
    Location,
)
from inkmark.core.bookmarks import BookmarkList, ViewportTracker
from inkmark.core.document import DocumentSections
from inkmark.core.position import PositionComparator
from .annotation_editor import AnnotationEditor

logger = logging.getLogger(__name__)


class ReadingSessionController(QObject):
    """Routes reading-view events into the annotation index."""

    # Signals
    location_changed = pyqtSignal(object)  # Location
    session_closed = pyqtSignal()

    def __init__(self, comparator: Optional[PositionComparator] = None,
                 settings: Optional[InkmarkSettings] = None,
                 parent: QObject = None):
        super().__init__(parent)
        self.settings = settings or InkmarkSettings()
        self.annotations = AnnotationModel(comparator, self)
        self.comparator = self.annotations.comparator
        self.bookmarks = BookmarkList(self)
        self.viewport = ViewportTracker(self.bookmarks, self.comparator,
                                        self.settings.default_bookmark_label, self)
        self.view = FilteredAnnotationView(self.annotations, self)
        self.sections: Optional[DocumentSections] = None

    @classmethod
    def from_config(cls, comparator: Optional[PositionComparator] = None,
                    parent: QObject = None) -> 'ReadingSessionController':
        """Create a controller using the settings file from the config directory."""
        return cls(comparator, load_settings(), parent)

    @property
    def location(self) -> Optional[Location]:
        return self.viewport.location

    def open_document(self, doc: fitz.Document) -> int:
        """
        Read section structure from a document's outline.

        Returns:
            Number of sections found
        """
        self.sections = DocumentSections.from_document(
            doc, self.settings.outline_level, self.settings.front_matter_label)
        logger.debug("Document has %d sections", len(self.sections))
        return len(self.sections)

    def update_location(self, location: Location) -> List[str]:
        """Report a new viewport location. Returns the bookmarks in view."""
        in_view = self.viewport.update_location(location)
        self.location_changed.emit(location)
        return in_view

    def go_to_page(self, page_index: int, char_index: int = 0,
                   end_page: Optional[int] = None,
                   end_char: Optional[int] = None) -> List[str]:
        """
        Report a page-based viewport using the document's sections.

        Raises:
            RuntimeError: open_document() has not been called
        """
        if self.sections is None:
            raise RuntimeError("No document is open")
        location = self.sections.location_for(page_index, char_index, end_page, end_char)
        return self.update_location(location)

    def toggle_bookmark(self) -> None:
        self.viewport.toggle()

    def add_annotation(self, record: Union[Annotation, Mapping[str, Any]],
                       section_order: Optional[int] = None,
                       section_label: Optional[str] = None) -> Annotation:
        """
        Add an annotation, by default to the section of the current location.

        Raises:
            RuntimeError: No section given and no location known
        """
        if section_order is None:
            location = self.viewport.location
            if location is None:
                raise RuntimeError("No section given and no location reported yet")
            section_order = location.section_order
            section_label = location.section_label
        return self.annotations.add(record, section_order, section_label)

    def delete_annotation(self, annotation: Union[str, Annotation]) -> bool:
        return self.annotations.delete(annotation)

    def edit_annotation(self, identifier: str) -> Optional[AnnotationEditor]:
        """Create an editor for a stored annotation, wired to delete it on request."""
        annotation = self.annotations.get(identifier)
        if annotation is None:
            return None
        editor = AnnotationEditor(annotation, self.settings, self)
        editor.delete_requested.connect(self.delete_annotation)
        return editor

    def set_search_query(self, query: Optional[str]) -> None:
        self.view.set_query(query)

    def export(self) -> Dict[str, List[Dict[str, Any]]]:
        """Dump bookmarks and annotations as plain dictionaries."""
        annotations = []
        for annotation, section_order, section_label in self.annotations.export_with_sections():
            data = annotation.to_dict()
            data['section_order'] = section_order
            data['section_label'] = section_label
            annotations.append(data)
        return {
            'bookmarks': [bookmark.to_dict() for bookmark in self.bookmarks.export()],
            'annotations': annotations,
        }

    def load(self, data: Mapping[str, Any]) -> None:
        """Replay a dump produced by export()."""
        self.bookmarks.load(data.get('bookmarks', []))
        self.annotations.load(
            (entry, entry.get('section_order', 0), entry.get('section_label'))
            for entry in data.get('annotations', [])
        )
        self.viewport.update_location()

    def close(self) -> None:
        """Discard everything belonging to the document."""
        self.view.set_query(None)
        self.annotations.clear()
        self.bookmarks.clear()
        self.viewport.reset()
        self.sections = None
        self.session_closed.emit()
