"""
Text search over the grouped annotation index.
"""
from typing import Any, Iterator, List, Optional, Tuple

from PyQt5.QtCore import QObject, pyqtSignal

from .manager import AnnotationModel
from .models import SectionHeading

SEARCH_FIELDS = ('text', 'color', 'note')


class TextFilter:
    """Case-insensitive substring match against text, color and note."""

    def __init__(self, query: Optional[str] = None):
        self.query = (query or "").strip().lower()

    @property
    def is_active(self) -> bool:
        return bool(self.query)

    def matches(self, record: Any) -> bool:
        if not self.query:
            return True
        for name in SEARCH_FIELDS:
            value = getattr(record, name, None)
            if value and self.query in value.lower():
                return True
        return False

    __call__ = matches


class FilteredAnnotationView(QObject):
    """
    Read-only view of an AnnotationModel through the active TextFilter.

    Filtering only hides records from enumeration; the model is never
    modified.
    """

    filter_changed = pyqtSignal(str)  # normalized query

    def __init__(self, model: AnnotationModel, parent: QObject = None):
        super().__init__(parent)
        self.model = model
        self.text_filter = TextFilter()

    def set_query(self, query: Optional[str]) -> None:
        """Rebind the active filter."""
        text_filter = TextFilter(query)
        if text_filter.query == self.text_filter.query:
            return
        self.text_filter = text_filter
        self.filter_changed.emit(text_filter.query)

    @property
    def query(self) -> str:
        return self.text_filter.query

    def rows(self) -> Iterator[Tuple[SectionHeading, List[Any]]]:
        """
        Yield each heading with its matching annotations.

        Headings without any match are skipped while a query is active.
        """
        for heading in self.model.headings():
            matching = [record for record in heading.children.records()
                        if self.text_filter.matches(record)]
            if matching:
                yield heading, matching

    def records(self) -> List[Any]:
        return [record for _, matching in self.rows() for record in matching]

    def match_count(self) -> int:
        return len(self.records())
