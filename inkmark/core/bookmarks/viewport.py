"""
Tracks which bookmarks fall inside the visible part of the document.
"""
from typing import List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from inkmark.core.annotations.models import Location
from inkmark.core.position import NaturalPositionComparator, PositionComparator
from .manager import BookmarkList


class ViewportTracker(QObject):
    """
    Keeps the set of in-view bookmarks for the current location.

    A bookmark is in view when its relations to the two boundaries of
    the visible range disagree, or it sits exactly on one of them.
    """

    # Signals
    in_view_changed = pyqtSignal(list)  # identifiers in view
    has_items_in_view_changed = pyqtSignal(bool)

    def __init__(self, bookmarks: BookmarkList,
                 comparator: Optional[PositionComparator] = None,
                 default_label: str = "",
                 parent: QObject = None):
        super().__init__(parent)
        self.bookmarks = bookmarks
        self.comparator = comparator or NaturalPositionComparator()
        self.default_label = default_label
        self._location: Optional[Location] = None
        self._in_view: List[str] = []

        self.bookmarks.bookmark_added.connect(self._on_bookmarks_changed)
        self.bookmarks.bookmark_removed.connect(self._on_bookmarks_changed)

    @property
    def location(self) -> Optional[Location]:
        return self._location

    @property
    def in_view(self) -> List[str]:
        return list(self._in_view)

    @property
    def has_items_in_view(self) -> bool:
        return bool(self._in_view)

    def update_location(self, location: Optional[Location] = None) -> List[str]:
        """
        Recompute the in-view bookmarks.

        Args:
            location: New viewport location; None reuses the last one

        Returns:
            Identifiers of the bookmarks in view
        """
        if location is not None:
            self._location = location

        in_view: List[str] = []
        if self._location is not None:
            compare = self.comparator.compare
            start = self.comparator.collapse_start(self._location.position)
            end = self.comparator.collapse_end(self._location.position)
            in_view = [identifier for identifier in self.bookmarks.identifiers()
                       if compare(start, identifier) * compare(end, identifier) <= 0]

        had_items = bool(self._in_view)
        self._in_view = in_view
        self.in_view_changed.emit(list(in_view))
        if had_items != bool(in_view):
            self.has_items_in_view_changed.emit(bool(in_view))
        return list(in_view)

    def toggle(self) -> None:
        """
        Remove every bookmark in view, or bookmark the current location.

        Raises:
            RuntimeError: No location has been reported yet
        """
        if self._location is None:
            raise RuntimeError("Cannot toggle a bookmark before any location is known")

        in_view = list(self._in_view)
        if in_view:
            for identifier in in_view:
                self.bookmarks.delete(identifier)
        else:
            identifier = self.comparator.collapse_start(self._location.position)
            label = self._location.section_label or self.default_label
            self.bookmarks.add(identifier, label)
        self.update_location()

    def reset(self) -> None:
        """Forget the location, e.g. when the document closes."""
        self._location = None
        self.update_location()

    def _on_bookmarks_changed(self, bookmark) -> None:
        self.update_location()
