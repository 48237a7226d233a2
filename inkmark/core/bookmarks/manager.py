"""
Bookmark list for an open document.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from PyQt5.QtCore import QObject, pyqtSignal

from inkmark.core.annotations.models import Bookmark
from inkmark.core.signals import SignalBundleMixin

logger = logging.getLogger(__name__)


class BookmarkList(SignalBundleMixin, QObject):
    """Bookmarks in the order they were added, unique by identifier."""

    # Signals
    bookmark_added = pyqtSignal(object)  # Bookmark
    bookmark_removed = pyqtSignal(object)  # Bookmark
    count_changed = pyqtSignal(int)
    has_items_changed = pyqtSignal(bool)
    navigation_requested = pyqtSignal(str)  # identifier to go to

    def __init__(self, parent: QObject = None):
        super().__init__(parent)
        self._map: Dict[str, Bookmark] = {}
        self._announced_count = 0

    @property
    def has_items(self) -> bool:
        return bool(self._map)

    def add(self, identifier: str, label: Optional[str] = None) -> Bookmark:
        """
        Add a bookmark.

        Args:
            identifier: Position of the bookmark
            label: Display label, usually the section title

        Returns:
            The new bookmark, or the existing one for a known identifier
        """
        bookmark = Bookmark(identifier=identifier, label=label or "")
        existing = self._map.get(bookmark.identifier)
        if existing is not None:
            logger.debug("Ignoring duplicate bookmark %s", identifier)
            return existing

        self._map[bookmark.identifier] = bookmark
        self.bookmark_added.emit(bookmark)
        self._announce_count()
        return bookmark

    def add_record(self, record: Union[Bookmark, Mapping[str, Any]]) -> Bookmark:
        if not isinstance(record, Bookmark):
            record = Bookmark.from_dict(record)
        return self.add(record.identifier, record.label)

    def delete(self, identifier: Union[str, Bookmark]) -> bool:
        """Remove a bookmark. Returns True if it existed."""
        if isinstance(identifier, Bookmark):
            identifier = identifier.identifier
        bookmark = self._map.pop(identifier, None)
        if bookmark is None:
            logger.debug("Ignoring delete of unknown bookmark %s", identifier)
            return False
        self.bookmark_removed.emit(bookmark)
        self._announce_count()
        return True

    def get(self, identifier: str) -> Optional[Bookmark]:
        return self._map.get(identifier)

    def bookmarks(self) -> List[Bookmark]:
        return list(self._map.values())

    def identifiers(self) -> List[str]:
        return list(self._map)

    def export(self) -> List[Bookmark]:
        return self.bookmarks()

    def load(self, records: Iterable[Union[Bookmark, Mapping[str, Any]]]) -> int:
        """Replay add_record() for each record. Returns how many were new."""
        before = len(self._map)
        for record in records:
            self.add_record(record)
        return len(self._map) - before

    def go_to_bookmark(self, identifier: str) -> bool:
        """Ask the reading view to navigate to a bookmark."""
        if identifier not in self._map:
            return False
        self.navigation_requested.emit(identifier)
        return True

    def clear(self) -> None:
        removed = self.bookmarks()
        if not removed:
            return
        self._map.clear()
        for bookmark in removed:
            self.bookmark_removed.emit(bookmark)
        self._announce_count()

    def _announce_count(self) -> None:
        # Handlers may reenter, so record what was announced before emitting.
        count = len(self._map)
        previous = self._announced_count
        if count == previous:
            return
        self._announced_count = count
        self.count_changed.emit(count)
        if (previous > 0) != (count > 0):
            self.has_items_changed.emit(count > 0)

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, identifier) -> bool:
        return identifier in self._map
