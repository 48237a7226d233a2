"""
Annotation store: identifier map plus per-section ordered index.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from PyQt5.QtCore import QObject, pyqtSignal

from inkmark.core.errors import IndexCorruptionError
from inkmark.core.events import SubscriptionRegistry
from inkmark.core.position import NaturalPositionComparator, PositionComparator
from inkmark.core.signals import SignalBundleMixin
from .models import Annotation, SectionHeading, _identifier_from, _require_identifier
from .section_index import GroupedIndex, SectionIndex

logger = logging.getLogger(__name__)

RecordLike = Union[Annotation, Mapping[str, Any]]


class AnnotationModel(SignalBundleMixin, QObject):
    """
    Holds every annotation of one open document.

    The identifier map is the single owner of the records. Section
    indexes only keep identifiers, and a section heading exists exactly
    while its section has at least one annotation.
    """

    # Signals
    annotation_inserted = pyqtSignal(object)  # Annotation
    annotation_removed = pyqtSignal(object)  # Annotation
    annotation_updated = pyqtSignal(object, str)  # Annotation, field name
    count_changed = pyqtSignal(int)
    has_items_changed = pyqtSignal(bool)

    def __init__(self, comparator: Optional[PositionComparator] = None,
                 parent: QObject = None):
        super().__init__(parent)
        self.comparator = comparator or NaturalPositionComparator()
        self._map: Dict[str, Annotation] = {}
        self._announced_count = 0
        self._lists: Dict[int, SectionIndex] = {}
        self._section_of: Dict[str, int] = {}
        self._grouped = GroupedIndex()
        self._field_subscriptions = SubscriptionRegistry()

    @property
    def has_items(self) -> bool:
        return bool(self._map)

    def add(self, record: RecordLike, section_order: int,
            section_label: Optional[str] = None) -> Annotation:
        """
        Add an annotation under a section.

        Args:
            record: Annotation or mapping with at least an identifier
            section_order: Order of the owning section
            section_label: Heading label used if the section is new

        Returns:
            The owned record; for a duplicate identifier, the existing one
        """
        if isinstance(record, Annotation):
            obj = record.copy()
        else:
            obj = Annotation.from_dict(record)

        existing = self._map.get(obj.identifier)
        if existing is not None:
            logger.debug("Ignoring duplicate annotation %s", obj.identifier)
            return existing

        self._map[obj.identifier] = obj
        self._section_of[obj.identifier] = section_order
        self._field_subscriptions.subscribe(
            obj, lambda: obj.events.connect_all(self._on_record_changed))
        self._place(obj.identifier, section_order, section_label)

        self.annotation_inserted.emit(obj)
        self._announce_count()
        return obj

    def _place(self, identifier: str, section_order: int,
               section_label: Optional[str]) -> None:
        children = self._lists.get(section_order)
        if children is not None:
            children.insert(identifier)
            return

        children = SectionIndex(self.comparator, self._map)
        children.insert(identifier)
        self._lists[section_order] = children
        label = section_label if section_label is not None else ""
        self._grouped.insert(SectionHeading(label, section_order, children))

    def delete(self, annotation: Union[str, RecordLike],
               section_order: Optional[int] = None) -> bool:
        """
        Delete an annotation.

        Args:
            annotation: Identifier, annotation or mapping with an identifier
            section_order: Section the caller believes owns it. The section
                recorded at insertion time is authoritative.

        Returns:
            True if something was removed
        """
        identifier = self._identifier_of(annotation)
        obj = self._map.get(identifier)
        if obj is None:
            logger.debug("Ignoring delete of unknown annotation %s", identifier)
            return False

        owner = self._section_of[identifier]
        if section_order is not None and section_order != owner:
            logger.debug("Annotation %s belongs to section %s, not %s",
                         identifier, owner, section_order)

        children = self._lists.get(owner)
        if children is None or not children.remove(identifier):
            raise IndexCorruptionError(
                f"Annotation {identifier} is missing from section {owner}")

        if not children:
            self._grouped.remove_owner_of(children)
            del self._lists[owner]

        del self._map[identifier]
        del self._section_of[identifier]
        self._field_subscriptions.unsubscribe(obj)

        self.annotation_removed.emit(obj)
        self._announce_count()
        return True

    def get(self, identifier: str) -> Optional[Annotation]:
        return self._map.get(identifier)

    def get_section(self, section_order: int) -> Optional[SectionIndex]:
        return self._lists.get(section_order)

    def section_order_of(self, identifier: str) -> Optional[int]:
        return self._section_of.get(identifier)

    def headings(self) -> List[SectionHeading]:
        return self._grouped.headings()

    def export(self) -> List[Annotation]:
        """
        Flatten the index for serialization.

        Returns:
            Annotations by section order, then by position within a section
        """
        return [annotation
                for heading in self._grouped
                for annotation in heading.children.records()]

    def export_with_sections(self) -> List[Tuple[Annotation, int, str]]:
        """Like export(), keeping the section each annotation belongs to."""
        return [(annotation, heading.section_order, heading.label)
                for heading in self._grouped
                for annotation in heading.children.records()]

    def load(self, entries: Iterable[Tuple[RecordLike, int, Optional[str]]]) -> int:
        """
        Replay add() for (record, section_order, section_label) entries.

        Returns:
            Number of annotations actually added
        """
        added = 0
        for record, section_order, section_label in entries:
            before = len(self._map)
            self.add(record, section_order, section_label)
            added += len(self._map) - before
        return added

    def clear(self) -> None:
        """Discard every annotation, e.g. when the document closes."""
        removed = self.export()
        if not removed:
            return
        self._field_subscriptions.clear()
        self._map.clear()
        self._lists.clear()
        self._section_of.clear()
        self._grouped.clear()
        for annotation in removed:
            self.annotation_removed.emit(annotation)
        self._announce_count()

    def _on_record_changed(self, record: Annotation, field_name: str, value) -> None:
        self.annotation_updated.emit(record, field_name)

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

    @staticmethod
    def _identifier_of(annotation) -> str:
        if isinstance(annotation, str):
            return _require_identifier(annotation)
        if isinstance(annotation, Mapping):
            return _identifier_from(annotation)
        return annotation.identifier

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, identifier) -> bool:
        return identifier in self._map
