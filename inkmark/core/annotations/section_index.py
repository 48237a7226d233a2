"""
Ordered per-section sequences and the grouped list of section headings.

Both are array backed and use linear scans. Annotation counts per
document stay in the tens to low hundreds, so this is fine.
"""
from typing import Any, Iterator, List, Mapping

from inkmark.core.errors import IndexCorruptionError
from inkmark.core.position import PositionComparator
from .models import SectionHeading


class SectionIndex:
    """
    Identifiers of one section, ascending by position.

    Only identifiers are stored here; the records themselves live in the
    owning store's map, which is passed in as `records`.
    """

    def __init__(self, comparator: PositionComparator,
                 records: Mapping[str, Any]):
        self._comparator = comparator
        self._records = records
        self._identifiers: List[str] = []

    def insert(self, identifier: str) -> int:
        """
        Insert an identifier at its sorted position.

        The new identifier goes before the first existing one it is not
        after, or at the end if it is after all of them.

        Returns:
            Index the identifier was inserted at
        """
        position = len(self._identifiers)
        for i, existing in enumerate(self._identifiers):
            if self._comparator.compare(identifier, existing) <= 0:
                position = i
                break
        self._identifiers.insert(position, identifier)
        return position

    def remove(self, identifier: str) -> bool:
        """Remove an identifier. Returns True if it was present."""
        position = self.index_of(identifier)
        if position < 0:
            return False
        del self._identifiers[position]
        return True

    def index_of(self, identifier: str) -> int:
        for i, existing in enumerate(self._identifiers):
            if existing == identifier:
                return i
        return -1

    def identifiers(self) -> List[str]:
        return list(self._identifiers)

    def records(self) -> List[Any]:
        return [self._records[identifier] for identifier in self._identifiers]

    def is_sorted(self) -> bool:
        compare = self._comparator.compare
        pairs = zip(self._identifiers, self._identifiers[1:])
        return all(compare(a, b) <= 0 for a, b in pairs)

    def __len__(self) -> int:
        return len(self._identifiers)

    def __bool__(self) -> bool:
        return bool(self._identifiers)

    def __contains__(self, identifier) -> bool:
        return identifier in self._identifiers

    def __iter__(self) -> Iterator[Any]:
        return iter(self.records())

    def __getitem__(self, position: int) -> Any:
        return self._records[self._identifiers[position]]


class GroupedIndex:
    """Section headings ascending by section order."""

    def __init__(self):
        self._headings: List[SectionHeading] = []

    def insert(self, heading: SectionHeading) -> int:
        """
        Insert a heading before the first heading with a greater order.

        Returns:
            Index the heading was inserted at
        """
        position = len(self._headings)
        for i, existing in enumerate(self._headings):
            if existing.section_order > heading.section_order:
                position = i
                break
        self._headings.insert(position, heading)
        return position

    def remove_owner_of(self, children: SectionIndex) -> SectionHeading:
        """
        Remove the heading that owns a section index.

        Raises:
            IndexCorruptionError: No heading owns the given index
        """
        for i, heading in enumerate(self._headings):
            if heading.children is children:
                del self._headings[i]
                return heading
        raise IndexCorruptionError("No section heading owns the emptied section index")

    def headings(self) -> List[SectionHeading]:
        return list(self._headings)

    def clear(self) -> None:
        self._headings = []

    def __len__(self) -> int:
        return len(self._headings)

    def __iter__(self) -> Iterator[SectionHeading]:
        return iter(list(self._headings))
