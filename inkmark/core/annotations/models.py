"""
Record types held by the annotation index.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from inkmark.core.errors import InvalidRecordError
from inkmark.core.events import FieldEvents
from inkmark.core.position import Position


def _require_identifier(identifier) -> str:
    if not isinstance(identifier, str) or not identifier:
        raise InvalidRecordError(f"Record needs a non-empty identifier, got {identifier!r}")
    return identifier


def _identifier_from(data: Mapping[str, Any]) -> str:
    # "value" is the key older exports used for the position.
    identifier = data.get('identifier', data.get('value'))
    return _require_identifier(identifier)


class _ObservableRecord:
    """
    Field-change plumbing shared by bookmarks and annotations.

    Fixed fields may only be assigned once. Assigning a mutable field to a
    new value fires its change event on the record's FieldEvents list.
    """

    _fixed_fields: Tuple[str, ...] = ()
    _mutable_fields: Tuple[str, ...] = ()

    def __setattr__(self, name, value):
        assigned = name in self.__dict__
        if assigned and name in self._fixed_fields:
            raise AttributeError(f"'{name}' cannot be changed after creation")
        if name in self._mutable_fields and assigned:
            if self.__dict__[name] == value:
                return
            object.__setattr__(self, name, value)
            self.events.emit(name, self, value)
            return
        object.__setattr__(self, name, value)


@dataclass(eq=True)
class Bookmark(_ObservableRecord):
    """A flagged position with a display label."""
    identifier: str
    label: str = ""
    events: FieldEvents = field(default_factory=FieldEvents, init=False,
                                repr=False, compare=False)

    _fixed_fields = ('identifier',)
    _mutable_fields = ('label',)

    def __post_init__(self):
        _require_identifier(self.identifier)
        if self.label is None:
            object.__setattr__(self, 'label', "")

    def to_dict(self) -> Dict[str, str]:
        """Convert bookmark to dictionary for JSON serialization."""
        return {'identifier': self.identifier, 'label': self.label}

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> 'Bookmark':
        """Create bookmark from dictionary."""
        return Bookmark(identifier=_identifier_from(data),
                        label=data.get('label') or "")

    def copy(self) -> 'Bookmark':
        return Bookmark.from_dict(self.to_dict())


@dataclass(eq=True)
class Annotation(_ObservableRecord):
    """
    Highlighted text anchored at a position.

    identifier and text are fixed at creation; color and note can be
    edited afterwards and notify the record's listeners when they change.
    """
    identifier: str
    color: str = ""
    text: str = ""
    note: str = ""
    events: FieldEvents = field(default_factory=FieldEvents, init=False,
                                repr=False, compare=False)

    _fixed_fields = ('identifier', 'text')
    _mutable_fields = ('color', 'note')

    def __post_init__(self):
        _require_identifier(self.identifier)
        for name in ('color', 'text', 'note'):
            if self.__dict__[name] is None:
                object.__setattr__(self, name, "")

    def to_dict(self) -> Dict[str, str]:
        """Convert annotation to dictionary for JSON serialization."""
        return {
            'identifier': self.identifier,
            'color': self.color,
            'text': self.text,
            'note': self.note,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> 'Annotation':
        """Create annotation from dictionary."""
        return Annotation(
            identifier=_identifier_from(data),
            color=data.get('color') or "",
            text=data.get('text') or "",
            note=data.get('note') or "",
        )

    def copy(self) -> 'Annotation':
        """Owned copy without any of this record's listeners."""
        return Annotation.from_dict(self.to_dict())


@dataclass(eq=False)
class SectionHeading:
    """Heading row for one section; lives exactly as long as its children."""
    label: str
    section_order: int
    children: Any  # SectionIndex

    def __len__(self):
        return len(self.children)


@dataclass(frozen=True)
class Location:
    """Viewport position reported by the reading view."""
    position: Position
    section_order: int = 0
    section_label: Optional[str] = None
