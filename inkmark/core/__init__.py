"""
Core business logic for Inkmark: the positional annotation index.
"""

from .annotations import (
    Annotation,
    AnnotationModel,
    Bookmark,
    FilteredAnnotationView,
    Location,
    SectionHeading,
    SectionIndex,
    TextFilter,
)
from .bookmarks import BookmarkList, ViewportTracker
from .errors import IndexCorruptionError, InkmarkError, InvalidRecordError
from .position import (
    CallableComparator,
    NaturalPositionComparator,
    PositionComparator,
    PositionRange,
)

__all__ = [
    "Annotation",
    "AnnotationModel",
    "Bookmark",
    "BookmarkList",
    "CallableComparator",
    "FilteredAnnotationView",
    "IndexCorruptionError",
    "InkmarkError",
    "InvalidRecordError",
    "Location",
    "NaturalPositionComparator",
    "PositionComparator",
    "PositionRange",
    "SectionHeading",
    "SectionIndex",
    "TextFilter",
    "ViewportTracker",
]
