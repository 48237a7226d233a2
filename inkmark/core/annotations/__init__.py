"""
Annotation index: records, section ordering and text filtering.
"""
from .models import Annotation, Bookmark, Location, SectionHeading
from .section_index import GroupedIndex, SectionIndex
from .manager import AnnotationModel
from .filter import FilteredAnnotationView, TextFilter

__all__ = [
    'Annotation',
    'AnnotationModel',
    'Bookmark',
    'FilteredAnnotationView',
    'GroupedIndex',
    'Location',
    'SectionHeading',
    'SectionIndex',
    'TextFilter',
]
