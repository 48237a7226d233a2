"""
Position identifiers and the comparators that order them.
"""
from .comparator import (
    CallableComparator,
    NaturalPositionComparator,
    Position,
    PositionComparator,
    PositionRange,
    clamp_relation,
    make_page_position,
)

__all__ = [
    'CallableComparator',
    'NaturalPositionComparator',
    'Position',
    'PositionComparator',
    'PositionRange',
    'clamp_relation',
    'make_page_position',
]
