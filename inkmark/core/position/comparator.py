"""
Position comparison contract used by the annotation index.

The index never computes positions itself. It only asks a comparator
whether one identifier comes before another and how to collapse a range
to one of its boundaries.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Union

from natsort import natsort_keygen

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionRange:
    """A visible span of the document, given by its two boundary identifiers."""
    start: str
    end: str


Position = Union[str, PositionRange]


def clamp_relation(value) -> int:
    """Reduce any comparator result to -1, 0 or 1."""
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


class PositionComparator(ABC):
    """Total order over position identifiers."""

    @abstractmethod
    def compare(self, a: str, b: str) -> int:
        """Return -1, 0 or 1 depending on whether a is before, at or after b."""

    def collapse(self, position: Position, to_end: bool = False) -> str:
        """
        Collapse a position to a single identifier.

        Args:
            position: Identifier or range
            to_end: Collapse to the end boundary instead of the start

        Returns:
            Boundary identifier
        """
        if isinstance(position, PositionRange):
            return position.end if to_end else position.start
        return position

    def collapse_start(self, position: Position) -> str:
        return self.collapse(position)

    def collapse_end(self, position: Position) -> str:
        return self.collapse(position, to_end=True)


class CallableComparator(PositionComparator):
    """
    Adapts a plain two-argument compare function.

    Results outside {-1, 0, 1} are clamped to their sign so a sloppy
    function (e.g. one returning a difference) still yields a usable order.
    """

    def __init__(self, compare_func: Callable[[str, str], int]):
        self._compare_func = compare_func
        self._warned = False

    def compare(self, a: str, b: str) -> int:
        raw = self._compare_func(a, b)
        result = clamp_relation(raw)
        if result != raw and not self._warned:
            self._warned = True
            logger.warning("Comparator returned %r for (%r, %r); clamping to %d",
                           raw, a, b, result)
        return result


class NaturalPositionComparator(PositionComparator):
    """
    Orders identifiers by their text and integer runs.

    "p5" < "p12" and "/3/40" < "/12/1", which is what page/character
    style identifiers need.
    """

    def __init__(self):
        self._key = natsort_keygen()

    def compare(self, a: str, b: str) -> int:
        key_a = self._key(a)
        key_b = self._key(b)
        if key_a < key_b:
            return -1
        if key_a > key_b:
            return 1
        return 0


def make_page_position(page_index: int, char_index: int = 0) -> str:
    """Build an identifier for a character offset on a 0-based page."""
    return f"/{page_index}/{char_index}"
