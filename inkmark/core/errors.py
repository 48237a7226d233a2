"""
Exceptions raised by the annotation index.
"""


class InkmarkError(Exception):
    """Base class for all index errors."""


class InvalidRecordError(InkmarkError, ValueError):
    """A record was handed over without a usable identifier."""


class IndexCorruptionError(InkmarkError, RuntimeError):
    """
    The grouped index lost track of a section heading.

    This only happens when placement bookkeeping is broken, so it is
    never recovered from internally.
    """
