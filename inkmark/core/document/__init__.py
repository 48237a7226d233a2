"""
Document structure helpers.
"""
from .sections import DocumentSections, Section, clean_title

__all__ = ['DocumentSections', 'Section', 'clean_title']
