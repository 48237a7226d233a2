"""
Section lookup from a document outline.

The reading view reports pages; the annotation index wants a section
order and a label. This maps one onto the other using the outline that
PyMuPDF reads from the document.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

import fitz  # PyMuPDF

from inkmark.core.annotations.models import Location
from inkmark.core.position import PositionRange, make_page_position

logger = logging.getLogger(__name__)

FRONT_MATTER_ORDER = 0


@dataclass(frozen=True)
class Section:
    """One top-level outline entry."""
    order: int
    label: str
    start_page: int  # 0-based


def clean_title(title: str, page_num: int) -> str:
    """
    Clean an outline title.

    Args:
        title: Raw title from the outline
        page_num: 1-based page number used for the fallback label

    Returns:
        Cleaned title, or "Section <page>" when nothing is left
    """
    if not title:
        return f"Section {page_num}"

    # Surrogates show up for formatting characters PyMuPDF cannot decode
    cleaned = re.sub(r"[\ud800-\udfff]+", "", title)
    cleaned = cleaned.replace("\r", "").replace("\n", " ").replace("\t", " ")
    cleaned = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()

    return cleaned or f"Section {page_num}"


class DocumentSections:
    """Ordered sections of a document, looked up by page."""

    def __init__(self, sections: List[Section], front_matter_label: str = "Front matter"):
        self.sections = sorted(sections, key=lambda s: (s.start_page, s.order))
        self.front_matter_label = front_matter_label

    @classmethod
    def from_toc(cls, toc: List[list], level: int = 1,
                 front_matter_label: str = "Front matter") -> 'DocumentSections':
        """
        Build sections from an outline in get_toc() form.

        Args:
            toc: Entries of [level, title, page_num, ...], page_num 1-based
            level: Outline level whose entries become sections

        Returns:
            DocumentSections in outline order
        """
        sections = []
        for entry in toc:
            if len(entry) < 3:
                continue
            entry_level, title, page_num = entry[:3]
            if entry_level != level:
                continue
            if page_num < 1:
                # Entries pointing nowhere cannot own annotations
                logger.debug("Skipping outline entry %r without a target page", title)
                continue
            sections.append(Section(order=len(sections) + 1,
                                    label=clean_title(title, page_num),
                                    start_page=page_num - 1))
        return cls(sections, front_matter_label)

    @classmethod
    def from_document(cls, doc: fitz.Document, level: int = 1,
                      front_matter_label: str = "Front matter") -> 'DocumentSections':
        """Build sections from a PyMuPDF document's outline."""
        return cls.from_toc(doc.get_toc(simple=True), level, front_matter_label)

    def section_for_page(self, page_index: int) -> Section:
        """
        Get the section a 0-based page belongs to.

        Pages before the first outline entry belong to front matter.
        """
        current: Optional[Section] = None
        for section in self.sections:
            if section.start_page > page_index:
                break
            current = section
        if current is None:
            return Section(FRONT_MATTER_ORDER, self.front_matter_label, 0)
        return current

    def location_for(self, page_index: int, char_index: int = 0,
                     end_page: Optional[int] = None,
                     end_char: Optional[int] = None) -> Location:
        """
        Build the location the reading view reports for a position.

        Args:
            page_index: 0-based page of the start of the viewport
            char_index: Character offset on that page
            end_page: Last visible page, for a range
            end_char: Last visible character on end_page

        Returns:
            Location carrying the owning section
        """
        start = make_page_position(page_index, char_index)
        position = start
        if end_page is not None:
            position = PositionRange(start, make_page_position(end_page, end_char or 0))
        section = self.section_for_page(page_index)
        return Location(position, section.order, section.label)

    def __len__(self) -> int:
        return len(self.sections)
