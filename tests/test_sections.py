import fitz  # PyMuPDF
import pytest

from inkmark.core.document import DocumentSections, clean_title
from inkmark.core.position import PositionRange


@pytest.fixture
def document():
    doc = fitz.open()
    for _ in range(10):
        doc.new_page()
    doc.set_toc([
        [1, "Introduction", 2],
        [2, "Background", 3],
        [1, "Methods\n", 5],
        [1, "Results", 8],
    ])
    yield doc
    doc.close()


def test_sections_from_document_outline(document):
    sections = DocumentSections.from_document(document)

    assert [(s.order, s.label, s.start_page) for s in sections.sections] == [
        (1, "Introduction", 1),
        (2, "Methods", 4),
        (3, "Results", 7),
    ]


def test_section_for_page(document):
    sections = DocumentSections.from_document(document)

    assert sections.section_for_page(0).label == "Front matter"
    assert sections.section_for_page(0).order == 0
    assert sections.section_for_page(1).label == "Introduction"
    assert sections.section_for_page(3).label == "Introduction"
    assert sections.section_for_page(4).label == "Methods"
    assert sections.section_for_page(9).label == "Results"


def test_second_level_sections(document):
    sections = DocumentSections.from_document(document, level=2)
    assert [s.label for s in sections.sections] == ["Background"]


def test_location_for_range(document):
    sections = DocumentSections.from_document(document)

    location = sections.location_for(4, 10, end_page=5, end_char=3)

    assert location.position == PositionRange("/4/10", "/5/3")
    assert location.section_order == 2
    assert location.section_label == "Methods"


def test_document_without_outline():
    doc = fitz.open()
    doc.new_page()
    sections = DocumentSections.from_document(doc, front_matter_label="Whole book")

    assert len(sections) == 0
    assert sections.location_for(0).section_label == "Whole book"
    doc.close()


def test_from_toc_skips_entries_without_page():
    sections = DocumentSections.from_toc([[1, "Nowhere", -1], [1, "Real", 3], ["bad"]])
    assert [(s.order, s.label) for s in sections.sections] == [(1, "Real")]


@pytest.mark.parametrize("title, expected", [
    ("  Chapter\t1\r\n Intro ", "Chapter 1 Intro"),
    ("", "Section 4"),
    ("\x01\x02", "Section 4"),
])
def test_clean_title(title, expected):
    assert clean_title(title, 4) == expected
