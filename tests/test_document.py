"""
Tests for the pdfplumber-backed page text source.
"""

from unittest.mock import MagicMock

import pytest

import table_document
from table_document import PageText, PlumberDocument
from table_errors import PageNotFoundError
from table_models import Box, Size


@pytest.fixture
def plumber_page():
    page = MagicMock()
    page.width = 612.0
    page.height = 792.0
    page.bbox = (0, 0, 612.0, 792.0)
    page.crop.return_value.extract_text.return_value = "some text"
    page.extract_text.return_value = "laid out text"
    return page


@pytest.fixture
def doc(plumber_page):
    pdf = MagicMock()
    pdf.pages = [MagicMock(), plumber_page]
    return PlumberDocument(pdf)


class TestPlumberDocument:
    def test_page_count_and_size(self, doc):
        assert doc.page_count() == 2
        assert doc.page_size(1) == (612, 792)

    def test_out_of_range_pages(self, doc):
        with pytest.raises(PageNotFoundError):
            doc.page_size(2)
        with pytest.raises(PageNotFoundError):
            doc.page_size(-1)

    def test_region_is_flipped_to_top_down(self, doc, plumber_page):
        assert doc.region_text(1, 10, 100, 200, 101) == "some text"
        plumber_page.crop.assert_called_once_with((10, 691.0, 200, 692.0))

    def test_region_is_clamped_to_page(self, doc, plumber_page):
        doc.region_text(1, 0, 780, 700, 800)
        plumber_page.crop.assert_called_once_with((0, 0.0, 612.0, 12.0))

    def test_zero_area_region(self, doc, plumber_page):
        assert doc.region_text(1, 0, 792, 612, 793) == ""
        assert doc.region_text(1, 0, -1, 612, 0) == ""
        plumber_page.crop.assert_not_called()

    def test_empty_region_text(self, doc, plumber_page):
        plumber_page.crop.return_value.extract_text.return_value = None
        assert doc.region_text(1, 0, 0, 10, 10) == ""

    def test_layout_text(self, doc, plumber_page):
        assert doc.layout_text(1) == "laid out text"
        plumber_page.extract_text.assert_called_once_with(layout=True)

    def test_open_and_close(self, monkeypatch):
        pdf = MagicMock()
        monkeypatch.setattr(table_document.pdfplumber, "open", MagicMock(return_value=pdf))
        with PlumberDocument.open("report.pdf") as doc:
            assert isinstance(doc, PlumberDocument)
        pdf.close.assert_called_once()


class TestPageText:
    def test_box_text_normalizes_box(self):
        source = MagicMock()
        source.region_text.return_value = "row"
        assert PageText(source).box_text(Box(3, 0, 660, 612, -36)) == "row"
        source.region_text.assert_called_once_with(3, 0, 624, 612, 660)

    def test_page_size_and_count(self):
        source = MagicMock()
        source.page_size.return_value = (612, 792)
        source.page_count.return_value = 5
        page_text = PageText(source)
        assert page_text.page_size(0) == Size(612, 792)
        assert page_text.pages == 5

    def test_page_text(self):
        source = MagicMock()
        source.layout_text.return_value = "page"
        assert PageText(source).page_text(4) == "page"
        source.layout_text.assert_called_once_with(4)
