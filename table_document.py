from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import Protocol

import pdfplumber

from table_errors import PageNotFoundError
from table_models import Box, Size

logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", module="pdfminer")

log = logging.getLogger(__name__)


class PageTextSource(Protocol):
    """What the core needs from a rendered document.

    Coordinates are bottom-up: y = 0 is the bottom edge of the page and
    region bounds are already normalized (x0 <= x1, y0 <= y1).
    """

    def page_count(self) -> int: ...

    def page_size(self, page: int) -> tuple[int, int]: ...

    def region_text(self, page: int, x0: float, y0: float, x1: float, y1: float) -> str: ...

    def layout_text(self, page: int) -> str: ...


class PlumberDocument:
    """PageTextSource backed by an open pdfplumber PDF. Page indices are 0-based."""

    def __init__(self, pdf: pdfplumber.PDF) -> None:
        self._pdf = pdf

    @classmethod
    def open(cls, path: str | Path) -> PlumberDocument:
        return cls(pdfplumber.open(path))

    def close(self) -> None:
        self._pdf.close()

    def __enter__(self) -> PlumberDocument:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _page(self, page: int) -> pdfplumber.page.Page:
        count = len(self._pdf.pages)
        if page < 0 or page >= count:
            raise PageNotFoundError(page, count)
        return self._pdf.pages[page]

    def page_count(self) -> int:
        return len(self._pdf.pages)

    def page_size(self, page: int) -> tuple[int, int]:
        p = self._page(page)
        return int(p.width), int(p.height)

    def region_text(self, page: int, x0: float, y0: float, x1: float, y1: float) -> str:
        p = self._page(page)
        left, top = p.bbox[0], p.bbox[1]

        # clamp to the page; pdfplumber refuses crops outside it or with no area
        x0, x1 = max(x0, 0), min(x1, p.width)
        y0, y1 = max(y0, 0), min(y1, p.height)
        if x1 <= x0 or y1 <= y0:
            return ""

        # pdfplumber measures from the top edge
        bbox = (left + x0, top + p.height - y1, left + x1, top + p.height - y0)
        return p.crop(bbox).extract_text() or ""

    def layout_text(self, page: int) -> str:
        return self._page(page).extract_text(layout=True) or ""


class PageText:
    """Thin query surface over a PageTextSource, in terms of Box and Size."""

    def __init__(self, source: PageTextSource) -> None:
        self.source = source

    @property
    def pages(self) -> int:
        return self.source.page_count()

    def page_size(self, page: int) -> Size:
        w, h = self.source.page_size(page)
        return Size(w, h)

    def box_text(self, box: Box, label: str = "region") -> str:
        """Raw text of every character intersecting *box*. *label* only tags diagnostics."""
        log.debug("%s: %s", label, box)
        x0, y0, x1, y1 = box.bounds()
        return self.source.region_text(box.page, x0, y0, x1, y1)

    def page_text(self, page: int) -> str:
        """Whole-page text laid out visually. Used to identify pages, not for box text."""
        return self.source.layout_text(page)
