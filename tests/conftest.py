"""
Pytest fixtures: an in-memory document that places text on pages.
"""

from __future__ import annotations

import pytest

from table_errors import PageNotFoundError
from table_models import TableDesc, TableQuestion

PAGE_W = 612
PAGE_H = 792
CHAR_W = 4
LINE_H = 10

TITLE = "Table 2.13 Sexual Assault Prevention Climate"
Q1_TEXT = """
If a coworker were to report a
sexual assault, my chain of
command/supervision would take
the report seriously.
"""
Q2_TEXT = """
If a coworker were to report a
sexual assault, my chain of
command/supervision would keep
the knowledge of the report limited
to those with a need to know.
"""
Q1_VALUES = "12 (5%) 8 (3%) 30 (12%) 40 (16%) 60 (24%) 50 (20%) 50 (20%)"
Q2_VALUES = "10 (4%) 9 (4%) 25 (10%) 45 (18%) 61 (24%) 52 (21%) 48 (19%)"
Q1_CONTINUED_VALUES = "3 (2%) 4 (3%) 11 (9%) 20 (16%) 30 (24%) 29 (23%) 28 (23%)"

QUESTION_X = 72
VALUES_X = 340


class FakeDocument:
    """PageTextSource over characters of fixed size placed on a page.

    Each page is a list of (x, top, text) fragments. A fragment's characters
    are CHAR_W wide and span [top - LINE_H, top], bottom-up like a PDF page.
    """

    def __init__(self, pages: list[list[tuple[int, int, str]]]) -> None:
        self.pages = pages
        self.region_calls = 0
        self._chars = [self._place(fragments) for fragments in pages]

    @staticmethod
    def _place(fragments):
        chars = []
        for x, top, text in fragments:
            for i, ch in enumerate(text):
                cx0 = x + i * CHAR_W
                chars.append((cx0, top - LINE_H, cx0 + CHAR_W, top, ch))
        return chars

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return None

    def page_count(self) -> int:
        return len(self.pages)

    def page_size(self, page: int) -> tuple[int, int]:
        if page < 0 or page >= len(self.pages):
            raise PageNotFoundError(page, len(self.pages))
        return PAGE_W, PAGE_H

    def region_text(self, page: int, x0: float, y0: float, x1: float, y1: float) -> str:
        self.page_size(page)
        self.region_calls += 1
        lines: dict[int, list[tuple[int, int, str]]] = {}
        for cx0, cy0, cx1, cy1, ch in self._chars[page]:
            ow = min(x1, cx1) - max(x0, cx0)
            oh = min(y1, cy1) - max(y0, cy0)
            if ow >= 0 and oh >= 0 and ow + oh > 0:
                lines.setdefault(cy1, []).append((cx0, cx1, ch))

        out = []
        for top in sorted(lines, reverse=True):
            text = ""
            prev_x1 = None
            for cx0, cx1, ch in sorted(lines[top]):
                if prev_x1 is not None and cx0 > prev_x1:
                    text += " "
                text += ch
                prev_x1 = cx1
            out.append(text.strip())
        return "\n".join(out)

    def layout_text(self, page: int) -> str:
        self.page_size(page)
        by_top: dict[int, list[tuple[int, str]]] = {}
        for x, top, text in self.pages[page]:
            by_top.setdefault(top, []).append((x, text))
        return "\n".join(
            "   ".join(text for _, text in sorted(by_top[top]))
            for top in sorted(by_top, reverse=True)
        )


def question_block(text: str, top: int, values: str | None) -> list[tuple[int, int, str]]:
    """Lay out a question's lines from *top* down, values beside its first line."""
    lines = [ln.strip() for ln in text.strip().split("\n")]
    fragments = [(QUESTION_X, top - i * 12, ln) for i, ln in enumerate(lines)]
    if values is not None:
        fragments.append((VALUES_X, top, values))
    return fragments


def survey_pages() -> list[list[tuple[int, int, str]]]:
    cover = [(QUESTION_X, 700, "Command Climate Assessment Report")]
    table_page = [
        (QUESTION_X, 720, TITLE),
        (VALUES_X, 700, "Count (Percent)"),
        *question_block(Q1_TEXT, 660, Q1_VALUES),
        *question_block(Q2_TEXT, 600, Q2_VALUES),
        (QUESTION_X, 500, "Note: percentages may not total one hundred"),
    ]
    continued = [
        (QUESTION_X, 720, TITLE + " (continued)"),
        *question_block(Q1_TEXT, 660, Q1_CONTINUED_VALUES),
    ]
    return [cover, table_page, continued]


@pytest.fixture
def q1() -> TableQuestion:
    return TableQuestion(Q1_TEXT)


@pytest.fixture
def q2() -> TableQuestion:
    return TableQuestion(Q2_TEXT)


@pytest.fixture
def survey_doc() -> FakeDocument:
    return FakeDocument(survey_pages())


@pytest.fixture
def make_table():
    def _make(*questions: TableQuestion, n_values: int = 14) -> TableDesc:
        return TableDesc(TITLE, list(questions), n_values)

    return _make
