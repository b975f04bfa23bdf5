from __future__ import annotations

import logging

from table_document import PageText
from table_errors import SearchDepthExceeded
from table_models import Box, TableDesc, TableQuestion, TableRow
from table_scan import NOT_FOUND, Scanner

MIN_ROW_HEIGHT = 25
MAX_PAGE_ADVANCES = 3


class RowLocator:
    """Turns a table description into one row box per question, top to bottom."""

    def __init__(
        self,
        page_text: PageText,
        scanner: Scanner | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.page_text = page_text
        self.log = logger or logging.getLogger(__name__)
        self.scanner = scanner or Scanner(page_text, self.log)

    def find_table_row(
        self, page: int, question: TableQuestion, start_y: int, depth: int = 0
    ) -> tuple[TableRow, Box, int]:
        """Locate the row holding *question* at or below *start_y*.

        Moves on to the following page when the question's first line is not
        found, up to MAX_PAGE_ADVANCES times. Returns the row, its box and the
        y of the question's last line.
        """
        if depth > MAX_PAGE_ADVANCES:
            self.log.error("Max find row depth met, failing extraction!")
            raise SearchDepthExceeded(question.top_text, page, depth)

        size = self.page_text.page_size(page)
        self.log.debug("Question text: %r", question.text)
        self.log.debug("Finding question top: %r from y %d on page %d", question.top_text, start_y, page)

        top = self.scanner.find_text(page, question.top_text, 0, start_y=start_y)
        if top.y == NOT_FOUND:
            self.log.debug("Not found, checking next page")
            next_h = self.page_text.page_size(page + 1).h
            return self.find_table_row(page + 1, question, next_h, depth + 1)

        # start at top.y, not below it: a single line question has top == bottom
        self.log.debug("Finding question bottom: %r", question.bottom_text)
        bottom = self.scanner.find_text(page, question.bottom_text, 0, start_y=top.y)
        bottom_y = bottom.y
        if bottom_y == NOT_FOUND:
            self.log.warning("Question bottom %r not found on page %d, using its top line", question.bottom_text, page)
            bottom_y = top.y

        # full page width, growing down from the top line
        height = max(top.y - bottom_y, MIN_ROW_HEIGHT)
        box = Box(page, 0, top.y, size.w, -height)
        row = TableRow(page, box)
        self.log.debug("tableRow: %s", row)
        return row, box, bottom_y

    def find_table_rows(self, table: TableDesc) -> list[TableRow]:
        page = self.scanner.identify_page(table.title)
        self.log.debug("Title %r on page %d", table.title, page)
        title = self.scanner.find_text(page, table.title)
        self.log.debug("Title coord: %s, questions: %d", title, len(table.questions))

        # each search starts below the previous row so questions sharing a
        # first line are not matched twice
        last_y = title.y - 1
        if title.y == NOT_FOUND:
            # a title wrapped over several lines never fits one scanline
            self.log.warning("Title %r not placed on page %d, searching from the page top", table.title, page)
            last_y = -1
        rows: list[TableRow] = []
        for i, question in enumerate(table.questions):
            self.log.debug("ROW %d", i)
            row, box, bottom_y = self.find_table_row(page, question, last_y)
            rows.append(row)

            last_y = bottom_y - 1
            page = box.page
            if self.log.isEnabledFor(logging.DEBUG):
                self.log.debug("tableRow box text: %r", self.page_text.box_text(row.box, label="row"))

        return rows
