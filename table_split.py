from __future__ import annotations

import logging
import re

from table_document import PageText
from table_errors import ArityMismatch, SplitPointNotFound
from table_models import DEFAULT_N_VALUES, Box, RowCells, TableQuestion, TableRow
from table_scan import NOT_FOUND, Scanner, TextMatcher

_DIGIT_RE = re.compile(r"[0-9]")
_SPLIT_CHAR_RE = re.compile(r"[0-9.()]")
_NON_VALUE_RE = re.compile(r"[^0-9()%\s.]+")
_WHITESPACE_RE = re.compile(r"\s+")
_NUMERIC_RE = re.compile(r"[0-9.()%]")

# gap between the end of the question text and the start of the value search
_VALUE_START_GAP = 5


def find_char_split_point(line: str) -> int:
    """Index of the first character that can start a value, or -1."""
    m = _SPLIT_CHAR_RE.search(line)
    return m.start() if m else NOT_FOUND


def clean_cell_value(text: str, strip_char: bool = False) -> str:
    if strip_char:
        text = _NON_VALUE_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text.replace("\n", " ")).strip()


def _checked_cells(label: str, values: list[str], n_values: int, log: logging.Logger) -> RowCells:
    log.debug("Actual no. of values: %d, Expected no.: %d", len(values), n_values)
    if len(values) != n_values:
        log.error("Incorrect number of values detected for %r: %r", label, values)
        raise ArityMismatch(label, values, n_values)
    return RowCells(label, values)


class RowSplitter:
    """Splits a located row into its question label and its values."""

    def __init__(
        self,
        page_text: PageText,
        scanner: Scanner | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.page_text = page_text
        self.log = logger or logging.getLogger(__name__)
        self.scanner = scanner or Scanner(page_text, self.log)

    def split_table_row(
        self, question: TableQuestion, row: TableRow, n_values: int = DEFAULT_N_VALUES
    ) -> RowCells:
        """Split each line of the row at its first value character.

        A line with a digit gives its text before the first [0-9().] to the
        label and the rest to the values. A line without digits is all label.
        """
        char_block = self.page_text.box_text(row.box)
        self.log.debug("row.box: %s\ncharBlock: %s", row.box, char_block)

        q_lines: list[str] = []
        value_lines: list[str] = []
        for line in char_block.split("\n"):
            if _DIGIT_RE.search(line):
                i = find_char_split_point(line)
                q_lines.append(line[:i])
                value_lines.append(line[i:])
            else:
                q_lines.append(line)

        q_text = "\n".join(q_lines)
        values = "\n".join(value_lines)
        self.log.debug("qText: %r values: %r", q_text, values)

        label = clean_cell_value(q_text)
        return _checked_cells(label, values.split(), n_values, self.log)

    def split_table_row_native(
        self, question: TableQuestion, row: TableRow, n_values: int = DEFAULT_N_VALUES
    ) -> RowCells:
        """Split the row box geometrically into a label box and a values box.

        1. scan right from the left edge until the question's first line is
           complete; that x is the end of the question.
        2. keep scanning right until something numeric begins.
        3. the midpoint of the two is the split between label and values.
        """
        box = row.box
        find_end_of_q = TextMatcher(question.top_text)
        end_q_x = self.scanner.x_scan_until(
            row.page, find_end_of_q, box.y, 0, "inc", scan_line_size=box.h
        )
        self.log.debug("endQX: %d", end_q_x)
        if end_q_x == NOT_FOUND:
            raise SplitPointNotFound(question.top_text, row.page)

        def find_start_of_val(text: str) -> bool:
            return _NUMERIC_RE.search(text) is not None

        start_v_x = self.scanner.x_scan_until(
            row.page, find_start_of_val, box.y, end_q_x + _VALUE_START_GAP, "inc",
            scan_line_size=box.h,
        )
        self.log.debug("startVX: %d", start_v_x)
        if start_v_x == NOT_FOUND:
            raise SplitPointNotFound(question.top_text, row.page)

        split_x = (end_q_x + start_v_x) // 2

        q_box = Box(row.page, box.x, box.y, split_x - box.x, box.h)
        label = clean_cell_value(self.page_text.box_text(q_box, label="question"))
        self.log.debug("Question: %s", label)

        v_box = Box(row.page, split_x, box.y, box.w - split_x, box.h)
        values = clean_cell_value(self.page_text.box_text(v_box, label="values"), strip_char=True)
        self.log.debug("Values: %s", values)

        return _checked_cells(label, values.split(), n_values, self.log)
