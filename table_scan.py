"""Scanline search over page text.

The only way to ask a document where something is printed is to pull the
text of a rectangle. To find a landmark we pull the text of very thin
strips, one unit at a time: down the page to get its y, then leftward
along that strip to get its x.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from table_document import PageText
from table_models import Box, Coord

NOT_FOUND = -1
SCAN_LINE_SIZE = 1

_WHITESPACE_RE = re.compile(r"\s+")
_TYPOGRAPHIC_APOSTROPHE = "’"

Condition = Callable[[str], bool]


def regexify(needle: str) -> str:
    """Build a pattern that tolerates reflowed whitespace and curly apostrophes."""
    pattern = r"\s*".join(re.escape(part) for part in _WHITESPACE_RE.split(needle))
    pattern = pattern.replace(_TYPOGRAPHIC_APOSTROPHE, ".")
    return f".*{pattern}.*"


def exact_or_regex_match(needle: str, regex_needle: str, haystack: str) -> bool:
    if needle in haystack:
        return True
    return re.fullmatch(regex_needle, haystack.replace("\n", ""), re.DOTALL) is not None


class TextMatcher:
    """Callable predicate: does a haystack contain *needle*, exactly or approximately."""

    def __init__(self, needle: str) -> None:
        self.needle = needle
        self.pattern = regexify(needle)

    def __call__(self, haystack: str) -> bool:
        return exact_or_regex_match(self.needle, self.pattern, haystack)

    def __repr__(self) -> str:
        return f"TextMatcher({self.needle!r})"


class Scanner:
    def __init__(self, page_text: PageText, logger: logging.Logger | None = None) -> None:
        self.page_text = page_text
        self.log = logger or logging.getLogger(__name__)

    def _strip_text(self, box: Box) -> str:
        return self.page_text.box_text(box, label="scanline").replace("\n", "")

    def y_scan_until(self, page: int, condition: Condition, start_y: int = -1) -> int:
        """Scan down from *start_y* (default: top of page) until *condition* holds
        for the text of a full-width strip. Returns that y or NOT_FOUND.
        """
        size = self.page_text.page_size(page)
        y = size.h if start_y == -1 else start_y

        while y >= 0:
            if condition(self._strip_text(Box(page, 0, y, size.w, SCAN_LINE_SIZE))):
                self.log.debug("Scanned page %d. Found y: %d", page, y)
                return y
            y -= 1

        self.log.debug("Scanned page %d. y not found", page)
        return NOT_FOUND

    def x_scan_until(
        self,
        page: int,
        condition: Condition,
        y: int,
        start_x: int = -1,
        direction: str = "dec",
        scan_line_size: int = SCAN_LINE_SIZE,
    ) -> int:
        """Scan along the strip at *y* until *condition* holds.

        "dec" walks x leftward from *start_x* (default: right edge); the strip
        runs from x to the right edge. "inc" walks x rightward from *start_x*
        (default: left edge); the strip runs from *start_x* to x.
        Returns that x or NOT_FOUND.
        """
        size = self.page_text.page_size(page)

        if direction == "dec":
            x = size.w - 1 if start_x == -1 else start_x
            while x >= 0:
                if condition(self._strip_text(Box(page, x, y, size.w, scan_line_size))):
                    self.log.debug("Scanned page %d. Found x: %d", page, x)
                    return x
                x -= 1
        elif direction == "inc":
            origin = 0 if start_x == -1 else start_x
            x = origin
            while x <= size.w:
                if condition(self._strip_text(Box(page, origin, y, x - origin, scan_line_size))):
                    self.log.debug("Scanned page %d. Found x: %d", page, x)
                    return x
                x += 1
        else:
            raise ValueError(f"unknown scan direction: {direction!r}")

        self.log.debug("Scanned page %d. x not found", page)
        return NOT_FOUND

    def find_text(self, page: int, needle: str, start_x: int = -1, start_y: int = -1) -> Coord:
        """Find where *needle* is printed on *page*, searching down from *start_y*.

        The y comes from a downward scan of full-width strips. The x comes from
        scanning that strip from the right edge: strips are skipped until one
        holds any text, which becomes the baseline, and every strip after it is
        tested for the needle.

        A NOT_FOUND y is returned as is; check it before using the coordinate.
        *start_x* is not used: the horizontal scan always starts from the right edge.
        """
        matcher = TextMatcher(needle)
        self.log.debug("findText: %r, pg: %d", needle, page)

        def string_found(text: str) -> bool:
            m = matcher(text)
            self.log.debug("finding Y: %r contains %r? %s", text, needle, m)
            return m

        y = self.y_scan_until(page, string_found, start_y)

        last_text = ""

        def string_captured(text: str) -> bool:
            nonlocal last_text
            if not last_text:
                last_text = text
                return False
            m = matcher(text)
            self.log.debug("finding X: %r contains %r? %s", text, needle, m)
            return m

        x = self.x_scan_until(page, string_captured, y)
        coord = Coord(x, y)
        self.log.debug("Found %r at %s", needle, coord)
        return coord

    def identify_page(self, text: str) -> int:
        """Return the first page (after the cover, page 0) whose layout text holds *text*."""
        matcher = TextMatcher(text)
        for page in range(1, self.page_text.pages):
            page_text = self.page_text.page_text(page)
            self.log.debug("page: %d text: %r ptrn: %r\npageText:\n%s", page, text, matcher.pattern, page_text)

            if text in page_text:
                self.log.debug("Page text exact match on page %d", page)
                return page
            if matcher(page_text):
                self.log.debug("Pattern match on page %d", page)
                return page

        self.log.warning("No page contains %r", text)
        return NOT_FOUND
