"""Exceptions raised while locating and splitting survey table rows.

Hierarchy:
    TableExtractionError
    ├── PageNotFoundError
    ├── SearchDepthExceeded
    ├── ArityMismatch
    ├── SplitPointNotFound
    ├── RowCountMismatch
    └── TableDescriptionError

A scan that simply finds nothing is not an error: it returns ``NOT_FOUND``
(-1) and the caller decides what that means.
"""

from __future__ import annotations


class TableExtractionError(Exception):
    """Base class for every fatal table extraction failure."""


class PageNotFoundError(TableExtractionError):
    """A page index outside the opened document was requested."""

    def __init__(self, page: int, page_count: int) -> None:
        self.page = page
        self.page_count = page_count
        super().__init__(f"page {page} is out of range (document has {page_count} pages)")


class SearchDepthExceeded(TableExtractionError):
    """A question landmark was not found within the allowed page advances."""

    def __init__(self, question: str, page: int, depth: int) -> None:
        self.question = question
        self.page = page
        self.depth = depth
        super().__init__(
            f"max find row depth met at page {page} (depth {depth}) "
            f"while searching for {question!r}"
        )


class ArityMismatch(TableExtractionError):
    """A row produced a different number of values than the table expects."""

    def __init__(self, label: str, values: list[str], expected: int) -> None:
        self.label = label
        self.values = values
        self.expected = expected
        self.actual = len(values)
        super().__init__(
            f"incorrect number of values for {label!r}: "
            f"expected {expected}, found {self.actual} {values!r}"
        )


class SplitPointNotFound(TableExtractionError):
    """The label/value boundary of a row could not be located geometrically."""

    def __init__(self, question: str, page: int) -> None:
        self.question = question
        self.page = page
        super().__init__(f"no label/value split point for {question!r} on page {page}")


class RowCountMismatch(TableExtractionError):
    """The locator returned a different number of rows than the table has questions."""

    def __init__(self, title: str, expected: int, actual: int) -> None:
        self.title = title
        self.expected = expected
        self.actual = actual
        super().__init__(f"{title!r}: expected {expected} rows, located {actual}")


class TableDescriptionError(TableExtractionError):
    """A table description file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"bad table description file {path}: {reason}")
