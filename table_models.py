from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_N_VALUES = 14


@dataclass(frozen=True)
class Coord:
    """A single point on a page. y grows upward from the bottom edge."""

    x: int
    y: int


@dataclass(frozen=True)
class Size:
    w: int
    h: int


@dataclass(frozen=True)
class Box:
    """A region of a page. w and h may be negative (h < 0 grows down from y)."""

    page: int
    x: int
    y: int
    w: int
    h: int

    def normalized(self) -> Box:
        x, w = (self.x + self.w, -self.w) if self.w < 0 else (self.x, self.w)
        y, h = (self.y + self.h, -self.h) if self.h < 0 else (self.y, self.h)
        return Box(self.page, x, y, w, h)

    def bounds(self) -> tuple[int, int, int, int]:
        box = self.normalized()
        return box.x, box.y, box.x + box.w, box.y + box.h


@dataclass(frozen=True)
class TableQuestion:
    """A survey question as printed in the report, possibly over several lines."""

    text: str
    lines: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        lines = tuple(ln.strip() for ln in self.text.split("\n") if ln.strip())
        if not lines:
            raise ValueError(f"question has no text: {self.text!r}")
        object.__setattr__(self, "lines", lines)

    @property
    def top_text(self) -> str:
        return self.lines[0]

    @property
    def bottom_text(self) -> str:
        return self.lines[-1]


@dataclass
class TableDesc:
    """A description of a table we intend to extract. Question order is row order."""

    title: str
    questions: list[TableQuestion]
    n_values: int = DEFAULT_N_VALUES


@dataclass(frozen=True)
class TableRow:
    page: int
    box: Box


@dataclass
class RowCells:
    """A row split into its question label and value strings."""

    label: str
    values: list[str]


@dataclass
class RowRecord:
    """One output row: the split cells plus report name and 1-based question number."""

    label: str
    values: list[str]
    report: str
    question_num: int

    def as_csv_row(self) -> list[str]:
        return [self.label, *self.values, self.report, str(self.question_num)]
