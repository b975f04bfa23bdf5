from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path

from table_document import PageText, PageTextSource
from table_errors import RowCountMismatch, TableDescriptionError
from table_locate import RowLocator
from table_models import DEFAULT_N_VALUES, RowRecord, TableDesc, TableQuestion
from table_scan import Scanner
from table_split import RowSplitter

_SLUG_RE = re.compile(r"[^0-9A-Za-z]+")


def build_header(n_values: int) -> list[str]:
    """Column names for a Likert table: each response has a count and a percentage."""
    # truncate toward zero so tiny tables still get the neutral column
    responses = int(((n_values // 2) - 1) / 2)
    header = ["question"]
    for i in range(-responses, responses + 1):
        header += [f"{i}", f"{i}_pct"]
    header += ["report", "question_num"]
    return header


class TableExtractor:
    """Everything needed to pull described tables out of one document."""

    def __init__(
        self,
        source: PageTextSource,
        native_split: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self.log = logger or logging.getLogger(__name__)
        self.page_text = PageText(source)
        self.scanner = Scanner(self.page_text, self.log)
        self.locator = RowLocator(self.page_text, self.scanner, self.log)
        self.splitter = RowSplitter(self.page_text, self.scanner, self.log)
        self.native_split = native_split

    def extract_table(self, table: TableDesc, report: str = "") -> list[RowRecord]:
        """Locate every question row of *table* and split it into cells.

        All or nothing: the first fatal condition propagates and no records
        are returned.
        """
        rows = self.locator.find_table_rows(table)
        if len(rows) != len(table.questions):
            raise RowCountMismatch(table.title, len(table.questions), len(rows))

        split = self.splitter.split_table_row_native if self.native_split else self.splitter.split_table_row
        records: list[RowRecord] = []
        for i, (question, row) in enumerate(zip(table.questions, rows)):
            cells = split(question, row, table.n_values)
            # question numbers survive spelling differences between reports
            records.append(RowRecord(cells.label, cells.values, report, i + 1))
        return records


def write_csv(records: list[RowRecord], header: list[str], path: str | Path) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for record in records:
            writer.writerow(record.as_csv_row())


def output_name(title: str) -> str:
    return _SLUG_RE.sub("_", title).strip("_").lower() + ".csv"


def _table_from_dict(data: dict) -> tuple[TableDesc, str]:
    table = TableDesc(
        title=data["title"],
        questions=[TableQuestion(q) for q in data["questions"]],
        n_values=int(data.get("n_values", DEFAULT_N_VALUES)),
    )
    return table, data.get("output") or output_name(table.title)


def load_tables(path: str | Path) -> list[tuple[TableDesc, str]]:
    """Read table descriptions and their output file names from a JSON file.

    Either ``{"tables": [...]}`` or a bare list of table objects, each with
    ``title``, ``questions``, and optionally ``n_values`` and ``output``.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data["tables"]
        return [_table_from_dict(entry) for entry in data]
    except json.JSONDecodeError as e:
        raise TableDescriptionError(str(path), f"invalid JSON: {e}") from e
    except KeyError as e:
        raise TableDescriptionError(str(path), f"missing key {e}") from e
    except (TypeError, ValueError) as e:
        raise TableDescriptionError(str(path), str(e)) from e
