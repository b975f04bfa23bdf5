"""Extract survey tables from a PDF report into CSV files.

The report exposes no table structure, only text at positions. For each
described table:
  1. find_table_rows     – find the title's page, then scan down from the
                           title for each question's first and last line,
                           moving on to later pages when needed
  2. split_table_row     – split each row's text into the question label
                           and exactly n_values value strings
  3. write_csv           – one CSV per table: question, one count and one
                           percentage column per response, report, question_num
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from table_document import PlumberDocument
from table_errors import TableExtractionError
from table_pipeline import TableExtractor, build_header, load_tables, write_csv

log = logging.getLogger("tablevulture")


def extract_report(
    pdf_path: str,
    tables_path: str,
    output_dir: str = ".",
    report: str | None = None,
    native_split: bool = False,
) -> list[Path]:
    """Extract every table described in *tables_path*; return the CSV paths written."""
    tables = load_tables(tables_path)
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    report = report if report is not None else Path(pdf_path).stem

    written: list[Path] = []
    with PlumberDocument.open(pdf_path) as doc:
        extractor = TableExtractor(doc, native_split=native_split, logger=log)
        for table, output in tables:
            log.info("Extracting %r", table.title)
            records = extractor.extract_table(table, report)
            header = build_header(table.n_values)
            log.debug("Building header with %d columns", len(header))
            path = out_dir / output
            write_csv(records, header, path)
            log.info("Wrote %d rows to %s", len(records), path)
            written.append(path)
    return written


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract survey tables from a PDF report into CSV files.",
    )
    parser.add_argument("pdf", help="Path to the PDF file")
    parser.add_argument("tables", help="Path to the JSON table descriptions")
    parser.add_argument(
        "-o", "--output-dir",
        default=".", metavar="DIR",
        help="Directory for the CSV files (default: current directory)",
    )
    parser.add_argument(
        "-r", "--report",
        default=None, metavar="NAME",
        help="Report name written to every row (default: the PDF file name)",
    )
    parser.add_argument(
        "--native-split",
        action="store_true",
        help="Split label from values geometrically instead of line by line",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every scan and row box",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    for path in (Path(args.pdf), Path(args.tables)):
        if not path.exists():
            print(f"Error: file not found: {path}", file=sys.stderr)
            return 1

    try:
        written = extract_report(
            args.pdf,
            args.tables,
            output_dir=args.output_dir,
            report=args.report,
            native_split=args.native_split,
        )
    except TableExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for path in written:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
