"""
CSV import parsing and export rendering.

Import: first line is the header, then one record per line; values may
be wrapped in double quotes. Parsing only turns text into row dicts.
Validating and adding each row is the transaction store's job.

Export: header is the key set of the first record, every value is
quoted, one line per record in the order given.
"""

import csv
import io
from collections.abc import Mapping, Sequence
from typing import Any

import pandas as pd

from finance_tracker.errors import FinanceTrackerError


# Placed in the first column of a row that had more fields than the header.
MALFORMED_ROW = "\x00malformed-row"


class CsvFormatError(FinanceTrackerError):
    """The CSV text could not be parsed at all."""
    pass


def _read(text: str, **options) -> pd.DataFrame:
    # header=None: the header line is read as row 0, so pandas never mistakes
    # an over-long first data row for an index column
    try:
        return pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            **options,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, ValueError) as e:
        raise CsvFormatError(f"Could not parse CSV: {e}")


def parse_csv(text: str) -> list[dict[str, Any]]:
    """
    Parse CSV text into one dict per data row, keyed by header name.

    All values come back as stripped strings; missing trailing values
    are "". A row with more fields than the header is kept in place but
    flagged with MALFORMED_ROW in its first column, so row numbers stay
    aligned with the file.
    """
    if not text or not text.strip():
        return []

    first = _read(text, nrows=1)
    if first.empty:
        return []
    columns = [str(value).strip() for value in first.iloc[0].tolist()]
    width = len(columns)

    def flag_bad_line(fields: list[str]) -> list[str]:
        return [MALFORMED_ROW] + [""] * (width - 1)

    frame = _read(text, engine="python", on_bad_lines=flag_bad_line)
    frame = frame.iloc[1:].copy()
    frame.columns = columns
    frame = frame.fillna("")
    for column in frame.columns:
        frame[column] = frame[column].astype(str).str.strip()

    return frame.to_dict(orient="records")


def is_malformed(row: Mapping[str, Any]) -> bool:
    return bool(row) and next(iter(row.values())) == MALFORMED_ROW


def render_csv(records: Sequence[Mapping[str, Any]]) -> str:
    """
    Render records as CSV text.

    The header is the key set of the first record; keys missing from a
    later record export as empty values. No records gives "".
    """
    if not records:
        return ""

    columns = list(records[0].keys())
    frame = pd.DataFrame(list(records), columns=columns)
    body = frame.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        na_rep="",
        lineterminator="\n",
    )
    return ",".join(columns) + "\n" + body
