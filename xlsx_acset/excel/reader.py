from __future__ import annotations

import zipfile
from collections.abc import Iterable
from pathlib import Path
from typing import IO, Any

import pandas as pd

from ..models.sheet_table import SheetTable

"""Workbook reading with pandas (openpyxl engine).

- open_workbook: open an .xlsx once for the whole import
- get_sheet: resolve a sheet by name or 1-based position (as Excel counts sheets)
- read_table: header row + data rows of one sheet as a SheetTable

Header row: ``first_row`` when given, otherwise the first non-empty row.
Data rows run from the row after the header up to the first completely empty
row. Empty cells become None. Cell text is kept as-is, so "NA" stays a string
unless listed in ``null_sentinels``. Sentinels become None only after the
header and end of data are found, so a row of sentinels is still a data row.
"""

__all__ = [
    "MissingColumnError",
    "SheetHeaderError",
    "SheetNotFoundError",
    "WorkbookFormatError",
    "column_values",
    "get_sheet",
    "open_workbook",
    "read_table",
]


class WorkbookFormatError(Exception):
    """Raised when the source is not a readable .xlsx workbook."""


class SheetNotFoundError(LookupError):
    """Raised when a named or numbered sheet is not in the workbook."""


class SheetHeaderError(ValueError):
    """Raised when a sheet has no usable header row."""


class MissingColumnError(KeyError):
    """Raised when a mapped column is missing from a sheet header."""

    def __str__(self) -> str:  # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


def open_workbook(source: str | Path | IO[bytes] | pd.ExcelFile) -> pd.ExcelFile:
    """Open ``source`` as an Excel workbook. Already open workbooks pass through."""
    if isinstance(source, pd.ExcelFile):
        return source
    try:
        return pd.ExcelFile(source, engine="openpyxl")
    except (ValueError, zipfile.BadZipFile, KeyError) as e:
        raise WorkbookFormatError(f"not a readable .xlsx workbook: {e}") from e


def get_sheet(workbook: pd.ExcelFile, sheet: str | int) -> str:
    """Resolve ``sheet`` (name or 1-based position) to a sheet name in ``workbook``."""
    names = [str(n) for n in workbook.sheet_names]
    if isinstance(sheet, int) and not isinstance(sheet, bool):
        if not 1 <= sheet <= len(names):
            raise SheetNotFoundError(
                f"sheet position {sheet} out of range (workbook has {len(names)} sheets)"
            )
        return names[sheet - 1]
    if str(sheet) not in names:
        raise SheetNotFoundError(f"sheet '{sheet}' not found; available: {names}")
    return str(sheet)


def _is_empty(val: Any) -> bool:
    if val is None:
        return True
    if isinstance(val, str):
        return val == ""
    try:
        return bool(pd.isna(val))
    except (TypeError, ValueError):
        return False


def _normalize_cell(val: Any, null_sentinels: set[str] | None) -> Any:
    if _is_empty(val):
        return None
    if isinstance(val, str) and null_sentinels and val.strip().upper() in null_sentinels:
        return None
    if isinstance(val, pd.Timestamp):
        return val.to_pydatetime()
    return val


def read_table(
    workbook: pd.ExcelFile,
    sheet: str,
    *,
    column_range: str | None = None,
    first_row: int | None = None,
    null_sentinels: Iterable[str] | None = None,
) -> SheetTable:
    """Read one sheet sub-range into a SheetTable.

    Parameters
    ----------
    workbook: workbook opened with open_workbook
    sheet: sheet name (already resolved by get_sheet)
    column_range: Excel column letters, e.g. "B:D" (None = all columns)
    first_row: 1-based Excel row number of the header (None = first non-empty row)
    null_sentinels: cell strings to read as None (case-insensitive)
    """
    sentinels = {s.strip().upper() for s in null_sentinels} if null_sentinels else None
    skip = first_row - 1 if first_row else 0
    raw = workbook.parse(
        sheet,
        header=None,
        skiprows=skip or None,
        usecols=column_range,
        dtype=object,
        keep_default_na=False,
    )
    raw_rows = [list(r) for r in raw.itertuples(index=False)]

    # header and end of data are decided on the cells as written; a row of
    # null sentinels is still a data row
    header_idx = 0
    if first_row is None:
        while header_idx < len(raw_rows) and all(_is_empty(v) for v in raw_rows[header_idx]):
            header_idx += 1
    if header_idx >= len(raw_rows) or all(_is_empty(v) for v in raw_rows[header_idx]):
        raise SheetHeaderError(f"sheet '{sheet}' has no header row")

    header = raw_rows[header_idx]
    keep: list[int] = []
    columns: list[str] = []
    for i, cell in enumerate(header):
        if _is_empty(cell):
            continue
        name = str(cell).strip()
        if name in columns:
            raise SheetHeaderError(f"sheet '{sheet}' has duplicate column '{name}'")
        keep.append(i)
        columns.append(name)

    data: list[list[Any]] = []
    for r in raw_rows[header_idx + 1:]:
        if all(_is_empty(v) for v in r):
            break
        data.append([_normalize_cell(r[i], sentinels) for i in keep])

    frame = pd.DataFrame(data, columns=columns, dtype=object)
    return SheetTable(sheet_name=sheet, header_row=skip + header_idx + 1, frame=frame)


def column_values(table: SheetTable, column: str) -> list[Any]:
    """Values of ``column`` in row order; a missing column is fatal."""
    if not table.has_column(column):
        raise MissingColumnError(
            f"sheet '{table.sheet_name}' missing column '{column}'; columns: {table.columns}"
        )
    return table.column_values(column)
