from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

"""Import configuration dataclasses.

A ``TableSpec`` says where one object type's rows live in the workbook and how
its columns map onto attributes and homs. An ``ImportSpec`` holds one
``TableSpec`` per schema object type and is built before any sheet is read.
"""

__all__ = [
    "ImportSpec",
    "ImportSpecError",
    "TableSpec",
]


class ImportSpecError(ValueError):
    """Raised for table specifications the importer refuses to run."""


@dataclass(frozen=True)
class TableSpec:
    """How one object type is read from the workbook.

    sheet: sheet name, 1-based sheet position, or None for the object type name
    primary_key: attribute used to resolve homs that target this object type
    row_range: 1-based Excel row of the header; None finds the first non-empty row
    column_range: Excel column letters such as "A:C"; None reads every column
    column_labels: logical attribute/hom name -> header text in the sheet
    convert: attribute name -> function applied to each cell value
    """
    sheet: str | int | None = None
    primary_key: str | None = None
    row_range: Any = None
    column_range: str | None = None
    column_labels: Mapping[str, str] = field(default_factory=dict)
    convert: Mapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TableSpec:
        unknown = set(data) - {
            "sheet", "primary_key", "row_range", "column_range", "column_labels", "convert",
        }
        if unknown:
            raise ImportSpecError(f"unknown table spec fields: {sorted(unknown)}")
        return cls(
            sheet=data.get("sheet"),
            primary_key=data.get("primary_key"),
            row_range=data.get("row_range"),
            column_range=data.get("column_range"),
            column_labels=dict(data.get("column_labels") or {}),
            convert=dict(data.get("convert") or {}),
        )

    def validate(self, ob: str) -> None:
        """Reject settings that cannot be honoured, before any I/O happens."""
        rr = self.row_range
        if rr is not None and (isinstance(rr, bool) or not isinstance(rr, int)):
            # Truncating at an end row would under-count the parts to allocate.
            raise ImportSpecError(
                f"{ob}: specifying an end row is not supported (row_range={rr!r})"
            )
        if isinstance(rr, int) and rr < 1:
            raise ImportSpecError(f"{ob}: row_range must be a 1-based row number, got {rr}")
        sheet = self.sheet
        if isinstance(sheet, int) and not isinstance(sheet, bool) and sheet < 1:
            raise ImportSpecError(f"{ob}: sheet positions start at 1, got {sheet}")
        for attr, fn in self.convert.items():
            if not callable(fn):
                raise ImportSpecError(f"{ob}: converter for {attr!r} is not callable")

    def sheet_for(self, ob: str) -> str | int:
        return ob if self.sheet is None else self.sheet

    @property
    def first_row(self) -> int | None:
        return self.row_range

    def column_for(self, name: str) -> str:
        return self.column_labels.get(name, name)

    def converter_for(self, attr: str) -> Callable[[Any], Any] | None:
        return self.convert.get(attr)


@dataclass(frozen=True)
class ImportSpec:
    """Complete per-object-type table specs for one import."""
    tables: dict[str, TableSpec]

    def __getitem__(self, ob: str) -> TableSpec:
        return self.tables[ob]

    def primary_key(self, ob: str) -> str | None:
        return self.tables[ob].primary_key
