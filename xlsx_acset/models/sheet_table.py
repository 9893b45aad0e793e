from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd

"""SheetTable: the rows read from one sheet for one object type.

Row i of ``frame`` becomes the i-th part allocated for the object type.
"""

__all__ = [
    "SheetTable",
]


@dataclass(frozen=True)
class SheetTable:
    sheet_name: str
    header_row: int  # Excel row number of the header (1-based)
    frame: pd.DataFrame  # header text -> normalised cell values

    @property
    def columns(self) -> list[str]:
        return [str(c) for c in self.frame.columns]

    @property
    def row_count(self) -> int:
        return len(self.frame.index)

    def has_column(self, name: str) -> bool:
        return name in self.frame.columns

    def column_values(self, name: str) -> list[Any]:
        return self.frame[name].tolist()
