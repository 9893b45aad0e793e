"""Domain models for the workbook -> acset importer.

Configuration records, the materialized sheet table, import results and the
structured issue record.
"""

from .config_models import ImportSpec, ImportSpecError, TableSpec
from .import_result import ImportResult, ObStat, SkippedHom
from .issue_record import ImportIssue
from .sheet_table import SheetTable

__all__ = [
    # Configuration models
    "ImportSpec",
    "ImportSpecError",
    "TableSpec",
    # Processing models
    "ImportIssue",
    "ImportResult",
    "ObStat",
    "SheetTable",
    "SkippedHom",
]
