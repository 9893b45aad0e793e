"""Read acsets (typed in-memory relational data) from Excel workbooks."""

from .excel.reader import (
    MissingColumnError,
    SheetHeaderError,
    SheetNotFoundError,
    WorkbookFormatError,
)
from .models.config_models import ImportSpec, ImportSpecError, TableSpec
from .models.import_result import ImportResult, ObStat, SkippedHom
from .services.fk_resolution import ForeignKeyError
from .services.import_spec import build_import_spec
from .services.importer import import_acset, read_xlsx_acset
from .store.acset import ACSet
from .store.schema import Schema

__version__ = "0.1.0"

__all__ = [
    "ACSet",
    "ForeignKeyError",
    "ImportResult",
    "ImportSpec",
    "ImportSpecError",
    "MissingColumnError",
    "ObStat",
    "Schema",
    "SheetHeaderError",
    "SheetNotFoundError",
    "SkippedHom",
    "TableSpec",
    "WorkbookFormatError",
    "build_import_spec",
    "import_acset",
    "read_xlsx_acset",
]
