from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import IO, Any, Union

import pandas as pd

from ..excel.reader import column_values, get_sheet, open_workbook, read_table
from ..models.config_models import ImportSpec, TableSpec
from ..models.import_result import ImportResult, ObStat, SkippedHom
from ..models.sheet_table import SheetTable
from ..store.acset import ACSet
from ..store.schema import Schema
from .fk_resolution import build_foreign_key_maps, resolve_foreign_keys
from .import_spec import build_import_spec
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Workbook -> acset import orchestration.

Phases, each over every object type of the schema:
1. build the complete import spec (rejects bad table specs before any I/O)
2. read one SheetTable per object type
3. allocate parts (row i -> i-th new part)
4. set attributes, primary keys included
5. resolve homs through the target's primary key

Phase 5 looks up parts of any object type, so phases 3 and 4 must have
finished for all object types first. Any exception aborts the import and
leaves the acset partially filled; callers discard it.
"""

Source = Union[str, Path, IO[bytes], pd.ExcelFile]
Target = Union[ACSet, Schema, Callable[[], ACSet]]
Tables = Mapping[str, Union[TableSpec, Mapping[str, Any]]]


def _make_acset(target: Target) -> ACSet:
    if isinstance(target, ACSet):
        return target
    if isinstance(target, Schema):
        return ACSet(target)
    if callable(target):
        acs = target()
        if not isinstance(acs, ACSet):
            raise TypeError(f"constructor returned {type(acs).__name__}, expected ACSet")
        return acs
    raise TypeError(f"cannot build an acset from {type(target).__name__}")


def read_tables(
    workbook: pd.ExcelFile,
    schema: Schema,
    spec: ImportSpec,
    *,
    null_sentinels: Iterable[str] | None = None,
    show_progress: bool = False,
) -> dict[str, SheetTable]:
    """Read the sheet of every object type. A missing sheet fails the import."""
    tables: dict[str, SheetTable] = {}
    with ProgressTracker(len(schema.obs), description="Reading sheets", enabled=show_progress) as progress:
        for ob in schema.obs:
            progress.start(ob)
            table_spec = spec[ob]
            sheet_name = get_sheet(workbook, table_spec.sheet_for(ob))
            table = read_table(
                workbook,
                sheet_name,
                column_range=table_spec.column_range,
                first_row=table_spec.first_row,
                null_sentinels=null_sentinels,
            )
            logger.debug(
                "ob=%s sheet=%s header_row=%d rows=%d columns=%s",
                ob, sheet_name, table.header_row, table.row_count, table.columns,
            )
            tables[ob] = table
            progress.finish(rows=table.row_count)
    return tables


def allocate_parts(acs: ACSet, tables: Mapping[str, SheetTable]) -> dict[str, range]:
    """Create one part per table row for every object type."""
    return {ob: acs.add_parts(ob, table.row_count) for ob, table in tables.items()}


def populate_attributes(
    acs: ACSet,
    schema: Schema,
    spec: ImportSpec,
    tables: Mapping[str, SheetTable],
    parts: Mapping[str, range],
    *,
    show_progress: bool = False,
) -> dict[str, int]:
    """Write every attribute column onto the allocated parts.

    Returns the number of attributes written per object type. Converter
    exceptions are not caught.
    """
    written: dict[str, int] = {}
    with ProgressTracker(len(schema.obs), description="Attributes", enabled=show_progress) as progress:
        for ob in schema.obs:
            progress.start(ob)
            table_spec = spec[ob]
            table = tables[ob]
            count = 0
            for attr in schema.attrs(ob):
                column = column_values(table, table_spec.column_for(attr))
                converter = table_spec.converter_for(attr)
                data = column if converter is None else [converter(v) for v in column]
                acs.set_subpart(ob, parts[ob], attr, data)
                count += 1
            written[ob] = count
            progress.finish()
    return written


def resolve_homs(
    acs: ACSet,
    schema: Schema,
    spec: ImportSpec,
    tables: Mapping[str, SheetTable],
    parts: Mapping[str, range],
    *,
    show_progress: bool = False,
) -> tuple[dict[str, int], list[SkippedHom]]:
    """Resolve every hom column into target parts.

    Homs whose target has no primary key are skipped with a warning and left
    unset. Returns (homs resolved per object type, skipped homs).
    """
    resolved: dict[str, int] = {}
    skipped_all: list[SkippedHom] = []
    with ProgressTracker(len(schema.obs), description="Foreign keys", enabled=show_progress) as progress:
        for ob in schema.obs:
            progress.start(ob)
            fk_maps, skipped = build_foreign_key_maps(schema, spec, ob)
            for s in skipped:
                logger.warning("Skipping foreign key %s since primary key not set for %s", s.hom, s.target)
            skipped_all.extend(skipped)
            for fk_map in fk_maps:
                values = column_values(tables[ob], fk_map.column)
                targets = resolve_foreign_keys(acs, fk_map, values)
                acs.set_subpart(ob, parts[ob], fk_map.hom, targets)
            resolved[ob] = len(fk_maps)
            progress.finish()
    return resolved, skipped_all


def import_acset(
    source: Source,
    target: Target,
    tables: Tables | None = None,
    *,
    null_sentinels: Iterable[str] | None = None,
    show_progress: bool = False,
) -> ImportResult:
    """Import a workbook into an acset.

    Args:
        source: .xlsx path, binary stream, or an open pandas.ExcelFile
        target: acset to fill in place, or a Schema / zero-argument constructor
        tables: object type -> TableSpec (or mapping of TableSpec fields);
            object types left out use the defaults
        null_sentinels: cell strings read as empty
        show_progress: show tqdm bars (TTY only)

    Returns:
        ImportResult with the populated acset, per object type stats and the
        homs that were skipped
    """
    start_time = datetime.now(UTC)
    acs = _make_acset(target)
    schema = acs.schema
    spec = build_import_spec(schema, tables)

    workbook = open_workbook(source)
    try:
        sheet_tables = read_tables(
            workbook, schema, spec, null_sentinels=null_sentinels, show_progress=show_progress
        )
    finally:
        if workbook is not source:
            workbook.close()

    parts = allocate_parts(acs, sheet_tables)
    attr_counts = populate_attributes(
        acs, schema, spec, sheet_tables, parts, show_progress=show_progress
    )
    hom_counts, skipped = resolve_homs(
        acs, schema, spec, sheet_tables, parts, show_progress=show_progress
    )

    result = ImportResult(acset=acs, start_time=start_time, skipped_homs=skipped)
    for ob in schema.obs:
        result.ob_stats.append(ObStat(
            ob=ob,
            sheet=sheet_tables[ob].sheet_name,
            parts=len(parts[ob]),
            attributes=attr_counts[ob],
            homs=hom_counts[ob],
            skipped_homs=sum(1 for s in skipped if s.source == ob),
        ))
    result.end_time = datetime.now(UTC)
    logger.info(
        "imported %d parts across %d object types (%d homs skipped)",
        result.total_parts, len(schema.obs), len(skipped),
    )
    return result


def read_xlsx_acset(
    source: Source,
    target: Target,
    tables: Tables | None = None,
    **kwargs: Any,
) -> ACSet:
    """Read an acset from an Excel workbook and return it."""
    return import_acset(source, target, tables, **kwargs).acset
