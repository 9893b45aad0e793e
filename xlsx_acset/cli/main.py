from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, ImportConfig, load_config
from ..excel.reader import WorkbookFormatError, get_sheet, open_workbook, read_table
from ..logging.init import get_logger, log_summary, set_debug, setup_logging
from ..logging.issue_log import IssueLogBuffer
from ..models.config_models import ImportSpecError
from ..models.issue_record import ImportIssue
from ..services.import_spec import build_import_spec
from ..services.importer import import_acset
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- load .env, then the YAML import config
- import the workbook into an acset
- optionally write the acset as JSON
- log one SUMMARY line, write the issue log if anything went wrong
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2  # imported, but some homs were skipped

DEFAULT_CONFIG = Path("config/import.yml")
CONFIG_ENV = "XLSX_ACSET_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="xlsx-acset", description="Excel workbook -> acset importer")
    p.add_argument("workbook", type=Path, help="Path to the .xlsx workbook")
    p.add_argument("--config", type=Path, default=None,
                   help=f"Import config (default: ${CONFIG_ENV} or {DEFAULT_CONFIG})")
    p.add_argument("--output", type=Path, default=None, help="Write the imported acset as JSON")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--progress", action="store_true", help="Show progress bars (TTY only)")
    p.add_argument("--inspect-data", action="store_true",
                   help="Print each mapped sheet's header & first rows then exit")
    return p.parse_args(argv)


def _resolve_config_path(arg: Path | None) -> Path:
    if arg is not None:
        return arg
    env = os.getenv(CONFIG_ENV)
    return Path(env) if env else DEFAULT_CONFIG


def _inspect_data(cfg: ImportConfig, workbook_path: Path) -> int:
    logger = get_logger()
    try:
        spec = build_import_spec(cfg.schema, cfg.tables)
        workbook = open_workbook(workbook_path)
    except (ImportSpecError, WorkbookFormatError) as e:
        logger.error(f"inspect: {type(e).__name__}: {e}")
        return EXIT_FATAL
    try:
        for ob in cfg.schema.obs:
            table_spec = spec[ob]
            try:
                sheet = get_sheet(workbook, table_spec.sheet_for(ob))
                table = read_table(
                    workbook,
                    sheet,
                    column_range=table_spec.column_range,
                    first_row=table_spec.first_row,
                    null_sentinels=cfg.null_sentinels,
                )
            except (LookupError, ValueError) as e:
                print(f"OB: {ob} error={e}")
                continue
            print(f"OB: {ob} sheet={sheet} header_row={table.header_row} cols={table.columns}")
            sample = table.frame.head(3).to_dict(orient="records")
            safe_rows = [
                {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in r.items()}
                for r in sample
            ]
            print("    sample_rows=", safe_rows)
    finally:
        workbook.close()
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an empty list must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    config_path = _resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not args.workbook.exists():
        logger.error(f"workbook not found: {args.workbook}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg, args.workbook)

    logger.info(f"Importing {args.workbook.name} with {config_path}")
    issues = IssueLogBuffer()
    try:
        result = import_acset(
            args.workbook,
            cfg.schema,
            cfg.tables,
            null_sentinels=cfg.null_sentinels,
            show_progress=args.progress,
        )
    except Exception as e:
        logger.error(f"import: {type(e).__name__}: {e}")
        issues.append(ImportIssue.create(
            source=args.workbook.name,
            ob="<WORKBOOK>",
            name="",
            issue_type="IMPORT_ERROR",
            message=f"{type(e).__name__}: {e}",
        ))
        path = issues.flush()
        logger.info(f"issue log: {path}")
        return EXIT_FATAL

    for s in result.skipped_homs:
        issues.append(ImportIssue.create(
            source=args.workbook.name,
            ob=s.source,
            name=s.hom,
            issue_type="SKIPPED_HOM",
            message=s.reason,
        ))
    path = issues.flush()
    if path is not None:
        logger.info(f"issue log: {path}")

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(
            json.dumps(result.acset.to_dict(), ensure_ascii=False, indent=2, default=str),
            encoding="utf-8",
        )
        logger.info(f"wrote {args.output}")

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    return EXIT_SUCCESS if result.complete else EXIT_PARTIAL
