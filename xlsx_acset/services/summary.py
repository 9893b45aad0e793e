from __future__ import annotations

from ..models.import_result import ImportResult

"""SUMMARY line rendering for one import."""


def _format_number(value: float) -> str:
    # Integers without ".0", tiny values without scientific notation
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: ImportResult) -> str:
    """Render the SUMMARY line for ``result``.

    Format:
    SUMMARY obs={n} parts={n} attributes={n} homs={n} skipped_homs={n} elapsed_sec={x}

    Examples:
        >>> from datetime import datetime, timezone
        >>> from xlsx_acset.models.import_result import ObStat
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ImportResult(acset=None, start_time=start, end_time=end,
        ...     ob_stats=[ObStat("Person", "Person", 2, 1, 0)])
        >>> render_summary_line(result)
        'SUMMARY obs=1 parts=2 attributes=1 homs=0 skipped_homs=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY obs={len(result.ob_stats)} "
        f"parts={result.total_parts} "
        f"attributes={result.total_attributes} "
        f"homs={result.total_homs} "
        f"skipped_homs={len(result.skipped_homs)} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)}"
    )
