from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ImportIssue model for the JSON Lines issue log.

One record per skipped hom or fatal import error. ``name`` is the attribute,
hom or sheet the issue is about, or an empty string for workbook-level issues.
"""

__all__ = [
    "ImportIssue",
]


@dataclass(frozen=True)
class ImportIssue:
    """Structured issue record.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: workbook file name
        ob: object type, or "<WORKBOOK>" when no single object type applies
        name: attribute/hom/sheet involved ("" if none)
        issue_type: classification in UPPER_SNAKE_CASE
        message: human readable description
    """
    timestamp: str
    source: str
    ob: str
    name: str
    issue_type: str
    message: str

    @staticmethod
    def create(source: str, ob: str, name: str, issue_type: str, message: str) -> ImportIssue:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ImportIssue(
            timestamp=ts,
            source=source,
            ob=ob,
            name=name,
            issue_type=issue_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
