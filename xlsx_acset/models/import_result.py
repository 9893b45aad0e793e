from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..store.acset import ACSet

"""Result models for one workbook import.

Aggregates per-object-type statistics and the homs that could not be resolved
because their target has no primary key.
"""


@dataclass(frozen=True)
class SkippedHom:
    """A hom left unset because its target object type has no primary key."""
    hom: str
    source: str
    target: str

    @property
    def reason(self) -> str:
        return f"primary key not set for {self.target}"


@dataclass(frozen=True)
class ObStat:
    """Per-object-type import statistics."""
    ob: str
    sheet: str  # resolved sheet name
    parts: int  # parts allocated (= data rows)
    attributes: int  # attribute columns written
    homs: int  # homs resolved
    skipped_homs: int = 0


@dataclass
class ImportResult:
    """Everything an import produced.

    The store is populated in place; ``skipped_homs`` lists relations that were
    left unset, in the order they were encountered.
    """
    acset: ACSet
    start_time: datetime
    end_time: datetime | None = None
    ob_stats: list[ObStat] = field(default_factory=list)
    skipped_homs: list[SkippedHom] = field(default_factory=list)

    @property
    def elapsed_seconds(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

    @property
    def total_parts(self) -> int:
        return sum(s.parts for s in self.ob_stats)

    @property
    def total_attributes(self) -> int:
        return sum(s.attributes for s in self.ob_stats)

    @property
    def total_homs(self) -> int:
        return sum(s.homs for s in self.ob_stats)

    @property
    def complete(self) -> bool:
        """True when every hom in the schema was resolved."""
        return not self.skipped_homs
