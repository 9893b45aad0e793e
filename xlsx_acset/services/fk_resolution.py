from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..models.config_models import ImportSpec
from ..models.import_result import SkippedHom
from ..store.acset import ACSet
from ..store.schema import Schema

"""Foreign key resolution for homs.

A hom column holds raw primary-key values of the target object type. Each
value is looked up through the store's incident index on the target's primary
key attribute and replaced by the single matching part.

- Target without a primary key: the hom is skipped (caller warns)
- Zero or several matching parts: ForeignKeyError, the import fails

Key uniqueness is only checked for values that are actually referenced.
"""


class ForeignKeyError(Exception):
    """Raised when a foreign key value matches no part or several parts."""


@dataclass(frozen=True)
class ForeignKeyMap:
    """How one hom column is resolved."""
    hom: str
    source: str
    target: str
    column: str  # header text in the source sheet
    primary_key: str  # attribute of the target used for lookup


def build_foreign_key_maps(
    schema: Schema, spec: ImportSpec, ob: str
) -> tuple[list[ForeignKeyMap], list[SkippedHom]]:
    """Split the homs out of ``ob`` into resolvable maps and skipped homs.

    Returns
    -------
    (maps, skipped): maps in schema order; skipped homs whose target has no
    primary key configured
    """
    maps: list[ForeignKeyMap] = []
    skipped: list[SkippedHom] = []
    table_spec = spec[ob]
    for hom in schema.homs_from(ob):
        pk = spec.primary_key(hom.target)
        if pk is None:
            skipped.append(SkippedHom(hom=hom.name, source=ob, target=hom.target))
            continue
        maps.append(ForeignKeyMap(
            hom=hom.name,
            source=ob,
            target=hom.target,
            column=table_spec.column_for(hom.name),
            primary_key=pk,
        ))
    return maps, skipped


def lookup_part(acs: ACSet, fk_map: ForeignKeyMap, value: Any) -> int:
    """Return the only part of the target whose primary key equals ``value``."""
    matches = acs.incident(fk_map.target, fk_map.primary_key, value)
    if len(matches) == 1:
        return matches[0]
    if not matches:
        raise ForeignKeyError(
            f"{fk_map.source}.{fk_map.hom}: no {fk_map.target} with "
            f"{fk_map.primary_key}={value!r}"
        )
    raise ForeignKeyError(
        f"{fk_map.source}.{fk_map.hom}: {fk_map.primary_key}={value!r} is ambiguous, "
        f"matches {fk_map.target} parts {matches}"
    )


def resolve_foreign_keys(acs: ACSet, fk_map: ForeignKeyMap, values: Sequence[Any]) -> list[int]:
    """Resolve a column of raw key values to target parts, row for row.

    Raises
    ------
    ForeignKeyError: if any value matches zero or several target parts
    """
    return [lookup_part(acs, fk_map, v) for v in values]
