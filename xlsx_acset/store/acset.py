from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from .schema import ATTRIBUTE_TYPES, Schema

"""In-memory acset: typed parts, attributes and homs for one schema.

Parts of each object type are zero-based integers assigned contiguously by
``add_parts``. Attribute and hom slots start out as ``None`` (unset). Every
attribute write keeps an inverse index current so ``incident`` lookups do not
scan the column.
"""

__all__ = [
    "ACSet",
    "AttributeTypeError",
    "UnknownNameError",
]


class UnknownNameError(KeyError):
    """Raised when an object type, attribute or hom is not in the schema."""


class AttributeTypeError(TypeError):
    """Raised when a value does not match the declared attribute type."""


class ACSet:
    def __init__(self, schema: Schema) -> None:
        self.schema = schema
        self._nparts: dict[str, int] = {ob: 0 for ob in schema.obs}
        self._attrs: dict[tuple[str, str], list[Any]] = {
            (ob, a): [] for ob in schema.obs for a in schema.attrs(ob)
        }
        self._homs: dict[tuple[str, str], list[int | None]] = {
            (ob, h.name): [] for ob in schema.obs for h in schema.homs_from(ob)
        }
        # (ob, attr) -> value -> parts carrying that value
        self._index: dict[tuple[str, str], dict[Any, set[int]]] = {
            key: {} for key in self._attrs
        }

    def __repr__(self) -> str:
        counts = ", ".join(f"{ob}={n}" for ob, n in self._nparts.items())
        return f"ACSet({counts})"

    def _check_ob(self, ob: str) -> None:
        if ob not in self._nparts:
            raise UnknownNameError(f"unknown object type: {ob!r}")

    def nparts(self, ob: str) -> int:
        self._check_ob(ob)
        return self._nparts[ob]

    def parts(self, ob: str) -> range:
        return range(self.nparts(ob))

    def add_parts(self, ob: str, n: int) -> range:
        """Create ``n`` new parts of ``ob`` and return their identities."""
        self._check_ob(ob)
        if n < 0:
            raise ValueError(f"cannot add a negative number of parts: {n}")
        start = self._nparts[ob]
        self._nparts[ob] = start + n
        for (owner, _), column in self._attrs.items():
            if owner == ob:
                column.extend([None] * n)
        for (owner, _), column in self._homs.items():
            if owner == ob:
                column.extend([None] * n)
        return range(start, start + n)

    def set_subpart(self, ob: str, parts: Sequence[int], name: str, values: Sequence[Any]) -> None:
        """Row-aligned bulk write: ``parts[i]`` receives ``values[i]``."""
        self._check_ob(ob)
        parts = list(parts)
        values = list(values)
        if len(parts) != len(values):
            raise ValueError(
                f"{ob}.{name}: got {len(values)} values for {len(parts)} parts"
            )
        for part in parts:
            if not 0 <= part < self._nparts[ob]:
                raise IndexError(f"{ob} has no part {part}")

        if (ob, name) in self._attrs:
            self._set_attr(ob, parts, name, values)
        elif (ob, name) in self._homs:
            self._set_hom(ob, parts, name, values)
        else:
            raise UnknownNameError(f"{ob} has no attribute or hom named {name!r}")

    def _set_attr(self, ob: str, parts: list[int], name: str, values: list[Any]) -> None:
        type_name = self.schema.attr_type(ob, name)
        accepted = ATTRIBUTE_TYPES.get(type_name)
        if accepted is not None:
            for value in values:
                if value is not None and not _matches(value, type_name, accepted):
                    raise AttributeTypeError(
                        f"{ob}.{name} expects {type_name}, got {type(value).__name__}: {value!r}"
                    )
        column = self._attrs[(ob, name)]
        index = self._index[(ob, name)]
        for part, value in zip(parts, values):
            old = column[part]
            if old is not None:
                index[old].discard(part)
                if not index[old]:
                    del index[old]
            column[part] = value
            if value is not None:
                index.setdefault(value, set()).add(part)

    def _set_hom(self, ob: str, parts: list[int], name: str, values: list[Any]) -> None:
        target = self.schema.homs[ob][name]
        limit = self._nparts[target]
        for value in values:
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < limit:
                raise IndexError(f"{ob}.{name}: {value!r} is not a part of {target}")
        column = self._homs[(ob, name)]
        for part, value in zip(parts, values):
            column[part] = value

    def subpart(self, ob: str, part: int, name: str) -> Any:
        self._check_ob(ob)
        if (ob, name) in self._attrs:
            return self._attrs[(ob, name)][part]
        if (ob, name) in self._homs:
            return self._homs[(ob, name)][part]
        raise UnknownNameError(f"{ob} has no attribute or hom named {name!r}")

    def column(self, ob: str, name: str) -> list[Any]:
        """All values of ``name`` for ``ob``, in part order."""
        return [self.subpart(ob, p, name) for p in self.parts(ob)]

    def incident(self, ob: str, name: str, value: Any) -> list[int]:
        """Parts of ``ob`` whose ``name`` equals ``value``, in part order."""
        self._check_ob(ob)
        if (ob, name) in self._index:
            return sorted(self._index[(ob, name)].get(value, ()))
        if (ob, name) in self._homs:
            return [p for p, v in enumerate(self._homs[(ob, name)]) if v == value]
        raise UnknownNameError(f"{ob} has no attribute or hom named {name!r}")

    def to_dict(self) -> dict[str, Any]:
        """Plain-data dump: ``{ob: [{name: value, ...}, ...]}``."""
        out: dict[str, Any] = {}
        for ob in self.schema.obs:
            names = self.schema.attrs(ob) + [h.name for h in self.schema.homs_from(ob)]
            out[ob] = [
                {name: _plain(self.subpart(ob, p, name)) for name in names}
                for p in self.parts(ob)
            ]
        return out


def _matches(value: Any, type_name: str, accepted: tuple[type, ...]) -> bool:
    # bool is an int subclass, datetime a date subclass
    if type_name in ("int", "float") and isinstance(value, bool):
        return False
    if type_name == "date" and hasattr(value, "hour"):
        return False
    return isinstance(value, accepted)


def _plain(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return value
