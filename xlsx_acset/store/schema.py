from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

"""Schema description for in-memory acsets.

A schema is plain data: object types, the attributes declared on each object
type, and homs (foreign keys) between object types. The import engine walks
it with ordinary iteration.
"""

__all__ = [
    "ATTRIBUTE_TYPES",
    "Hom",
    "Schema",
]

# Attribute type name -> accepted Python types (None = anything)
ATTRIBUTE_TYPES: dict[str, tuple[type, ...] | None] = {
    "any": None,
    "str": (str,),
    "int": (int,),
    "float": (int, float),
    "bool": (bool,),
    "date": (date,),
    "datetime": (datetime,),
}


@dataclass(frozen=True)
class Hom:
    """Foreign key from ``source`` to ``target``."""
    name: str
    source: str
    target: str


@dataclass(frozen=True)
class Schema:
    """Object types with their attributes and homs.

    ``attributes`` maps object type -> {attribute name: type name}; attribute
    names are scoped per object type. ``homs`` maps object type ->
    {hom name: target object type}.
    """
    obs: tuple[str, ...]
    attributes: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    homs: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Schema:
        """Build from ``{ob: {"attributes": {...}, "homs": {...}}}``."""
        obs = tuple(data.keys())
        attributes = {ob: dict((data[ob] or {}).get("attributes") or {}) for ob in obs}
        homs = {ob: dict((data[ob] or {}).get("homs") or {}) for ob in obs}
        return cls(obs=obs, attributes=attributes, homs=homs)

    def attrs(self, ob: str) -> list[str]:
        return list(self.attributes.get(ob, {}).keys())

    def attr_type(self, ob: str, attr: str) -> str:
        return self.attributes.get(ob, {}).get(attr, "any")

    def homs_from(self, ob: str) -> list[Hom]:
        return [Hom(name, ob, target) for name, target in self.homs.get(ob, {}).items()]

    def has_attr(self, ob: str, name: str) -> bool:
        return name in self.attributes.get(ob, {})

    def has_hom(self, ob: str, name: str) -> bool:
        return name in self.homs.get(ob, {})

    def to_dict(self) -> dict[str, Any]:
        return {
            ob: {
                "attributes": dict(self.attributes.get(ob, {})),
                "homs": dict(self.homs.get(ob, {})),
            }
            for ob in self.obs
        }
