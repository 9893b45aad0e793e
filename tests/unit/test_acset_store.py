from __future__ import annotations

from datetime import date, datetime

import pytest

from xlsx_acset.store.acset import ACSet, AttributeTypeError, UnknownNameError
from xlsx_acset.store.schema import Hom, Schema


@pytest.fixture
def acs(pet_schema: Schema) -> ACSet:
    return ACSet(pet_schema)


def test_schema_from_dict_scopes_attributes_per_object(pet_schema: Schema):
    assert pet_schema.obs == ("Person", "Pet")
    assert pet_schema.attrs("Person") == ["name"]
    assert pet_schema.attrs("Pet") == ["name"]
    assert pet_schema.homs_from("Pet") == [Hom("owner", "Pet", "Person")]
    assert pet_schema.homs_from("Person") == []
    assert pet_schema.attr_type("Pet", "name") == "str"


def test_schema_accepts_null_object_entry():
    schema = Schema.from_dict({"Empty": None})
    assert schema.attrs("Empty") == []
    assert schema.to_dict() == {"Empty": {"attributes": {}, "homs": {}}}


def test_add_parts_is_contiguous(acs: ACSet):
    assert acs.add_parts("Person", 2) == range(0, 2)
    assert acs.add_parts("Person", 3) == range(2, 5)
    assert acs.add_parts("Person", 0) == range(5, 5)
    assert acs.nparts("Person") == 5
    assert acs.nparts("Pet") == 0
    assert acs.subpart("Person", 4, "name") is None


def test_add_parts_unknown_object(acs: ACSet):
    with pytest.raises(UnknownNameError):
        acs.add_parts("Dog", 1)


def test_set_subpart_is_row_aligned(acs: ACSet):
    parts = acs.add_parts("Person", 3)
    acs.set_subpart("Person", parts, "name", ["a", "b", "c"])
    assert acs.column("Person", "name") == ["a", "b", "c"]


def test_set_subpart_length_mismatch(acs: ACSet):
    parts = acs.add_parts("Person", 2)
    with pytest.raises(ValueError, match="got 1 values for 2 parts"):
        acs.set_subpart("Person", parts, "name", ["only one"])


def test_set_subpart_type_checked(acs: ACSet):
    parts = acs.add_parts("Person", 2)
    with pytest.raises(AttributeTypeError):
        acs.set_subpart("Person", parts, "name", ["Alice", 42])
    # None is always allowed
    acs.set_subpart("Person", parts, "name", ["Alice", None])
    assert acs.column("Person", "name") == ["Alice", None]


def test_numeric_and_date_types():
    schema = Schema.from_dict({"T": {"attributes": {
        "i": "int", "f": "float", "d": "date", "dt": "datetime", "x": "any",
    }}})
    acs = ACSet(schema)
    p = acs.add_parts("T", 1)
    acs.set_subpart("T", p, "f", [3])  # int is fine for float
    acs.set_subpart("T", p, "d", [date(2024, 1, 2)])
    acs.set_subpart("T", p, "dt", [datetime(2024, 1, 2, 3, 4)])
    acs.set_subpart("T", p, "x", [{"anything": 1}.get("anything")])
    with pytest.raises(AttributeTypeError):
        acs.set_subpart("T", p, "i", [True])
    with pytest.raises(AttributeTypeError):
        acs.set_subpart("T", p, "i", [1.5])
    with pytest.raises(AttributeTypeError):
        acs.set_subpart("T", p, "d", [datetime(2024, 1, 2)])


def test_incident_follows_overwrites(acs: ACSet):
    parts = acs.add_parts("Person", 3)
    acs.set_subpart("Person", parts, "name", ["Alice", "Bob", "Alice"])
    assert acs.incident("Person", "name", "Alice") == [0, 2]
    acs.set_subpart("Person", [2], "name", ["Carol"])
    assert acs.incident("Person", "name", "Alice") == [0]
    assert acs.incident("Person", "name", "Carol") == [2]
    assert acs.incident("Person", "name", "Nobody") == []


def test_hom_values_must_be_target_parts(acs: ACSet):
    acs.add_parts("Person", 1)
    pets = acs.add_parts("Pet", 2)
    with pytest.raises(IndexError):
        acs.set_subpart("Pet", pets, "owner", [0, 1])
    acs.set_subpart("Pet", pets, "owner", [0, None])
    assert acs.column("Pet", "owner") == [0, None]
    assert acs.incident("Pet", "owner", 0) == [0]


def test_unknown_subpart_name(acs: ACSet):
    parts = acs.add_parts("Person", 1)
    with pytest.raises(UnknownNameError):
        acs.set_subpart("Person", parts, "age", [1])
    with pytest.raises(UnknownNameError):
        acs.subpart("Person", 0, "age")


def test_to_dict_dumps_parts():
    schema = Schema.from_dict({
        "Person": {"attributes": {"name": "str", "born": "date"}},
        "Pet": {"homs": {"owner": "Person"}},
    })
    acs = ACSet(schema)
    people = acs.add_parts("Person", 1)
    acs.set_subpart("Person", people, "born", [date(1990, 5, 1)])
    pets = acs.add_parts("Pet", 1)
    acs.set_subpart("Pet", pets, "owner", [0])
    assert acs.to_dict() == {
        "Person": [{"name": None, "born": "1990-05-01"}],
        "Pet": [{"owner": 0}],
    }
    assert repr(acs) == "ACSet(Person=1, Pet=1)"
