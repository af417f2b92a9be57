"""Tests for type-level lookups on Model.

Critical Invariants:
- Finders return projections, never the stored records
- find raises, exists probes
"""

import pytest

from corral import Model, RecordStore, UnconfiguredModelError, UnknownRecordError


def test_find_by_id_returns_attributes(item_cls):
    pen = item_cls.create({"name": "Pen", "price": 1})

    found = item_cls.find(pen.id)

    assert found.attributes() == {"name": "Pen", "price": 1, "id": pen.cid}


def test_find_falls_back_to_client_id(item_cls):
    pen = item_cls.create({"id": 5, "name": "Pen"})

    assert item_cls.find(pen.cid).id == 5
    assert item_cls.find_cid(pen.cid).id == 5


def test_find_missing_raises_unknown_record(item_cls):
    with pytest.raises(UnknownRecordError, match='"Item" model could not find a record for the ID "42"'):
        item_cls.find(42)


def test_unknown_record_is_a_lookup_error(item_cls):
    with pytest.raises(LookupError):
        item_cls.find("c-404")
    with pytest.raises(LookupError):
        item_cls.find_cid("c-404")


def test_client_id_fallback_follows_store_prefix():
    """Only keys with the store's own prefix are searched as client ids."""

    class Thing(Model):
        pass

    Thing.configure("Thing", "name", storage=RecordStore(prefix="tmp-"))
    record = Thing.create({"id": 1, "name": "x"})

    assert record.cid.startswith("tmp-")
    assert Thing.find(record.cid).id == 1
    assert not Thing.exists("c-0")


def test_exists_probes_without_raising(item_cls):
    pen = item_cls.create({"name": "Pen"})

    assert item_cls.exists(pen.id) is True
    assert item_cls.exists("nope") is False


def test_projection_writes_do_not_leak(item_cls):
    pen = item_cls.create({"name": "Pen", "price": 1})

    found = item_cls.find(pen.id)
    found.name = "Changed"
    found.price = 100

    again = item_cls.find(pen.id)
    assert again.name == "Pen"
    assert again.price == 1
    assert found is not again


def test_created_projection_is_isolated_from_store(item_cls):
    pen = item_cls.create({"name": "Pen"})

    pen.name = "Local"

    assert item_cls.find(pen.id).name == "Pen"


def test_all_first_last_count(item_cls):
    assert item_cls.all() == []
    assert item_cls.first() is None
    assert item_cls.last() is None
    assert item_cls.count() == 0

    for name in ("a", "b", "c"):
        item_cls.create({"name": name})

    assert [record.name for record in item_cls.all()] == ["a", "b", "c"]
    assert [record.name for record in item_cls.records_values()] == ["a", "b", "c"]
    assert item_cls.first().name == "a"
    assert item_cls.last().name == "c"
    assert item_cls.count() == 3


def test_select_predicate_receives_projections(item_cls):
    for price in (1, 5, 10):
        item_cls.create({"name": f"n{price}", "price": price})

    def expensive(record):
        record.price = 0
        return record.name != "n1"

    selected = item_cls.select(expensive)

    assert [record.name for record in selected] == ["n5", "n10"]
    assert sorted(record.price for record in item_cls.all()) == [1, 5, 10]


def test_find_by_attribute(item_cls):
    item_cls.create({"name": "a", "price": 2})
    item_cls.create({"name": "b", "price": 2})

    assert item_cls.find_by_attribute("price", 2).name == "a"
    assert item_cls.find_by_attribute("price", 3) is None
    assert [record.name for record in item_cls.find_all_by_attribute("price", 2)] == ["a", "b"]


def test_each_visits_projections_in_order(item_cls):
    for name in ("a", "b"):
        item_cls.create({"name": name})
    seen = []

    item_cls.each(lambda record: seen.append(record.name))

    assert seen == ["a", "b"]


def test_unconfigured_model_fails_loudly():
    class Bare(Model):
        pass

    with pytest.raises(UnconfiguredModelError):
        Bare.find(1)
    with pytest.raises(UnconfiguredModelError):
        Bare()


def test_subclass_of_configured_model_needs_its_own_store(item_cls):
    class Special(item_cls):
        pass

    with pytest.raises(UnconfiguredModelError):
        Special.count()

    Special.configure("Special", "name")
    Special.create({"name": "s"})

    assert Special.count() == 1
    assert item_cls.count() == 0


def test_minted_client_ids_skip_used_ids(item_cls):
    item_cls.refresh([{"id": "c-0"}, {"id": "c-1"}], clear=True)

    cid = item_cls.mint_client_id()

    assert cid not in {"c-0", "c-1"}
    assert cid.startswith("c-")
