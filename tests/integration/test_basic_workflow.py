"""Integration tests for end-to-end store workflows."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from corral import Model, UnknownRecordError

_names = st.text(min_size=1, max_size=12)
_prices = st.integers(min_value=0, max_value=10_000)


def test_item_lifecycle_scenario(item_cls):
    """Create, find by client id, destroy, then probe."""
    pen = item_cls.create({"name": "Pen", "price": 1})
    cid = pen.cid

    assert item_cls.find(cid).attributes() == {"name": "Pen", "price": 1, "id": cid}

    item_cls.destroy(pen.id)

    with pytest.raises(UnknownRecordError):
        item_cls.find(pen.id)
    assert item_cls.exists(pen.id) is False


def test_unsaved_records_compare_by_client_id(item_cls):
    first = item_cls({"name": "a"})
    second = item_cls({"name": "a"})

    assert first.id is None and second.id is None
    assert not first.equals(second)

    twin = first.duplicate(new_record=False)
    twin.id = "server-1"
    assert first.equals(twin)


def test_observer_sees_every_change_once(item_cls):
    """A single change subscription tracks a whole editing session."""
    log = []
    item_cls.change(lambda record, tag, options: log.append((tag, record.name)))

    pen = item_cls.create({"name": "Pen", "price": 1})
    draft = item_cls.find(pen.id)
    draft.name = "Quill"
    draft.save()
    item_cls.destroy(pen.id)

    assert log == [("create", "Pen"), ("update", "Quill"), ("destroy", "Quill")]


def test_record_subscription_lives_until_destroy(item_cls):
    pen = item_cls.create({"name": "Pen"})
    seen = []
    pen.bind("update destroy", lambda record, options: seen.append(record.name))

    item_cls.update(pen.id, {"name": "A"})
    item_cls.destroy(pen.id)
    item_cls.create({"name": "B"}).save()

    assert seen == ["A", "A"]
    for name in ("update", "destroy", "unbind"):
        assert item_cls.listeners(name) == ()


@given(
    rows=st.lists(
        st.fixed_dictionaries({"name": _names, "price": _prices}),
        min_size=1,
        max_size=10,
    )
)
def test_create_then_find_returns_same_attributes(rows):
    """PROPERTY: find(create(A).id) has A's attributes plus the generated id."""
    Item = Model.setup("Item", "name", "price")

    for row in rows:
        item_id = Item.create(row).id
        assert Item.find(item_id).attributes() == {**row, "id": item_id}

    assert Item.count() == len(rows)


@given(
    rows=st.lists(
        st.fixed_dictionaries({"name": _names, "price": _prices}),
        max_size=10,
    )
)
def test_serialize_then_refresh_reproduces_records(rows):
    """PROPERTY: to_json followed by refresh into an empty store round-trips."""
    Source = Model.setup("Item", "name", "price")
    Target = Model.setup("Item", "name", "price")
    for row in rows:
        Source.create(row)

    Target.refresh(Source.to_json())

    expected = {record.id: record.attributes() for record in Source.all()}
    actual = {record.id: record.attributes() for record in Target.all()}
    assert actual == expected


@given(edits=st.lists(_names, min_size=1, max_size=5))
def test_projection_edits_never_reach_store(edits):
    """PROPERTY: unsaved writes on projections leave later finds unchanged."""
    Item = Model.setup("Item", "name", "price")
    pen = Item.create({"name": "Pen", "price": 1})

    for name in edits:
        Item.find(pen.id).name = name

    assert Item.find(pen.id).attributes() == {"name": "Pen", "price": 1, "id": pen.id}
