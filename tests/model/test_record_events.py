"""Tests for record-scoped subscriptions.

Critical Invariants:
- A record subscription only sees payloads equal to that record
- Destroying a record leaves no subscription behind on its type
"""

from corral import Model


def test_record_bind_filters_to_that_record(item_cls):
    pen = item_cls.create({"name": "Pen"})
    cup = item_cls.create({"name": "Cup"})
    updates = []
    pen.bind("update", lambda record, options: updates.append(record.name))

    item_cls.update(cup.id, {"name": "Mug"})
    item_cls.update(pen.id, {"name": "Quill"})

    assert updates == ["Quill"]


def test_record_bind_returns_record(item_cls):
    pen = item_cls.create({"name": "Pen"})

    assert pen.bind("update", print) is pen
    assert pen.one("update", print) is pen
    assert pen.unbind("update", print) is pen


def test_any_projection_of_same_record_matches(item_cls):
    """Subscriptions follow identity, not the object they were made through."""
    pen = item_cls.create({"name": "Pen"})
    calls = []
    pen.bind("custom", lambda record, value: calls.append(value))

    item_cls.find(pen.id).trigger("custom", 1)
    item_cls.find(pen.cid).trigger("custom", 2)

    assert calls == [1, 2]


def test_record_trigger_prepends_record(item_cls):
    pen = item_cls.create({"name": "Pen"})
    seen = []
    item_cls.bind("custom", lambda *args: seen.append(args))

    pen.trigger("custom", "a", "b")

    assert len(seen) == 1
    record, *rest = seen[0]
    assert record.equals(pen)
    assert rest == ["a", "b"]


def test_destroy_removes_record_subscriptions(item_cls):
    pen = item_cls.create({"name": "Pen"})
    destroyed = []
    pen.bind("update", lambda *args: None)
    pen.bind("destroy", lambda record, options: destroyed.append(record.name))

    item_cls.destroy(pen.id)

    assert destroyed == ["Pen"]
    assert item_cls.listeners("update") == ()
    assert item_cls.listeners("destroy") == ()
    assert item_cls.listeners("unbind") == ()


def test_destroy_leaves_other_records_subscribed(item_cls):
    pen = item_cls.create({"name": "Pen"})
    cup = item_cls.create({"name": "Cup"})
    cup_updates = []
    pen.bind("update", lambda *args: None)
    cup.bind("update", lambda record, options: cup_updates.append(record.name))

    item_cls.destroy(pen.id)
    item_cls.update(cup.id, {"name": "Mug"})

    assert cup_updates == ["Mug"]
    assert len(item_cls.listeners("update")) == 1


def test_record_one_fires_once(item_cls):
    pen = item_cls.create({"name": "Pen"})
    calls = []
    pen.one("update", lambda record, options: calls.append(record.name))

    item_cls.update(pen.id, {"name": "A"})
    item_cls.update(pen.id, {"name": "B"})

    assert calls == ["A"]
    assert item_cls.listeners("update") == ()
    assert item_cls.listeners("unbind") == ()


def test_record_unbind_by_callback(item_cls):
    pen = item_cls.create({"name": "Pen"})
    calls = []

    def on_update(record, options):
        calls.append("update")

    pen.bind("update", on_update)
    pen.unbind("update", on_update)
    item_cls.update(pen.id, {"name": "A"})

    assert calls == []
    assert item_cls.listeners("unbind") == ()


def test_record_unbind_without_arguments_triggers_unbind(item_cls):
    pen = item_cls.create({"name": "Pen"})
    unbinds = []
    item_cls.bind("unbind", lambda record: unbinds.append(record.cid))
    pen.bind("update", lambda *args: None)

    pen.unbind()

    assert unbinds == [pen.cid]
    assert item_cls.listeners("update") == ()


def test_record_binding_can_cancel_dispatch(item_cls):
    pen = item_cls.create({"name": "Pen"})
    later = []
    pen.bind("update", lambda *args: False)
    item_cls.bind("update", lambda *args: later.append(args))

    item_cls.update(pen.id, {"name": "A"})

    assert later == []


def test_equals_by_client_id_or_id(item_cls):
    first = item_cls({"name": "a"})
    second = item_cls({"name": "a"})
    same_cid = first.duplicate(new_record=False)
    same_cid.id = 99

    assert not first.equals(second)
    assert first.equals(same_cid)
    assert item_cls({"id": 1}).equals(item_cls({"id": 1}))
    assert not item_cls({"id": ""}).equals(item_cls({"id": ""}))


def test_equals_requires_same_type(item_cls):
    other_cls = Model.setup("Other", "name")
    record = item_cls()
    other = other_cls()
    other.cid = record.cid

    assert not record.equals(other)
    assert not record.equals(None)
    assert not record.equals({"cid": record.cid})


class UpdateCounter:
    def __init__(self):
        self.calls = 0

    def on_update(self, record, options):
        self.calls += 1


def test_record_unbind_accepts_fresh_bound_method(item_cls):
    pen = item_cls.create({"name": "Pen"})
    counter = UpdateCounter()
    pen.bind("update", counter.on_update)

    pen.unbind("update", counter.on_update)
    item_cls.update(pen.id, {"name": "A"})

    assert counter.calls == 0
    assert item_cls.listeners("update") == ()
    assert item_cls.listeners("unbind") == ()
