import pytest

from specvalidate.messages import CompositeError
from specvalidate.result import FieldKey, ItemKey, Result


def _messages(items):
    return [str(e) for e in items]


def test_add_error_uniqueness():
    r = Result()
    r.add_errors(ValueError("one error"))
    r.add_errors(ValueError("another error"))
    r.add_errors(ValueError("one error"))
    r.add_errors(ValueError("one error"))
    r.add_errors(ValueError("one error"))
    r.add_errors(ValueError("one error"), ValueError("another error"))
    assert len(r.errors) == 2
    assert "one error" in _messages(r.errors)
    assert "another error" in _messages(r.errors)


def test_add_nil_error():
    r = Result()
    r.add_errors(None)
    assert len(r.errors) == 0
    r.add_errors(ValueError("one Error"), None, ValueError("another error"))
    assert len(r.errors) == 2


def test_add_warnings():
    r = Result()
    r.add_errors(ValueError("one Error"))
    assert len(r.errors) == 1
    assert len(r.warnings) == 0
    r.add_warnings(ValueError("one Warning"))
    assert len(r.errors) == 1
    assert len(r.warnings) == 1


def test_merge():
    r = Result()
    r.add_errors(ValueError("one Error"))
    r.add_warnings(ValueError("one Warning"))
    r.inc()
    assert len(r.errors) == 1
    assert len(r.warnings) == 1
    assert r.match_count == 1

    r2 = Result()
    r2.add_errors(ValueError("one Error"))
    r2.add_warnings(ValueError("one Warning"))
    r2.inc()
    r.merge(r2)
    assert len(r.errors) == 1
    assert len(r.warnings) == 1
    assert r.match_count == 2

    r3 = Result()
    r3.add_errors(ValueError("new Error"))
    r3.add_warnings(ValueError("new Warning"))
    r3.inc()
    r.merge(r3)
    assert len(r.errors) == 2
    assert len(r.warnings) == 2
    assert r.match_count == 3


def test_merge_skips_none():
    r = Result()
    r.inc()
    assert r.merge(None) is r
    assert r.match_count == 1


def _error_fixture():
    r = Result()
    r.add_errors(ValueError("one Error"))
    r.add_warnings(ValueError("one Warning"))
    r.inc()
    r2 = Result()
    r2.add_errors(ValueError("one Error"))
    r2.add_warnings(ValueError("one Warning"))
    r2.inc()
    r3 = Result()
    r3.add_errors(ValueError("new Error"))
    r3.add_warnings(ValueError("new Warning"))
    r3.inc()
    return r, r2, r3


def test_merge_as_errors():
    r, r2, r3 = _error_fixture()
    assert len(r.errors) == 1
    assert len(r.warnings) == 1
    assert r.match_count == 1
    r.merge_as_errors(r2, r3)
    assert len(r.errors) == 4
    assert len(r.warnings) == 1
    assert r.match_count == 3


def test_merge_as_warnings():
    r, r2, r3 = _error_fixture()
    r.merge_as_warnings(r2, r3)
    assert len(r.errors) == 1
    assert len(r.warnings) == 4
    assert r.match_count == 3


def test_is_valid():
    r = Result()
    assert r.is_valid()
    assert not r.has_errors()
    r.add_warnings(ValueError("one Warning"))
    assert r.is_valid()
    assert not r.has_errors()
    r.add_errors(ValueError("one Error"))
    assert not r.is_valid()
    assert r.has_errors()


def test_has_warnings():
    r = Result()
    assert not r.has_warnings()
    r.add_errors(ValueError("one Error"))
    assert not r.has_warnings()
    r.add_warnings(ValueError("one Warning"))
    assert r.has_warnings()


def test_has_errors_or_warnings():
    r = Result()
    r2 = Result()
    assert not r.has_errors_or_warnings()
    r.add_errors(ValueError("one Error"))
    assert r.has_errors_or_warnings()
    r2.add_warnings(ValueError("one Warning"))
    assert r2.has_errors_or_warnings()
    r.merge(r2)
    assert r.has_errors_or_warnings()


def test_keep_relevant_errors():
    r = Result()
    r.add_errors(ValueError("one Error"))
    r.add_errors(ValueError("IMPORTANT!Another Error"))
    r.add_warnings(ValueError("one warning"))
    r.add_warnings(ValueError("IMPORTANT!Another warning"))
    kept = r.keep_relevant_errors()
    assert _messages(kept.errors) == ["Another Error"]
    assert _messages(kept.warnings) == ["Another warning"]
    assert len(r.errors) == 2


def test_as_error():
    r = Result()
    assert r.as_error() is None
    r.add_errors(ValueError("one Error"))
    r.add_errors(ValueError("additional Error"))
    err = r.as_error()
    assert isinstance(err, CompositeError)
    text = str(err)
    assert "validation failure list:" in text
    assert "one Error" in text
    assert "additional Error" in text


def test_root_object_schemata_merge():
    a = {"type": "string"}
    b = {"type": "integer"}
    r = Result()
    r.add_root_object_schemata(a)
    other = Result()
    other.add_root_object_schemata(b)
    r.merge(other)
    assert r.root_object_schemata() == [a, b]


def test_merge_for_field_records_root_schemata():
    schema = {"type": "integer"}
    obj = {"n": 1}
    child = Result()
    child.add_root_object_schemata(schema)
    r = Result()
    r.merge_for_field(obj, "n", child)
    fields = r.field_schemata()
    assert fields[FieldKey(obj, "n")] == [schema]
    assert r.root_object_schemata() == []


def test_merge_for_field_without_schemata_records_nothing():
    obj = {"n": 1}
    r = Result()
    r.merge_for_field(obj, "n", Result(errors=[ValueError("bad")]))
    assert r.field_schemata() == {}
    assert _messages(r.errors) == ["bad"]


def test_field_keys_compare_by_identity():
    schema = {"default": 1}
    first = {}
    second = {}
    r = Result()
    r.add_property_schemata(first, "a", schema)
    fields = r.field_schemata()
    assert FieldKey(first, "a") in fields
    assert FieldKey(second, "a") not in fields


def test_field_schemata_accumulate_and_cache_resets():
    s1 = {"type": "integer"}
    s2 = {"minimum": 0}
    obj = {}
    r = Result()
    r.add_property_schemata(obj, "x", s1)
    assert r.field_schemata()[FieldKey(obj, "x")] == [s1]
    r.add_property_schemata(obj, "x", s2)
    assert r.field_schemata()[FieldKey(obj, "x")] == [s1, s2]


def test_field_schemata_propagate_through_merge():
    schema = {"type": "string"}
    obj = {}
    inner = Result()
    inner.add_property_schemata(obj, "name", schema)
    outer = Result()
    outer.merge(inner)
    assert outer.field_schemata()[FieldKey(obj, "name")] == [schema]


def test_merge_for_slice():
    schema = {"type": "integer"}
    items = [1, 2]
    child = Result()
    child.add_root_object_schemata(schema)
    r = Result()
    r.merge_for_slice(items, 1, child)
    found = r.item_schemata()
    assert found == {ItemKey(items, 1): [schema]}
    assert ItemKey(items, 0) not in found
    assert ItemKey([1, 2], 1) not in found


@pytest.mark.parametrize("method", ["merge", "merge_as_errors", "merge_as_warnings"])
def test_merges_return_self(method):
    r = Result()
    assert getattr(r, method)(Result(match_count=2)) is r
    assert r.match_count == 2