from specvalidate.post.prune import prune
from specvalidate.result import Result

SCHEMA = {"type": "integer"}


def _child():
    child = Result()
    child.add_root_object_schemata(SCHEMA)
    return child


def test_prune_removes_unspecified_fields():
    inner = {"foo": 42, "bar": 42, "x": 42}
    nested = {"x": 42, "inner": inner}
    first = {"foo": 42, "bar": 123}
    second = {"x": 42, "y": 123}
    array = [first, second]
    x = {"foo": 42, "bar": 42, "x": 42, "nested": nested, "array": array}

    r = Result(data=x)
    r.add_property_schemata(x, "foo", SCHEMA)
    r.merge_for_field(x, "bar", _child())
    r.merge_for_field(x, "nested", _child())
    r.add_property_schemata(nested, "inner", SCHEMA)
    r.add_property_schemata(inner, "foo", SCHEMA)
    r.add_property_schemata(inner, "bar", SCHEMA)
    r.add_property_schemata(x, "array", SCHEMA)
    r.add_property_schemata(first, "foo", SCHEMA)
    assert not r.has_errors()

    prune(r)
    assert x == {
        "foo": 42,
        "bar": 42,
        "nested": {"inner": {"foo": 42, "bar": 42}},
        "array": [{"foo": 42}, {}],
    }


def test_prune_uses_object_identity():
    a = {"k": 1}
    b = {"k": 1}
    x = {"a": a, "b": b}
    r = Result(data=x)
    r.add_property_schemata(x, "a", SCHEMA)
    r.add_property_schemata(x, "b", SCHEMA)
    r.add_property_schemata(a, "k", SCHEMA)
    prune(r)
    assert x == {"a": {"k": 1}, "b": {}}


def test_prune_empties_object_without_schemata():
    x = {"a": 1, "b": {"c": 2}}
    prune(Result(data=x))
    assert x == {}


def test_prune_leaves_scalar_data_alone():
    r = Result(data=42)
    prune(r)
    assert r.data == 42


def test_prune_walks_top_level_list():
    obj = {"keep": 1, "drop": 2}
    data = [obj, 3]
    r = Result(data=data)
    r.add_property_schemata(obj, "keep", SCHEMA)
    prune(r)
    assert data == [{"keep": 1}, 3]