import pytest

from specvalidate.helpers import Kind
from specvalidate.object_validator import ObjectValidator
from specvalidate.options import SchemaValidatorOptions
from specvalidate.result import FieldKey


def items_fixture():
    return {"type": "array", "items": "dummy"}


def expect_all_valid(validator, valid, invalid):
    assert len(validator.validate(valid).errors) == 0
    assert len(validator.validate(invalid).errors) == 0


def expect_only_invalid(validator, valid, invalid):
    assert len(validator.validate(valid).errors) == 0
    assert len(validator.validate(invalid).errors) != 0


def test_items_must_be_type_array():
    validator = ObjectValidator()
    invalid = {"type": "object", "items": "dummy"}
    expect_all_valid(validator, items_fixture(), invalid)
    validator.options.enable_object_array_type_check = True
    expect_only_invalid(validator, items_fixture(), invalid)


def test_items_must_have_type():
    validator = ObjectValidator()
    invalid = {"items": "dummy"}
    expect_all_valid(validator, items_fixture(), invalid)
    validator.options.enable_object_array_type_check = True
    expect_only_invalid(validator, items_fixture(), invalid)


def test_type_array_must_have_items():
    validator = ObjectValidator()
    invalid = {"type": "array", "key": "dummy"}
    expect_all_valid(validator, items_fixture(), invalid)
    validator.options.enable_array_must_have_items_check = True
    expect_only_invalid(validator, items_fixture(), invalid)


def test_array_must_have_items_message():
    validator = ObjectValidator(
        path="x", options=SchemaValidatorOptions(enable_array_must_have_items_check=True)
    )
    res = validator.validate({"type": "array"})
    assert [str(e) for e in res.errors] == ["items in x is required"]


def test_items_type_check_skipped_under_properties_path():
    validator = ObjectValidator(
        path="a.properties",
        options=SchemaValidatorOptions(enable_object_array_type_check=True),
    )
    assert validator.validate({"type": "object", "items": "dummy"}).is_valid()


def test_too_few_properties():
    res = ObjectValidator(path="obj", in_="body", min_properties=2).validate({"a": 1})
    assert [str(e) for e in res.errors] == ["obj in body should have at least 2 properties"]


def test_too_many_properties():
    res = ObjectValidator(path="obj", in_="body", max_properties=1).validate({"a": 1, "b": 2})
    assert [str(e) for e in res.errors] == ["obj in body should have at most 1 properties"]


def test_forbidden_property_and_ignored_keys():
    validator = ObjectValidator(path="obj", in_="body", additional_properties=False)
    res = validator.validate({"extra": 1, "$schema": "s", "id": "i"})
    assert [str(e) for e in res.errors] == ["obj.extra in body is a forbidden property"]


def test_ref_in_headers_reported_as_important():
    validator = ObjectValidator(path="resp", additional_properties=False)
    res = validator.validate({"headers": {"X-Rate": {"$ref": "#/definitions/h"}}})
    assert len(res.errors) == 2
    relevant = res.keep_relevant_errors()
    assert len(relevant.errors) == 1
    assert "$ref are not allowed in headers" in str(relevant.errors[0])
    assert '#/definitions/h"' in str(relevant.errors[0])


def test_missing_required_property():
    res = ObjectValidator(path="obj", in_="body", required=["name"]).validate({})
    assert [str(e) for e in res.errors] == ["obj.name in body is required"]


def test_required_satisfied_by_default():
    schema = {"default": "x"}
    data = {}
    res = ObjectValidator(properties={"name": schema}, required=["name"]).validate(data)
    assert res.is_valid()
    assert res.field_schemata()[FieldKey(data, "name")] == [schema]


def test_applies():
    validator = ObjectValidator()
    assert validator.applies({}, Kind.MAP) is True
    assert validator.applies({}, Kind.STRING) is False
    assert validator.applies("schema", Kind.MAP) is False


def test_validate_rejects_non_dict():
    with pytest.raises(TypeError):
        ObjectValidator().validate(["a"])