from types import SimpleNamespace

import pytest

from specvalidate.formats import (
    DEFAULT_FORMATS,
    FormatRegistry,
    FormatValidator,
    format_of,
)
from specvalidate.helpers import Kind


def test_format_validator_applies_edge_cases():
    v = FormatValidator(known_formats=DEFAULT_FORMATS)
    parameter = {"type": "string", "format": "email"}
    schema = {"type": "string", "format": "uuid"}
    items = SimpleNamespace(type="string", format="datetime")
    for source in (parameter, schema, items):
        assert v.applies(source, Kind.STRING) is True
        assert v.applies(source, Kind.INT) is False
    assert v.applies("A string", Kind.STRING) is False
    assert v.applies(None, Kind.STRING) is False


def test_applies_false_for_unknown_format():
    v = FormatValidator()
    assert v.applies({"format": "no-such-format"}, Kind.STRING) is False


@pytest.mark.parametrize(
    "format_name, value",
    [
        ("datetime", "1970-01-01T00:00:00.000Z"),
        ("uuid", "00000000-0000-0000-0000-000000000000"),
        ("email", "someone@example.com"),
        ("bsonobjectid", "60a7903427a1e6666d2b998c"),
        ("date", "2020-02-29"),
        ("ipv4", "192.0.2.1"),
        ("ipv6", "::1"),
        ("hostname", "www.example.com"),
        ("uri", "https://example.com/a"),
        ("byte", "aGVsbG8="),
        ("hexcolor", "#ff0000"),
        ("rgbcolor", "rgb(1, 2, 3)"),
        ("isbn10", "0306406152"),
        ("isbn13", "9780306406157"),
        ("uuid4", "123e4567-e89b-42d3-a456-426614174000"),
        ("duration", "3 days"),
        ("password", "password"),
    ],
)
def test_valid_strings(format_name, value):
    assert format_of("id", "body", format_name, value, DEFAULT_FORMATS) is None


@pytest.mark.parametrize(
    "format_name, value",
    [
        ("datetime", "not a date"),
        ("date", "2021-02-30"),
        ("uuid", "nope"),
        ("email", "no-at-sign"),
        ("bsonobjectid", "xyz"),
        ("ipv4", "300.1.1.1"),
        ("byte", "!!!"),
        ("rgbcolor", "rgb(256, 0, 0)"),
        ("isbn10", "0306406153"),
        ("uuid4", "123e4567-e89b-12d3-a456-426614174000"),
    ],
)
def test_invalid_strings(format_name, value):
    err = format_of("id", "body", format_name, value, DEFAULT_FORMATS)
    assert str(err) == f'id in body must be of type {format_name}: "{value}"'


def test_unknown_format():
    err = format_of("id", "body", "mystery", "x", DEFAULT_FORMATS)
    assert str(err) == "mystery is an invalid type name"


def test_validator_validate():
    v = FormatValidator(format="uuid", path="id", in_="body")
    assert v.validate("00000000-0000-0000-0000-000000000000") is None
    res = v.validate("nope")
    assert res.has_errors()
    assert [str(e) for e in res.errors] == ['id in body must be of type uuid: "nope"']


def test_validator_rejects_non_string():
    with pytest.raises(TypeError):
        FormatValidator(format="uuid").validate(12)


def test_registry_add_and_normalized_names():
    registry = FormatRegistry()
    assert registry.add("even-digits", lambda s: s.isdigit() and len(s) % 2 == 0) is True
    assert registry.add("even_digits", lambda s: s.isdigit()) is False
    assert registry.contains_name("EvenDigits")
    assert "evendigits" in registry
    assert registry.validates("even-digits", "123") is True
    assert registry.validates("unknown", "123") is False
    assert format_of("x", "", "even-digits", "ab", registry) is not None
    assert str(format_of("x", "", "even-digits", "ab", registry)) == (
        'x must be of type even-digits: "ab"'
    )