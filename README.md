# specvalidate

Validation of JSON data (as produced by `json.loads`) against JSON Schema
draft 4 schemas given as plain dicts, with the optional extra rules that
Swagger 2.0 places on schemas. It has no dependencies outside the standard
library.

## Installing

```
pip install .
```

## Validating data against a schema

```python
import json
from specvalidate.schema import against_schema

schema = json.loads("""
{
  "properties": {"name": {"type": "string", "pattern": "^[A-Za-z]+$", "minLength": 1}},
  "patternProperties": {"address-[0-9]+": {"type": "string", "pattern": "^[\\\\s|a-z]+$"}},
  "required": ["name"],
  "additionalProperties": false
}
""")

against_schema(schema, {"name": "Ivan", "address-1": "sesame street"})
```

`against_schema(schema, data, formats=None, *options)` returns `None` when the
data is valid and raises `specvalidate.messages.CompositeError` when it is
not; the exception's `errors` attribute holds every failure, each a
`specvalidate.messages.ValidationError` with a `code`, `name`, `in_`, `value`
and message.

For the full report, build a validator with `new_schema_validator` and call
`validate`; it returns a `specvalidate.result.Result`:

```python
from specvalidate.schema import new_schema_validator
from specvalidate.options import swagger_schema

validator = new_schema_validator(schema, None, "", None, swagger_schema(True))
result = validator.validate({"name": "Ivan"})
result.is_valid()
result.errors, result.warnings, result.match_count
```

The arguments are the schema, the root document against which `$ref` is
resolved (the schema itself when `None`), the path used in messages, the
format registry (the default one when `None`) and any options.
`new_schema_validator` returns `None` when the schema is `None`.

Supported keywords: `type` (with `nullable` or `x-nullable` allowing null),
`enum`, `allOf`, `anyOf`, `oneOf`, `not`, `dependencies`, `minLength`,
`maxLength`, `pattern`, `format`, `minimum`, `maximum`,
`exclusiveMinimum`, `exclusiveMaximum`, `multipleOf`, `items` (one schema or
a list), `additionalItems`, `minItems`, `maxItems`, `uniqueItems`,
`properties`, `patternProperties`, `additionalProperties`, `required`,
`minProperties` and `maxProperties`.

Numbers read as `decimal.Decimal` (for example with
`json.loads(text, parse_float=Decimal)`) are converted when the schema's type
is `integer` or `number`; a value that does not convert, such as a fraction
or an out-of-range value for `integer`, is reported as an invalid type
conversion.

### Options

From `specvalidate.options`:

- `enable_object_array_type_check(enable)`: an object holding `items` must have `type: array`.
- `enable_array_must_have_items_check(enable)`: an object with `type: array` must declare `items`.
- `swagger_schema(enable)`: both of the above.

## String formats

`specvalidate.formats.DEFAULT_FORMATS` is a `FormatRegistry` knowing `date`,
`date-time`, `password`, `byte`, `creditcard`, `duration`, `email`,
`hexcolor`, `hostname`, `ipv4`, `ipv6`, `isbn`, `isbn10`, `isbn13`, `mac`,
`bsonobjectid`, `rgbcolor`, `ssn`, `uri`, `uuid`, `uuid3`, `uuid4` and
`uuid5`. Names match ignoring case, dashes and underscores. Add your own with
`FormatRegistry.add(name, checker)`, where `checker` takes a string and returns
a bool. Formats a registry does not know are not checked by schema
validation. `format_of(path, in_, format_name, value, registry)` checks one
value and returns the error, or `None`.

## Results

A `Result` holds `errors`, `warnings` and `match_count`, and keeps each
message once. It can be combined with `merge`, `merge_as_errors` and
`merge_as_warnings`, queried with `is_valid`, `has_errors`, `has_warnings` and
`has_errors_or_warnings`, and turned into one exception with `as_error`.

It also remembers which schemas applied where: `root_object_schemata()`,
`field_schemata()` (keyed by `FieldKey`, an object and a field name) and
`item_schemata()` (keyed by `ItemKey`, a list and an index).

## Post-processing a result

Both functions modify the validated data in place:

- `specvalidate.post.defaulter.apply_defaults(result)` fills each missing field
  with the first default declared by a schema that applied to it.
- `specvalidate.post.prune.prune(result)` recursively removes every field that
  no schema describes.

## Debugging

Set the environment variable `SWAGGER_DEBUG` to any non-empty value before
import, or call `specvalidate.debug.set_debug(True)`, to log each validator's
decisions to standard output.

## What it does not do

- It validates data against schemas only. It does not load or check whole
  Swagger 2.0 documents: paths, operations, parameters, responses, headers,
  security definitions, default values and examples are not validated.
  `specvalidate.options.Opts`, `set_continue_on_errors` and `default_opts`
  hold settings for such checks, and `specvalidate.context` marks a context as
  request or response, but nothing in the package uses them yet.
- `$ref` is resolved only as a local JSON pointer (`#/...`) within the root
  document; any other reference, or one that points nowhere, raises
  `specvalidate.messages.InvalidSchemaError`.
- There is no command-line tool.