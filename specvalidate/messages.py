"""Validation errors and the messages reported by schema validation."""

from __future__ import annotations

import json
from typing import Any, Iterable

COMPOSITE_ERROR_CODE = 422
INTERNAL_ERROR_CODE = 500
INVALID_TYPE_CODE = 600
REQUIRED_FAIL_CODE = 601
UNIQUE_FAIL_CODE = 609
MAX_ITEMS_FAIL_CODE = 610
MIN_ITEMS_FAIL_CODE = 611
TOO_FEW_PROPERTIES_CODE = 613
TOO_MANY_PROPERTIES_CODE = 614
UNALLOWED_PROPERTY_CODE = 615
FAILED_ALL_PATTERN_PROPS_CODE = 616

ARRAY_DOES_NOT_ALLOW_ADDITIONAL_ITEMS_ERROR = "array doesn't allow for additional items"
HAS_DEPENDENCY_ERROR = "%s has a dependency on %s"
INVALID_SCHEMA_PROVIDED_ERROR = "Invalid schema provided to SchemaValidator: %s"
INVALID_TYPE_CONVERSION_ERROR = "invalid type conversion in %s: %s "
MUST_VALIDATE_AT_LEAST_ONE_SCHEMA_ERROR = "%s must validate at least one schema (anyOf)"
MUST_VALIDATE_ONLY_ONE_SCHEMA_ERROR = "%s must validate one and only one schema (oneOf). %s"
MUST_VALIDATE_ALL_SCHEMAS_ERROR = "%s must validate all the schemas (allOf)%s"
MUST_NOT_VALIDATE_SCHEMA_ERROR = "%s must not validate the schema (not)"
REF_NOT_ALLOWED_IN_HEADER_ERROR = (
    "IMPORTANT!in %s: $ref are not allowed in headers. In context for header %s%s"
)
CANNOT_RESOLVE_REFERENCE_ERROR = "could not resolve reference in %s to $ref %s: %s"

COMPOSITE_MESSAGE = "validation failure list"


def _quote(value: Any) -> str:
    """Quote a value the way a double-quoted string literal is written."""
    return json.dumps(str(value), ensure_ascii=False)


class ValidationError(Exception):
    """A single validation failure, with an error code and a message."""

    def __init__(
        self,
        message: str,
        *,
        code: int = COMPOSITE_ERROR_CODE,
        name: str = "",
        in_: str = "",
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.name = name
        self.in_ = in_
        self.value = value

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (self.code, str(self)) == (other.code, str(other))

    def __hash__(self) -> int:
        return hash((self.code, str(self)))


class CompositeError(ValidationError):
    """Several validation failures reported together."""

    def __init__(self, errors: Iterable[BaseException], message: str = COMPOSITE_MESSAGE) -> None:
        self.errors = tuple(errors)
        super().__init__(message, code=COMPOSITE_ERROR_CODE)

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        return "\n".join([self.message + ":", *(str(e) for e in self.errors)])


class InvalidSchemaError(ValidationError):
    """The schema given to a validator cannot be used."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=INTERNAL_ERROR_CODE)


def _with_in(with_in: str, without_in: str, in_: str, *args: Any) -> str:
    if in_:
        return with_in % (args[0], in_, *args[1:])
    return without_in % args


def invalid_schema_provided_msg(err: Any) -> InvalidSchemaError:
    return InvalidSchemaError(INVALID_SCHEMA_PROVIDED_ERROR % (err,))


def invalid_type_conversion_msg(path: str, err: Any) -> ValidationError:
    return ValidationError(INVALID_TYPE_CONVERSION_ERROR % (path, err))


def must_validate_only_one_schema_msg(path: str, additional_msg: str) -> ValidationError:
    return ValidationError(MUST_VALIDATE_ONLY_ONE_SCHEMA_ERROR % (_quote(path), additional_msg))


def must_validate_at_least_one_schema_msg(path: str) -> ValidationError:
    return ValidationError(MUST_VALIDATE_AT_LEAST_ONE_SCHEMA_ERROR % (_quote(path),))


def must_validate_all_schemas_msg(path: str, additional_msg: str) -> ValidationError:
    return ValidationError(MUST_VALIDATE_ALL_SCHEMAS_ERROR % (_quote(path), additional_msg))


def must_not_validate_schema_msg(path: str) -> ValidationError:
    return ValidationError(MUST_NOT_VALIDATE_SCHEMA_ERROR % (_quote(path),))


def has_a_dependency_msg(path: str, depkey: str) -> ValidationError:
    return ValidationError(HAS_DEPENDENCY_ERROR % (_quote(path), depkey))


def array_does_not_allow_additional_items_msg() -> ValidationError:
    return ValidationError(ARRAY_DOES_NOT_ALLOW_ADDITIONAL_ITEMS_ERROR)


def ref_not_allowed_in_header_msg(path: str, header: str, ref: str) -> ValidationError:
    return ValidationError(REF_NOT_ALLOWED_IN_HEADER_ERROR % (_quote(path), _quote(header), ref))


def cannot_resolve_ref_msg(path: str, ref: str, err: Any) -> ValidationError:
    return ValidationError(CANNOT_RESOLVE_REFERENCE_ERROR % (path, ref, err))


def required(name: str, in_: str, value: Any = None) -> ValidationError:
    message = _with_in("%s in %s is required", "%s is required", in_, name)
    return ValidationError(message, code=REQUIRED_FAIL_CODE, name=name, in_=in_, value=value)


def too_few_properties(name: str, in_: str, minimum: int) -> ValidationError:
    message = _with_in(
        "%s in %s should have at least %d properties",
        "%s should have at least %d properties",
        in_,
        name,
        minimum,
    )
    return ValidationError(
        message, code=TOO_FEW_PROPERTIES_CODE, name=name, in_=in_, value=minimum
    )


def too_many_properties(name: str, in_: str, maximum: int) -> ValidationError:
    message = _with_in(
        "%s in %s should have at most %d properties",
        "%s should have at most %d properties",
        in_,
        name,
        maximum,
    )
    return ValidationError(
        message, code=TOO_MANY_PROPERTIES_CODE, name=name, in_=in_, value=maximum
    )


def property_not_allowed(name: str, in_: str, key: str) -> ValidationError:
    if in_:
        message = "%s.%s in %s is a forbidden property" % (name, key, in_)
    else:
        message = "%s.%s is a forbidden property" % (name, key)
    return ValidationError(message, code=UNALLOWED_PROPERTY_CODE, name=name, in_=in_, value=key)


def invalid_type(name: str, in_: str, type_name: str, value: Any) -> ValidationError:
    prefix = f"{name} in {in_}" if in_ else name
    if isinstance(value, str):
        message = f"{prefix} must be of type {type_name}: {_quote(value)}"
    elif isinstance(value, BaseException):
        message = f"{prefix} must be of type {type_name}, because: {value}"
    else:
        message = f"{prefix} must be of type {type_name}"
    return ValidationError(message, code=INVALID_TYPE_CODE, name=name, in_=in_, value=value)


def too_few_items(name: str, in_: str, minimum: int, value: Any = None) -> ValidationError:
    message = _with_in(
        "%s in %s should have at least %d items",
        "%s should have at least %d items",
        in_,
        name,
        minimum,
    )
    return ValidationError(message, code=MIN_ITEMS_FAIL_CODE, name=name, in_=in_, value=value)


def too_many_items(name: str, in_: str, maximum: int, value: Any = None) -> ValidationError:
    message = _with_in(
        "%s in %s should have at most %d items",
        "%s should have at most %d items",
        in_,
        name,
        maximum,
    )
    return ValidationError(message, code=MAX_ITEMS_FAIL_CODE, name=name, in_=in_, value=value)


def duplicate_items(name: str, in_: str) -> ValidationError:
    message = _with_in(
        "%s in %s shouldn't contain duplicates", "%s shouldn't contain duplicates", in_, name
    )
    return ValidationError(message, code=UNIQUE_FAIL_CODE, name=name, in_=in_)


def failed_all_pattern_properties(name: str, in_: str, key: str) -> ValidationError:
    if in_:
        message = "%s.%s in %s failed all pattern properties" % (name, key, in_)
    else:
        message = "%s.%s failed all pattern properties" % (name, key)
    return ValidationError(
        message, code=FAILED_ALL_PATTERN_PROPS_CODE, name=name, in_=in_, value=key
    )