"""Validation of data against a JSON schema."""

from __future__ import annotations

import dataclasses
import json
import math
import numbers
import re
import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional, Set

from .debug import debug_log
from .formats import DEFAULT_FORMATS, FormatRegistry, FormatValidator
from .helpers import INTEGER_TYPE, NULL_TYPE, NUMBER_TYPE, Kind, kind_of
from .messages import (
    CompositeError,
    ValidationError,
    invalid_schema_provided_msg,
    invalid_type,
    invalid_type_conversion_msg,
)
from .object_validator import ObjectValidator
from .options import Option, SchemaValidatorOptions
from .props import SchemaPropsValidator
from .result import Result
from .rexp import compile_regexp
from .slice_validator import SchemaSliceValidator

_MULTIPLE_OF_CODE = 602
_MAX_FAIL_CODE = 603
_MIN_FAIL_CODE = 604
_TOO_LONG_CODE = 605
_TOO_SHORT_CODE = 606
_PATTERN_FAIL_CODE = 607
_ENUM_FAIL_CODE = 608

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class _RefError(Exception):
    """A $ref that cannot be resolved."""


def _resolve_pointer(root: Any, ref: Any) -> Any:
    if not isinstance(ref, str):
        raise _RefError(f"invalid $ref {ref!r}")
    if not ref.startswith("#"):
        raise _RefError(f"cannot resolve remote reference {ref!r}")
    fragment = urllib.parse.unquote(ref[1:])
    if not fragment:
        return root
    if not fragment.startswith("/"):
        raise _RefError(f"invalid JSON pointer {fragment!r}")
    node = root
    for raw in fragment[1:].split("/"):
        segment = raw.replace("~1", "/").replace("~0", "~")
        if isinstance(node, Mapping):
            if segment not in node:
                raise _RefError(f'object has no field "{segment}"')
            node = node[segment]
        elif isinstance(node, (list, tuple)):
            if not segment.isdigit() or int(segment) >= len(node):
                raise _RefError(f'index "{segment}" is out of range')
            node = node[int(segment)]
        else:
            raise _RefError(f'cannot look up "{segment}" in {type(node).__name__}')
    return node


def _expand(schema: Any, root: Any) -> Any:
    seen: Set[int] = set()
    while isinstance(schema, Mapping) and "$ref" in schema:
        if id(schema) in seen:
            raise _RefError(f"circular $ref {schema['$ref']!r}")
        seen.add(id(schema))
        schema = _resolve_pointer(root, schema["$ref"])
    return schema


def _schema_types(schema: Mapping) -> List[str]:
    declared = schema.get("type")
    if declared is None:
        return []
    if isinstance(declared, str):
        return [declared]
    return [t for t in declared if isinstance(t, str)]


def _located(path: str, in_: str) -> str:
    return f"{path} in {in_}" if in_ else path


def _fmt_number(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (float, Decimal)):
        number = float(value)
        if math.isfinite(number) and number.is_integer():
            return str(int(number))
        return repr(number)
    return str(value)


def _normalized(value: Any) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, (numbers.Real, Decimal)):
        number = float(value)
        if math.isfinite(number) and number.is_integer():
            return int(number)
        return number
    if isinstance(value, Mapping):
        return {str(k): _normalized(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalized(v) for v in value]
    return value


def _canonical(value: Any) -> str:
    return json.dumps(_normalized(value), sort_keys=True, default=repr)


def _is_whole(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite() and value == value.to_integral_value()
    number = float(value)
    return math.isfinite(number) and number.is_integer()


def _json_types(value: Any) -> Set[str]:
    if isinstance(value, bool):
        return {"boolean"}
    if isinstance(value, numbers.Integral):
        return {INTEGER_TYPE, NUMBER_TYPE}
    if isinstance(value, (numbers.Real, Decimal)):
        return {INTEGER_TYPE, NUMBER_TYPE} if _is_whole(value) else {NUMBER_TYPE}
    if isinstance(value, str):
        return {"string"}
    if isinstance(value, Mapping):
        return {"object"}
    if isinstance(value, (list, tuple)):
        return {"array"}
    if isinstance(value, (bytes, bytearray)) or hasattr(value, "read"):
        return {"file"}
    return set()


def _as_comparable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


@dataclass
class _TypeValidator:
    types: List[str]
    nullable: bool
    path: str
    in_: str

    def applies(self, source: Any, kind: Kind) -> bool:
        return isinstance(source, Mapping)

    def validate(self, data: Any) -> Optional[Result]:
        if not self.types:
            return None
        type_name = ",".join(self.types)
        if data is None:
            if self.nullable or NULL_TYPE in self.types:
                return None
            return Result(errors=[invalid_type(self.path, self.in_, type_name, None)])
        if _json_types(data) & set(self.types):
            return None
        return Result(errors=[invalid_type(self.path, self.in_, type_name, data)])


@dataclass
class _StringValidator:
    path: str
    in_: str
    max_length: Optional[int]
    min_length: Optional[int]
    pattern: Optional[str]

    def applies(self, source: Any, kind: Kind) -> bool:
        return isinstance(source, Mapping) and kind == Kind.STRING

    def validate(self, data: Any) -> Optional[Result]:
        result = Result()
        where = _located(self.path, self.in_)
        length = len(data)
        if self.max_length is not None and length > self.max_length:
            result.add_errors(
                ValidationError(
                    f"{where} should be at most {self.max_length} chars long",
                    code=_TOO_LONG_CODE,
                    name=self.path,
                    in_=self.in_,
                    value=data,
                )
            )
        if self.min_length is not None and length < self.min_length:
            result.add_errors(
                ValidationError(
                    f"{where} should be at least {self.min_length} chars long",
                    code=_TOO_SHORT_CODE,
                    name=self.path,
                    in_=self.in_,
                    value=data,
                )
            )
        if self.pattern:
            try:
                matched = compile_regexp(self.pattern).search(data) is not None
            except re.error:
                matched = False
            if not matched:
                result.add_errors(
                    ValidationError(
                        f"{where} should match '{self.pattern}'",
                        code=_PATTERN_FAIL_CODE,
                        name=self.path,
                        in_=self.in_,
                        value=data,
                    )
                )
        return result if result.has_errors() else None


@dataclass
class _NumberValidator:
    path: str
    in_: str
    multiple_of: Any
    maximum: Any
    exclusive_maximum: bool
    minimum: Any
    exclusive_minimum: bool

    def applies(self, source: Any, kind: Kind) -> bool:
        return isinstance(source, Mapping) and kind in (Kind.INT, Kind.FLOAT)

    def _is_multiple(self, value: Any) -> bool:
        factor = _as_comparable(self.multiple_of)
        if isinstance(value, int) and isinstance(factor, int):
            return value % factor == 0
        quotient = float(value) / float(factor)
        if not math.isfinite(quotient):
            return False
        return abs(quotient - round(quotient)) <= 1e-9 * max(1.0, abs(quotient))

    def validate(self, data: Any) -> Optional[Result]:
        value = _as_comparable(data)
        result = Result()
        where = _located(self.path, self.in_)
        if self.multiple_of is not None and _as_comparable(self.multiple_of) > 0:
            if not self._is_multiple(value):
                result.add_errors(
                    ValidationError(
                        f"{where} should be a multiple of {_fmt_number(self.multiple_of)}",
                        code=_MULTIPLE_OF_CODE,
                        name=self.path,
                        in_=self.in_,
                        value=data,
                    )
                )
        if self.maximum is not None:
            limit = _as_comparable(self.maximum)
            if value > limit or (self.exclusive_maximum and value >= limit):
                relation = "less than" if self.exclusive_maximum else "less than or equal to"
                result.add_errors(
                    ValidationError(
                        f"{where} should be {relation} {_fmt_number(self.maximum)}",
                        code=_MAX_FAIL_CODE,
                        name=self.path,
                        in_=self.in_,
                        value=data,
                    )
                )
        if self.minimum is not None:
            limit = _as_comparable(self.minimum)
            if value < limit or (self.exclusive_minimum and value <= limit):
                relation = (
                    "greater than" if self.exclusive_minimum else "greater than or equal to"
                )
                result.add_errors(
                    ValidationError(
                        f"{where} should be {relation} {_fmt_number(self.minimum)}",
                        code=_MIN_FAIL_CODE,
                        name=self.path,
                        in_=self.in_,
                        value=data,
                    )
                )
        return result if result.has_errors() else None


@dataclass
class _CommonValidator:
    path: str
    in_: str
    enum: Optional[List[Any]]

    def applies(self, source: Any, kind: Kind) -> bool:
        return isinstance(source, Mapping)

    def validate(self, data: Any) -> Optional[Result]:
        if not self.enum:
            return None
        wanted = _canonical(data)
        if any(_canonical(candidate) == wanted for candidate in self.enum):
            return None
        allowed = json.dumps(list(self.enum), default=repr)
        error = ValidationError(
            f"{_located(self.path, self.in_)} should be one of {allowed}",
            code=_ENUM_FAIL_CODE,
            name=self.path,
            in_=self.in_,
            value=data,
        )
        return Result(errors=[error])


def _to_dynamic(data: Any) -> Any:
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return dataclasses.asdict(data)
    if isinstance(data, Mapping) and not isinstance(data, dict):
        return dict(data)
    if kind_of(data) == Kind.STRUCT and not isinstance(data, Decimal):
        if hasattr(data, "__dict__"):
            return {k: v for k, v in vars(data).items() if not k.startswith("_")}
        raise TypeError(f"cannot validate a value of type {type(data).__name__}")
    return data


def _decimal_to_number(value: Decimal, integer: bool) -> Any:
    text = str(value)
    if integer:
        if not re.fullmatch(r"[-+]?\d+", text):
            raise ValueError(f'parsing "{text}": invalid syntax')
        number = int(text)
        if not _INT64_MIN <= number <= _INT64_MAX:
            raise ValueError(f'parsing "{text}": value out of range')
        return number
    converted = float(value)
    if math.isinf(converted) and not value.is_infinite():
        raise ValueError(f'parsing "{text}": value out of range')
    return converted


@dataclass
class SchemaValidator:
    """Validates data against a JSON schema given as a dict.

    A $ref at the top of the schema is resolved against root, which is the
    schema itself when not given; an unresolvable one raises InvalidSchemaError.
    """

    schema: Any
    root: Any = None
    path: str = ""
    known_formats: FormatRegistry = field(default_factory=lambda: DEFAULT_FORMATS)
    options: SchemaValidatorOptions = field(default_factory=SchemaValidatorOptions)
    in_: str = "body"

    def __post_init__(self) -> None:
        if self.root is None:
            self.root = self.schema
        if self.known_formats is None:
            self.known_formats = DEFAULT_FORMATS
        try:
            self.schema = _expand(self.schema, self.root)
        except _RefError as err:
            raise invalid_schema_provided_msg(err) from None
        if not isinstance(self.schema, Mapping):
            raise invalid_schema_provided_msg(
                f"a schema must be an object, not {type(self.schema).__name__}"
            )

    def applies(self, source: Any, kind: Kind) -> bool:
        """True when source is a schema."""
        return isinstance(source, Mapping)

    def _validators(self) -> List[Any]:
        schema = self.schema
        nullable = bool(schema.get("x-nullable") or schema.get("nullable"))
        return [
            _TypeValidator(_schema_types(schema), nullable, self.path, self.in_),
            SchemaPropsValidator(
                path=self.path,
                in_=self.in_,
                all_of=schema.get("allOf") or [],
                one_of=schema.get("oneOf") or [],
                any_of=schema.get("anyOf") or [],
                not_=schema.get("not"),
                dependencies=schema.get("dependencies"),
                root=self.root,
                known_formats=self.known_formats,
                options=self.options,
            ),
            _StringValidator(
                self.path,
                self.in_,
                schema.get("maxLength"),
                schema.get("minLength"),
                schema.get("pattern"),
            ),
            FormatValidator(
                format=schema.get("format") or "",
                path=self.path,
                in_=self.in_,
                known_formats=self.known_formats,
            ),
            _NumberValidator(
                self.path,
                self.in_,
                schema.get("multipleOf"),
                schema.get("maximum"),
                bool(schema.get("exclusiveMaximum")),
                schema.get("minimum"),
                bool(schema.get("exclusiveMinimum")),
            ),
            SchemaSliceValidator(
                path=self.path,
                in_=self.in_,
                max_items=schema.get("maxItems"),
                min_items=schema.get("minItems"),
                unique_items=bool(schema.get("uniqueItems")),
                additional_items=schema.get("additionalItems"),
                items=schema.get("items"),
                root=self.root,
                known_formats=self.known_formats,
                options=self.options,
            ),
            _CommonValidator(self.path, self.in_, schema.get("enum")),
            ObjectValidator(
                path=self.path,
                in_=self.in_,
                max_properties=schema.get("maxProperties"),
                min_properties=schema.get("minProperties"),
                required=schema.get("required") or [],
                properties=schema.get("properties") or {},
                additional_properties=schema.get("additionalProperties"),
                pattern_properties=schema.get("patternProperties") or {},
                root=self.root,
                known_formats=self.known_formats,
                options=self.options,
            ),
        ]

    def validate(self, data: Any) -> Result:
        """Validate data against the schema and return the result."""
        result = Result(data=data)
        result.add_root_object_schemata(self.schema)
        validators = self._validators()

        if data is None:
            result.merge(validators[0].validate(None))
            result.merge(validators[6].validate(None))
            return result

        value = _to_dynamic(data)
        kind = kind_of(value)
        if isinstance(value, Decimal):
            types = _schema_types(self.schema)
            if INTEGER_TYPE in types or NUMBER_TYPE in types:
                try:
                    value = _decimal_to_number(value, INTEGER_TYPE in types)
                except ValueError as err:
                    result.add_errors(invalid_type_conversion_msg(self.path, err))
                    result.inc()
                    return result
                kind = kind_of(value)
            else:
                kind = Kind.FLOAT

        for validator in validators:
            if not validator.applies(self.schema, kind):
                debug_log("%s does not apply for %s", type(validator).__name__, kind)
                continue
            result.merge(validator.validate(value))
            result.inc()
        result.inc()
        return result


def new_schema_validator(
    schema: Any,
    root_schema: Any,
    root: str,
    formats: Optional[FormatRegistry],
    *args: Option,
) -> Optional[SchemaValidator]:
    """Create a validator for schema, or None when there is no schema."""
    if schema is None:
        return None
    options = SchemaValidatorOptions()
    for option in args:
        option(options)
    return SchemaValidator(
        schema=schema,
        root=root_schema,
        path=root,
        known_formats=formats if formats is not None else DEFAULT_FORMATS,
        options=options,
    )


def against_schema(
    schema: Any,
    data: Any,
    formats: Optional[FormatRegistry] = None,
    *args: Option,
) -> None:
    """Validate data against schema, raising CompositeError when it is invalid."""
    validator = new_schema_validator(schema, None, "", formats, *args)
    if validator is None:
        return
    result = validator.validate(data)
    if result.has_errors():
        raise CompositeError(result.errors)